"""File-backed session adapter storing one JSON document per session."""

import json
import logging
import os
import re
import tempfile
import time
from pathlib import Path

from sessionkit.session.adapters.base import SessionAdapter
from sessionkit.session.state import Session

logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]{1,128}$")


class FileSessionAdapter(SessionAdapter):
    """Stores each session as ``<id>.json`` under a directory.

    Values must be JSON serializable; ``persist`` raises ``TypeError``
    otherwise. A file's modification time drives inactivity expiry.

    All I/O is blocking. ``SessionMiddleware`` runs session establishment in
    the threadpool, and route handlers that touch the session should be plain
    ``def`` functions so FastAPI does the same for them.
    """

    def __init__(self, directory: str | Path, timeout_minutes: int = 30) -> None:
        path = Path(directory)
        if not path.is_absolute():
            path = Path.cwd() / path
        path.mkdir(parents=True, exist_ok=True)
        self._directory = path
        self._timeout_minutes = timeout_minutes

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def timeout_minutes(self) -> int:
        return self._timeout_minutes

    def accepts_id(self, session_id: str) -> bool:
        # Ids end up in file names; anything but a plain token is refused
        return bool(_SAFE_ID.match(session_id))

    def _path_for(self, session_id: str) -> Path:
        if not self.accepts_id(session_id):
            raise ValueError(f"Invalid session id for file storage: {session_id[:16]!r}")
        return self._directory / f"{session_id}.json"

    def _is_expired(self, path: Path) -> bool:
        age_seconds = time.time() - path.stat().st_mtime
        return age_seconds > self._timeout_minutes * 60

    def load(self, session_id: str) -> Session:
        path = self._path_for(session_id)

        if not path.exists():
            return Session(session_id)

        if self._is_expired(path):
            logger.debug("Session file expired: %s", path.name)
            path.unlink(missing_ok=True)
            return Session(session_id)

        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

        # Reading counts as activity
        os.utime(path)
        return Session(session_id, data)

    def persist(self, session: Session) -> Session:
        path = self._path_for(session.id)
        payload = json.dumps(session.data)

        fd, tmp_name = tempfile.mkstemp(dir=self._directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        return session

    def delete(self, session_id: str) -> bool:
        """Delete a stored session.

        Returns:
            True if a file was removed.
        """
        path = self._path_for(session_id)
        if path.exists():
            path.unlink()
            return True
        return False

    def cleanup_expired(self) -> int:
        """Remove all expired session files.

        Returns:
            Number of files removed.
        """
        removed = 0
        for path in self._directory.glob("*.json"):
            if self._is_expired(path):
                path.unlink(missing_ok=True)
                removed += 1

        if removed:
            logger.info("Cleaned up %d expired session files", removed)

        return removed
