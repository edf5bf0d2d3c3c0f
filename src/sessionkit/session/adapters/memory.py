"""In-memory session adapter with TTL expiration."""

import copy
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from sessionkit.session.adapters.base import SessionAdapter
from sessionkit.session.state import Session

logger = logging.getLogger(__name__)


@dataclass
class _StoredSession:
    """Stored session data plus its last activity timestamp."""

    data: dict[str, Any]
    last_activity: datetime = field(default_factory=datetime.now)

    def touch(self) -> None:
        """Update last activity timestamp."""
        self.last_activity = datetime.now()

    def is_expired(self, timeout_minutes: int) -> bool:
        """Check if the entry has been idle longer than the timeout."""
        expiry_time = self.last_activity + timedelta(minutes=timeout_minutes)
        return datetime.now() > expiry_time


class MemorySessionAdapter(SessionAdapter):
    """Thread-safe in-memory session store with TTL expiration.

    Sessions expire after a configurable period of inactivity; loading or
    persisting a session counts as activity. Stored data is deep-copied on the
    way in and out so that only ``persist`` changes what is stored.

    Note: This implementation is suitable for single-instance deployments.
    For horizontal scaling, use a shared backend.
    """

    def __init__(self, timeout_minutes: int = 30) -> None:
        """Initialize the store.

        Args:
            timeout_minutes: Number of idle minutes before a session expires.
        """
        self._sessions: dict[str, _StoredSession] = {}
        self._lock = threading.Lock()
        self._timeout_minutes = timeout_minutes

    @property
    def timeout_minutes(self) -> int:
        """Get the session timeout in minutes."""
        return self._timeout_minutes

    def load(self, session_id: str) -> Session:
        """Load a session by id.

        Expired entries are dropped and reported as an empty session.

        Args:
            session_id: The session identifier.

        Returns:
            The stored session, or an empty one if none is stored.
        """
        with self._lock:
            stored = self._sessions.get(session_id)

            if stored is None:
                return Session(session_id)

            if stored.is_expired(self._timeout_minutes):
                logger.debug(
                    "Session expired (last_activity=%s)",
                    stored.last_activity.isoformat(),
                )
                del self._sessions[session_id]
                return Session(session_id)

            stored.touch()
            return Session(session_id, copy.deepcopy(stored.data))

    def persist(self, session: Session) -> Session:
        """Store the full data mapping of a session.

        Args:
            session: The session to store.

        Returns:
            The same session.
        """
        data = copy.deepcopy(session.data)

        with self._lock:
            self._sessions[session.id] = _StoredSession(data=data)

        return session

    def delete(self, session_id: str) -> bool:
        """Delete a stored session.

        Returns:
            True if session was deleted, False if not found.
        """
        with self._lock:
            if session_id in self._sessions:
                del self._sessions[session_id]
                return True
            return False

    def cleanup_expired(self) -> int:
        """Remove all expired sessions.

        Returns:
            Number of sessions removed.
        """
        expired_ids: list[str] = []

        with self._lock:
            for session_id, stored in self._sessions.items():
                if stored.is_expired(self._timeout_minutes):
                    expired_ids.append(session_id)

            for session_id in expired_ids:
                del self._sessions[session_id]

        if expired_ids:
            logger.info("Cleaned up %d expired sessions", len(expired_ids))

        return len(expired_ids)

    def count(self) -> int:
        """Get the number of stored sessions."""
        with self._lock:
            return len(self._sessions)

    def clear(self) -> None:
        """Remove all sessions."""
        with self._lock:
            count = len(self._sessions)
            self._sessions.clear()
            if count:
                logger.info("Cleared %d sessions", count)
