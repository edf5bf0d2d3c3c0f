"""Structured audit logging for session lifecycle events.

Events are emitted as JSON on the dedicated ``sessionkit.audit`` logger so
they can be routed separately from application logs.
"""

import json
import logging
from datetime import UTC, datetime
from typing import Any

from sessionkit.observability.models import AuditEvent, AuditEventType

# Dedicated audit logger - separate from application logs
audit_logger = logging.getLogger("sessionkit.audit")

SESSION_REF_LENGTH = 8


def session_ref(session_id: str | None) -> str | None:
    """Shorten a session id to a loggable reference."""
    if not session_id:
        return None
    return session_id[:SESSION_REF_LENGTH]


class SessionAuditLogger:
    """Structured audit logger for session events.

    Usage:
        audit = SessionAuditLogger()
        audit.log_session_started(session_id, cookie_present=False)
    """

    def __init__(self, enabled: bool = True) -> None:
        """Initialize the audit logger.

        Args:
            enabled: Whether audit logging is enabled.
        """
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    def _emit(self, event: AuditEvent) -> None:
        if not self._enabled:
            return

        try:
            audit_logger.info(json.dumps(event.to_dict(), default=str))
        except Exception as e:
            # Don't let audit logging failures affect request processing
            logging.getLogger(__name__).warning("Failed to emit audit event: %s", e)

    def _create_event(
        self,
        event_type: AuditEventType,
        session_id: str | None = None,
        **metadata: Any,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=event_type,
            timestamp=datetime.now(UTC),
            session_ref=session_ref(session_id),
            metadata=metadata,
        )

    def log_session_started(self, session_id: str, cookie_present: bool) -> None:
        """Log that a session was established for a request.

        Args:
            session_id: The session id.
            cookie_present: Whether the client presented the session cookie.
        """
        self._emit(
            self._create_event(
                AuditEventType.SESSION_STARTED,
                session_id,
                cookie_present=cookie_present,
            )
        )

    def log_id_minted(self, session_id: str) -> None:
        """Log that a new session id was generated."""
        self._emit(self._create_event(AuditEventType.SESSION_ID_MINTED, session_id))

    def log_flash_drained(self, session_id: str, length: int) -> None:
        """Log that a pending flash message was surfaced to a request.

        Args:
            session_id: The session id.
            length: Length of the flash value's string form.
        """
        self._emit(
            self._create_event(
                AuditEventType.FLASH_DRAINED,
                session_id,
                length=length,
            )
        )

    def log_ephemeral_secret(self) -> None:
        """Log that a temporary secret token was installed."""
        self._emit(self._create_event(AuditEventType.EPHEMERAL_SECRET))


def configure_audit_logging(level: str = "INFO") -> None:
    """Configure the audit logger with its own stream handler.

    Args:
        level: The logging level for audit events.
    """
    audit_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Only add handler if not already configured
    if not audit_logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(getattr(logging, level.upper(), logging.INFO))

        # Simple format - the message is already JSON
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)

        audit_logger.addHandler(handler)

    # Prevent propagation to root logger to avoid duplicate output
    audit_logger.propagate = False
