"""Data models for session audit logging."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class AuditEventType(str, Enum):
    """Types of audit events logged by the session subsystem."""

    SESSION_STARTED = "session_started"
    SESSION_ID_MINTED = "session_id_minted"
    FLASH_DRAINED = "flash_drained"
    EPHEMERAL_SECRET = "ephemeral_secret"


@dataclass
class AuditEvent:
    """A structured audit event for logging.

    Session ids are never logged in full; ``session_ref`` holds a short
    prefix that is enough to correlate events.
    """

    event_type: AuditEventType
    """The type of audit event."""

    timestamp: datetime
    """When the event occurred."""

    session_ref: str | None = None
    """Truncated session id for correlation."""

    metadata: dict[str, Any] = field(default_factory=dict)
    """Event-specific metadata."""

    def to_dict(self) -> dict[str, Any]:
        """Convert the audit event to a dictionary for JSON serialization.

        Returns:
            Dictionary representation of the event.
        """
        return {
            "event_type": self.event_type.value,
            "timestamp": self.timestamp.isoformat(),
            "session_ref": self.session_ref,
            **self.metadata,
        }
