"""Audit logging for session lifecycle events."""

from sessionkit.observability.audit import (
    SessionAuditLogger,
    configure_audit_logging,
    session_ref,
)
from sessionkit.observability.models import AuditEvent, AuditEventType

__all__ = [
    "AuditEvent",
    "AuditEventType",
    "SessionAuditLogger",
    "configure_audit_logging",
    "session_ref",
]
