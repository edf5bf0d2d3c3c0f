"""Exceptions raised by the session subsystem."""


class SessionError(Exception):
    """Base class for session errors."""

    pass


class ConfigurationError(SessionError):
    """Raised when the session subsystem is misconfigured.

    This is fatal: the service must not serve traffic until it is resolved.
    """

    pass


class SessionNotStartedError(SessionError):
    """Raised when the current session is requested before one was started."""

    pass
