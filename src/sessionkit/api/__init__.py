"""HTTP API for the session service."""

from sessionkit.api.endpoint import session_router

__all__ = ["session_router"]
