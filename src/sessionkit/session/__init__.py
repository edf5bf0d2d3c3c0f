"""Cookie-bound session management."""

from sessionkit.session.accessor import SessionAccessor
from sessionkit.session.adapters import (
    FileSessionAdapter,
    MemorySessionAdapter,
    SessionAdapter,
    create_adapter,
)
from sessionkit.session.binder import CookieBinder
from sessionkit.session.errors import ConfigurationError, SessionError, SessionNotStartedError
from sessionkit.session.flash import drain_flash, get_flash, has_flash, set_flash
from sessionkit.session.identifier import IdentifierGenerator, response_cookies
from sessionkit.session.middleware import SessionHooks, SessionMiddleware
from sessionkit.session.state import (
    FLASH_KEY,
    PARAMS_FLASH_KEY,
    PARAMS_SESSION_KEY,
    RequestParams,
    Session,
)

__all__ = [
    "FLASH_KEY",
    "PARAMS_FLASH_KEY",
    "PARAMS_SESSION_KEY",
    "ConfigurationError",
    "CookieBinder",
    "FileSessionAdapter",
    "IdentifierGenerator",
    "MemorySessionAdapter",
    "RequestParams",
    "Session",
    "SessionAccessor",
    "SessionAdapter",
    "SessionError",
    "SessionHooks",
    "SessionMiddleware",
    "SessionNotStartedError",
    "create_adapter",
    "drain_flash",
    "get_flash",
    "has_flash",
    "response_cookies",
    "set_flash",
]
