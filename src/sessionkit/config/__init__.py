"""Configuration module for the session service."""

from sessionkit.config.secrets import SecretToken
from sessionkit.config.settings import (
    CookieOptions,
    Environment,
    LogLevel,
    Settings,
    StorageBackend,
    get_settings,
)

__all__ = [
    "CookieOptions",
    "Environment",
    "LogLevel",
    "SecretToken",
    "Settings",
    "StorageBackend",
    "get_settings",
]
