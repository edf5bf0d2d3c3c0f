"""Persistence adapters for session storage."""

from sessionkit.config.settings import Settings, StorageBackend
from sessionkit.session.adapters.base import SessionAdapter
from sessionkit.session.adapters.file import FileSessionAdapter
from sessionkit.session.adapters.memory import MemorySessionAdapter
from sessionkit.session.errors import ConfigurationError


def create_adapter(settings: Settings) -> SessionAdapter:
    """Create the session adapter selected in settings.

    Raises:
        ConfigurationError: If the configured backend is unknown.
    """
    backend = settings.storage_backend
    if backend == StorageBackend.MEMORY:
        return MemorySessionAdapter(timeout_minutes=settings.session_timeout_min)
    if backend == StorageBackend.FILE:
        return FileSessionAdapter(
            settings.storage_path,
            timeout_minutes=settings.session_timeout_min,
        )
    raise ConfigurationError(f"Unknown storage backend: {backend}")


__all__ = [
    "FileSessionAdapter",
    "MemorySessionAdapter",
    "SessionAdapter",
    "create_adapter",
]
