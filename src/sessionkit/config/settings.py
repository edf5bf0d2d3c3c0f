"""Pydantic settings configuration for the session service."""

from enum import Enum
from functools import lru_cache
from typing import Any, Literal

from pydantic import BaseModel, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    """Valid logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Environment(str, Enum):
    """Deployment environments."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


class StorageBackend(str, Enum):
    """Available session persistence backends."""

    MEMORY = "memory"
    FILE = "file"


class CookieOptions(BaseModel):
    """Attribute set written with the session cookie."""

    path: str = "/"
    http_only: bool = True
    secure: bool = False
    same_site: Literal["lax", "strict", "none"] = "lax"
    max_age: int | None = None
    expires: int | None = None
    domain: str | None = None

    def as_kwargs(self) -> dict[str, Any]:
        """Map the options onto Starlette's ``Response.set_cookie`` arguments."""
        return {
            "path": self.path,
            "httponly": self.http_only,
            "secure": self.secure,
            "samesite": self.same_site,
            "max_age": self.max_age,
            "expires": self.expires,
            "domain": self.domain,
        }


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SESSION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server settings
    host: str = "0.0.0.0"
    port: int = 9020
    log_level: LogLevel = LogLevel.INFO
    environment: Environment = Environment.DEVELOPMENT

    # Secret mixed into every session identifier
    secret_token: SecretStr = SecretStr("")
    ssl_enabled: bool = False

    # Cookie settings
    cookie_name: str = "__geniesid"
    cookie_path: str = "/"
    cookie_http_only: bool = True
    cookie_same_site: Literal["lax", "strict", "none"] = "lax"
    cookie_max_age: int | None = None
    cookie_domain: str | None = None

    # Storage settings
    storage_backend: StorageBackend = StorageBackend.MEMORY
    storage_path: str = "./sessions"
    session_timeout_min: int = 30

    # Observability settings
    audit_enabled: bool = True
    audit_log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        """Whether the service runs as a production deployment."""
        return self.environment == Environment.PRODUCTION

    def cookie_options(self) -> CookieOptions:
        """Build the session cookie attribute set.

        The secure flag mirrors whether the deployment serves over TLS.
        """
        return CookieOptions(
            path=self.cookie_path,
            http_only=self.cookie_http_only,
            secure=self.ssl_enabled,
            same_site=self.cookie_same_site,
            max_age=self.cookie_max_age,
            domain=self.cookie_domain,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
