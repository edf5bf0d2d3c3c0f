"""FastAPI application entry point for the session service."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from sessionkit import __version__
from sessionkit.api import session_router
from sessionkit.config import SecretToken, Settings, get_settings
from sessionkit.observability import SessionAuditLogger, configure_audit_logging
from sessionkit.session import (
    CookieBinder,
    IdentifierGenerator,
    SessionAccessor,
    SessionAdapter,
    SessionHooks,
    SessionMiddleware,
    create_adapter,
)

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    adapter: SessionAdapter | None = None,
) -> FastAPI:
    """Assemble the application and its session pipeline.

    The session components are built once here and injected into the
    middleware; nothing is registered globally.

    Args:
        settings: Settings to use; defaults to the cached environment settings.
        adapter: Persistence adapter; defaults to the configured backend.

    Returns:
        The configured FastAPI application.

    Raises:
        ConfigurationError: If the storage backend is unknown.
    """
    if settings is None:
        settings = get_settings()
    if adapter is None:
        adapter = create_adapter(settings)

    audit = SessionAuditLogger(enabled=settings.audit_enabled)
    generator = IdentifierGenerator(
        SecretToken.from_settings(settings),
        cookie_name=settings.cookie_name,
        production=settings.is_production,
        audit=audit,
    )
    accessor = SessionAccessor(adapter)
    binder = CookieBinder(generator, accessor, settings.cookie_options(), audit=audit)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler for startup and shutdown events."""
        logger.info("Starting sessionkit v%s (%s)", __version__, settings.environment.value)
        if settings.audit_enabled:
            configure_audit_logging(settings.audit_log_level)

        # Refuses to start in production without a secret token
        generator.ensure_secret()

        app.state.settings = settings
        app.state.session_adapter = adapter
        app.state.session_accessor = accessor
        app.state.session_binder = binder
        app.state.ready = True
        logger.info(
            "Session store initialized (backend=%s, cookie=%s)",
            type(adapter).__name__,
            settings.cookie_name,
        )

        yield

        app.state.ready = False
        logger.info("Shutting down sessionkit")

    app = FastAPI(
        title="Session Service",
        description="Cookie-bound request sessions with one-shot flash messages",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(SessionMiddleware, hooks=SessionHooks(binder))
    app.include_router(session_router)

    @app.get("/", response_class=JSONResponse)
    async def root() -> dict:
        """API metadata endpoint."""
        return {
            "name": "sessionkit",
            "version": __version__,
            "description": "Cookie-bound request session management",
        }

    @app.get("/health/live", response_class=JSONResponse)
    async def liveness() -> dict:
        """Kubernetes liveness probe endpoint."""
        return {"status": "ok"}

    @app.get("/health/ready", response_class=JSONResponse)
    async def readiness() -> JSONResponse:
        """Kubernetes readiness probe endpoint."""
        if not getattr(app.state, "ready", False):
            return JSONResponse(
                status_code=503,
                content={"status": "not ready", "reason": "session store not initialized"},
            )
        return JSONResponse(content={"status": "ok"})

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.value),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "sessionkit.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=True,
    )
