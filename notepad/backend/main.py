"""
FastAPI Application Entry Point.

This is the main entry point for the notepad backend application.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notepad.backend.api import health
from notepad.backend.api.rest import router as rest_router
from notepad.backend.core.config import get_app_config, get_database_url
from notepad.backend.core.database import Database
from notepad.backend.core.exception_handlers import register_exception_handlers
from notepad.backend.core.logging import get_logger, setup_logging
from notepad.backend.core.middleware import RequestContextMiddleware

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Opens the database (schema + default categories) before the first
    request and closes it on shutdown. A Database passed to create_app
    is used as-is; otherwise one is built from configuration.
    """
    app_config = get_app_config()
    setup_logging(level=app_config.logging.level)

    database = app.state.database
    if database is None:
        database = Database(get_database_url(), echo=app_config.database.echo)
        app.state.database = database

    await database.open(
        seed_defaults=app_config.features.seed_default_categories_enabled,
    )

    logger.info(
        "Application starting",
        extra={
            "app_name": app_config.application.name,
            "env": app_config.application.environment,
        },
    )
    try:
        yield
    finally:
        await database.close()
        logger.info("Application shutting down")


def create_app(database: Database | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Database to serve from. When None, the lifespan
            creates one from database.yaml / NOTEPAD_DATABASE_URL.
    """
    app_config = get_app_config()
    app_settings = app_config.application

    docs_enabled = app_settings.docs_enabled and app_settings.debug
    app = FastAPI(
        title=app_settings.name,
        description=app_settings.description,
        version=app_settings.version,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.database = database

    app.add_middleware(
        RequestContextMiddleware,
        log_requests=app_config.features.api_request_logging,
    )

    cors_origins = app_settings.cors.origins
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    app.include_router(health.router, tags=["health"])
    app.include_router(rest_router, prefix=app_settings.api_prefix)

    return app


def get_app() -> FastAPI:
    """
    Get the application instance (lazy initialization).

    This function creates the app on first call and caches it.
    Use this instead of importing `app` directly to avoid
    import-time configuration errors.
    """
    global _app
    if _app is None:
        _app = create_app()
    return _app


# For uvicorn: `uvicorn notepad.backend.main:app`
def __getattr__(name: str) -> FastAPI:
    """Support lazy access to `app` for uvicorn compatibility."""
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
