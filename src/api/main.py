"""FastAPI application factory for the costume rental service.

``create_app`` wires logging and tracing, exception handlers, middleware and
routers. Middleware run in reverse order of registration, so the last one
added sees the request first.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import Depends, FastAPI
from loguru import logger
from sqlalchemy.pool import QueuePool

from src.api.middleware.error_handler import register_exception_handlers
from src.api.middleware.request_context import RequestContextMiddleware
from src.api.middleware.request_logging import RequestLoggingMiddleware
from src.api.middleware.security_headers import SecurityHeadersMiddleware
from src.api.routers import auth, cart, costumes, rentals
from src.api.utils.responses import ORJSONResponse
from src.core.config import Settings, get_settings
from src.core.logging import setup_logging
from src.core.observability import instrument_app, setup_tracing
from src.infrastructure.database.session import (
    check_database_connection,
    close_database,
    get_engine,
)

OPENAPI_TAGS = [
    {"name": "costumes", "description": "Browse and list costumes"},
    {"name": "cart", "description": "Costumes the user intends to rent"},
    {"name": "rentals", "description": "Rental history and checkout"},
    {"name": "auth", "description": "Registration and bearer tokens"},
    {"name": "monitoring", "description": "Health and build information"},
]


@asynccontextmanager
async def lifespan(app_instance: FastAPI) -> AsyncGenerator[None]:
    """Verify the database on startup and dispose the engine on shutdown.

    Raises:
        RuntimeError: If the database is unreachable at startup.
    """
    is_healthy, error_msg = await check_database_connection()
    if not is_healthy:
        logger.error("Database connection failed during startup: {}", error_msg)
        msg = f"Database connection failed: {error_msg}"
        raise RuntimeError(msg)

    logger.info(
        "Application startup complete - {} v{}",
        app_instance.title,
        app_instance.version,
    )

    yield

    logger.info("Application shutdown initiated")
    await close_database()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of ``get_settings()``.

    Returns:
        FastAPI: Configured application.
    """
    if settings is None:
        settings = get_settings()

    setup_logging(settings)
    setup_tracing(settings)

    application = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Browse costumes, manage a cart and check out rentals.",
        debug=settings.debug,
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
        openapi_tags=OPENAPI_TAGS,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    register_exception_handlers(application)

    application.add_middleware(RequestLoggingMiddleware, log_config=settings.log_config)
    application.add_middleware(RequestContextMiddleware)
    application.add_middleware(SecurityHeadersMiddleware)

    application.include_router(costumes.router)
    application.include_router(cart.router)
    application.include_router(rentals.router)
    application.include_router(auth.router)

    @application.get("/health", tags=["monitoring"])
    async def health() -> dict[str, object]:
        """Liveness and database reachability.

        Reports ``degraded`` instead of failing when the database is down.
        """
        is_healthy, error_msg = await check_database_connection()
        if not is_healthy:
            logger.warning("Database health check failed: {}", error_msg)
            return {"status": "degraded", "database": False}

        pool = get_engine().pool
        if isinstance(pool, QueuePool):
            logger.bind(
                metric_type="db.pool.health",
                checked_out=pool.checkedout(),
                size=pool.size(),
                overflow=pool.overflow(),
            ).debug("Database pool health check")

        return {"status": "healthy", "database": True}

    @application.get("/info", tags=["monitoring"])
    async def info(
        app_settings: Annotated[Settings, Depends(get_settings)],
    ) -> dict[str, Any]:
        return {
            "app_name": app_settings.app_name,
            "version": app_settings.app_version,
            "environment": app_settings.environment,
            "debug": app_settings.debug,
        }

    instrument_app(application, settings)

    return application


app = create_app()
