"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studyseries.config import Settings, configure_logging, get_settings
from studyseries.database import dispose_engine, initialize_database
from studyseries.infrastructure.common.error_handlers import register_exception_handlers
from studyseries.infrastructure.study.routers import (
    flashcard_series_router,
    mcq_series_router,
    table_series_router,
)

logger = structlog.get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.ENVIRONMENT)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        initialize_database(settings)
        logger.info(
            "application_started",
            environment=settings.ENVIRONMENT,
            session_start_policy=settings.SESSION_START_POLICY,
        )
        yield
        dispose_engine()
        logger.info("application_stopped")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    for router in (flashcard_series_router, mcq_series_router, table_series_router):
        app.include_router(router, prefix=settings.API_V1_PREFIX)

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
