"""FastAPI application factory.

Creates the FastAPI app with lifespan management and OpenAPI metadata.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from electorate_scraper.core.config import get_settings
from electorate_scraper.core.logging import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Configure logging on startup. Scrapes open no database connections."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_dir, json_logs=settings.log_json)
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Electorate Scraper",
        description="Scrapes and normalizes per-electorate Australian election results",
        version="0.1.0",
        lifespan=lifespan,
    )

    from electorate_scraper.api.router import create_router, setup_middleware

    setup_middleware(app, settings)
    app.include_router(create_router(settings))

    return app
