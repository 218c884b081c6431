"""Root API router with /api/v1 prefix and middleware registration."""

from fastapi import APIRouter, FastAPI

from electorate_scraper.api.middleware import ScrapeRateLimitMiddleware, setup_cors
from electorate_scraper.core.config import Settings


def create_router(settings: Settings) -> APIRouter:
    """Create the root API router with all sub-routers included.

    Args:
        settings: Application settings.

    Returns:
        Configured API router.
    """
    from electorate_scraper.api.v1.scrapes import scrapes_router

    root_router = APIRouter(prefix=settings.api_v1_prefix)
    root_router.include_router(scrapes_router)
    return root_router


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register all middleware on the FastAPI app.

    Args:
        app: The FastAPI application.
        settings: Application settings.
    """
    setup_cors(app, settings)
    app.add_middleware(
        ScrapeRateLimitMiddleware,
        path_prefix=f"{settings.api_v1_prefix}/scrapes",
        requests_per_minute=settings.scrape_rate_limit_per_minute,
    )
