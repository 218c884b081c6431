"""Scrape API endpoints.

POST /scrapes: run one scrape and return the ScrapeResult envelope
GET /scrapes/regions: regions with known source configuration
"""

from fastapi import APIRouter

from electorate_scraper.lib.results_scraper import ScrapeResult, scrape_electorates
from electorate_scraper.lib.results_scraper.endpoints import (
    DEFAULT_SEAT_COUNT,
    REGIONAL_FALLBACK_URLS,
    SEAT_COUNTS,
    known_periods,
    known_regions,
)
from electorate_scraper.schemas.scrape import RegionListResponse, RegionSummary, ScrapeRequest

scrapes_router = APIRouter(prefix="/scrapes", tags=["scrapes"])


@scrapes_router.post("", response_model=ScrapeResult)
async def run_scrape(request: ScrapeRequest) -> ScrapeResult:
    """Scrape one election. Failures are reported in the envelope, never as HTTP errors."""
    return await scrape_electorates(request.region_code, request.period_id)


@scrapes_router.get("/regions", response_model=RegionListResponse)
async def list_regions() -> RegionListResponse:
    """List regions with a known publish date or regional fallback. Public endpoint."""
    return RegionListResponse(
        items=[
            RegionSummary(
                region_code=region,
                periods=known_periods(region),
                total_seats=SEAT_COUNTS.get(region, DEFAULT_SEAT_COUNT),
                has_regional_fallback=region in REGIONAL_FALLBACK_URLS,
            )
            for region in known_regions()
        ]
    )
