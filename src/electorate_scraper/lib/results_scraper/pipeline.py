"""Scrape orchestrator: validate input, run the strategy chain, build the envelope."""

import asyncio

import httpx
from loguru import logger

from electorate_scraper.core.config import Settings, get_settings
from electorate_scraper.lib.results_scraper.dedupe import dedupe_records
from electorate_scraper.lib.results_scraper.endpoints import results_page_url
from electorate_scraper.lib.results_scraper.fetcher import ResultsFetcher
from electorate_scraper.lib.results_scraper.models import ScrapeResult
from electorate_scraper.lib.results_scraper.strategies import (
    BaseStrategy,
    ChainOutcome,
    default_strategies,
    run_strategy_chain,
)

REGION_REQUIRED = "Region code is required"
PERIOD_REQUIRED = "Election period is required"


async def _run_chain(
    region: str,
    period: str,
    strategies: list[BaseStrategy],
    client: httpx.AsyncClient | None,
    settings: Settings,
) -> ChainOutcome:
    async with ResultsFetcher(
        client,
        user_agent=settings.scrape_user_agent,
        timeout=settings.scrape_timeout_seconds,
        referer=results_page_url(region, period),
    ) as fetcher:
        return await run_strategy_chain(strategies, fetcher, region, period)


async def scrape_electorates(
    region_code: str | None,
    period_id: str | None,
    *,
    timeout: float | None = None,
    strategies: list[BaseStrategy] | None = None,
    client: httpx.AsyncClient | None = None,
    settings: Settings | None = None,
) -> ScrapeResult:
    """Scrape and normalize per-electorate results for one election.

    Never raises: invalid input, exhausted strategies, the overall timeout
    and unexpected errors are all reported through the returned envelope.

    Args:
        region_code: Jurisdiction code, e.g. ``"qld"`` (case-insensitive).
        period_id: Election year, e.g. ``"2024"``.
        timeout: Overall timeout in seconds for the whole run. Defaults to
            ``Settings.scrape_timeout_seconds``.
        strategies: Strategy chain to run. Defaults to every tier.
        client: Optional HTTP client; it is not closed by this call.
        settings: Application settings. Defaults to ``get_settings()``.

    Returns:
        ScrapeResult with deduplicated records and one error per failed attempt.
    """
    region = (region_code or "").strip().lower()
    period = (period_id or "").strip()
    if not region:
        return ScrapeResult.failure([REGION_REQUIRED])
    if not period:
        return ScrapeResult.failure([PERIOD_REQUIRED])

    settings = settings or get_settings()
    if timeout is None:
        timeout = settings.scrape_timeout_seconds
    if strategies is None:
        strategies = default_strategies()

    logger.info("Scraping electorate results for {} {}", region, period)
    try:
        outcome = await asyncio.wait_for(
            _run_chain(region, period, strategies, client, settings),
            timeout=timeout,
        )
    except TimeoutError:
        msg = f"Scrape of {region} {period} timed out after {timeout:g} seconds"
        logger.warning(msg)
        return ScrapeResult.failure([msg])
    except Exception as exc:
        logger.exception("Unexpected error scraping {} {}", region, period)
        return ScrapeResult.failure([f"Unexpected error scraping {region} {period}: {exc}"])

    records = dedupe_records(outcome.records)
    result = ScrapeResult.from_records(records, outcome.errors)
    logger.info(
        "Scrape of {} {} finished: {} records, {} errors",
        region,
        period,
        result.total_found,
        len(result.errors),
    )
    return result
