"""Retrieval strategies and the sequential fallback chain.

Each strategy covers one tier of the source: static result files, the
internal loader API, JSON embedded in the results page, markup patterns on
that page, and a region-specific authoritative site. The chain tries tiers
in order and, within a tier, endpoints in order, stopping at the first
attempt that yields at least one record.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from loguru import logger

from electorate_scraper.lib.results_scraper import endpoints
from electorate_scraper.lib.results_scraper.fetcher import FetchError, ResultsFetcher
from electorate_scraper.lib.results_scraper.locator import find_record_array
from electorate_scraper.lib.results_scraper.markup import extract_embedded_payloads, extract_records_from_markup
from electorate_scraper.lib.results_scraper.models import CanonicalMemberRecord
from electorate_scraper.lib.results_scraper.record import RecordExtractor, extract_records


class StrategyTier(StrEnum):
    """Retrieval tiers, in the order the chain attempts them."""

    DIRECT_JSON = "direct_json"
    INTERNAL_API = "internal_api"
    EMBEDDED_JSON = "embedded_json"
    MARKUP = "markup"
    REGIONAL_FALLBACK = "regional_fallback"


class StrategyError(Exception):
    """Raised when one strategy attempt against one URL fails.

    Args:
        tier: Tier of the failing strategy.
        url: URL that was attempted.
        message: Human-readable error description.
    """

    def __init__(self, tier: StrategyTier, url: str, message: str) -> None:
        self.tier = tier
        self.url = url
        self.message = message
        super().__init__(f"{tier} {url}: {message}")


class BaseStrategy(ABC):
    """Abstract retrieval strategy. All tiers implement this."""

    def __init__(self, extractor: RecordExtractor | None = None) -> None:
        self._extractor = extractor or RecordExtractor()

    @property
    @abstractmethod
    def tier(self) -> StrategyTier:
        """Tier this strategy implements."""

    @abstractmethod
    def endpoints(self, region: str, period: str) -> list[str]:
        """URLs to attempt, in order, for ``(region, period)``."""

    @abstractmethod
    async def attempt(self, fetcher: ResultsFetcher, url: str) -> list[CanonicalMemberRecord]:
        """Fetch ``url`` and extract records.

        Returns:
            At least one record.

        Raises:
            StrategyError: On fetch failure, unparseable body or zero records.
        """

    def _fail(self, url: str, message: str) -> StrategyError:
        return StrategyError(self.tier, url, message)

    def _records_from_payload(self, payload: Any, url: str) -> list[CanonicalMemberRecord]:
        items = find_record_array(payload)
        logger.debug("{} located {} candidate items at {}", self.tier, len(items), url)
        return extract_records(items, url, self._extractor)

    def _require_records(self, records: list[CanonicalMemberRecord], url: str) -> list[CanonicalMemberRecord]:
        if not records:
            raise self._fail(url, "no records extracted")
        return records


class _JsonEndpointStrategy(BaseStrategy):
    async def attempt(self, fetcher: ResultsFetcher, url: str) -> list[CanonicalMemberRecord]:
        try:
            payload = await fetcher.get_json(url)
        except FetchError as exc:
            raise self._fail(url, str(exc)) from exc
        return self._require_records(self._records_from_payload(payload, url), url)


class DirectJsonStrategy(_JsonEndpointStrategy):
    """Tier A: static ``electorates.json`` / ``summary.json`` result files."""

    @property
    def tier(self) -> StrategyTier:
        return StrategyTier.DIRECT_JSON

    def endpoints(self, region: str, period: str) -> list[str]:
        return endpoints.direct_json_urls(region, period)


class InternalApiStrategy(_JsonEndpointStrategy):
    """Tier B: the results page's loader API, queried with a publish date."""

    @property
    def tier(self) -> StrategyTier:
        return StrategyTier.INTERNAL_API

    def endpoints(self, region: str, period: str) -> list[str]:
        return endpoints.internal_api_urls(region, period)


class _PageStrategy(BaseStrategy):
    async def _fetch_page(self, fetcher: ResultsFetcher, url: str) -> str:
        try:
            return await fetcher.get_text(url)
        except FetchError as exc:
            raise self._fail(url, str(exc)) from exc

    def _records_from_embedded(self, payloads: list[Any], url: str) -> list[CanonicalMemberRecord]:
        records: list[CanonicalMemberRecord] = []
        for payload in payloads:
            records.extend(self._records_from_payload(payload, url))
        return records


class EmbeddedJsonStrategy(_PageStrategy):
    """Tier C: JSON state embedded in the results page's script blocks."""

    @property
    def tier(self) -> StrategyTier:
        return StrategyTier.EMBEDDED_JSON

    def endpoints(self, region: str, period: str) -> list[str]:
        return [endpoints.results_page_url(region, period)]

    async def attempt(self, fetcher: ResultsFetcher, url: str) -> list[CanonicalMemberRecord]:
        html = await self._fetch_page(fetcher, url)
        payloads = extract_embedded_payloads(html)
        if not payloads:
            raise self._fail(url, "no embedded JSON found")
        return self._require_records(self._records_from_embedded(payloads, url), url)


class MarkupStrategy(_PageStrategy):
    """Tier D: candidate cards, result rows and articles in the page markup."""

    @property
    def tier(self) -> StrategyTier:
        return StrategyTier.MARKUP

    def endpoints(self, region: str, period: str) -> list[str]:
        return [endpoints.results_page_url(region, period)]

    async def attempt(self, fetcher: ResultsFetcher, url: str) -> list[CanonicalMemberRecord]:
        html = await self._fetch_page(fetcher, url)
        records = extract_records_from_markup(html, url, self._extractor.canonicalizer)
        return self._require_records(records, url)


class RegionalFallbackStrategy(_PageStrategy):
    """Tier E: the region's own electoral commission results site, where known.

    The body may be JSON or HTML; JSON is located directly, HTML is tried for
    embedded JSON first and markup second.
    """

    @property
    def tier(self) -> StrategyTier:
        return StrategyTier.REGIONAL_FALLBACK

    def endpoints(self, region: str, period: str) -> list[str]:
        return endpoints.regional_fallback_urls(region, period)

    async def attempt(self, fetcher: ResultsFetcher, url: str) -> list[CanonicalMemberRecord]:
        body = await self._fetch_page(fetcher, url)
        if body.lstrip().startswith(("{", "[")):
            try:
                payload = json.loads(body)
            except ValueError as exc:
                raise self._fail(url, "invalid JSON body") from exc
            return self._require_records(self._records_from_payload(payload, url), url)

        records = self._records_from_embedded(extract_embedded_payloads(body), url)
        if not records:
            records = extract_records_from_markup(body, url, self._extractor.canonicalizer)
        return self._require_records(records, url)


def default_strategies(extractor: RecordExtractor | None = None) -> list[BaseStrategy]:
    """All five tiers in attempt order, sharing one record extractor."""
    extractor = extractor or RecordExtractor()
    return [
        DirectJsonStrategy(extractor),
        InternalApiStrategy(extractor),
        EmbeddedJsonStrategy(extractor),
        MarkupStrategy(extractor),
        RegionalFallbackStrategy(extractor),
    ]


@dataclass
class ChainOutcome:
    """Result of one chain run.

    Attributes:
        records: Records from the successful attempt (empty when exhausted).
        errors: One message per failed attempt, in attempt order.
        attempts: ``(tier, url)`` for every attempt made, in order.
        succeeded_tier: Tier of the successful attempt, if any.
    """

    records: list[CanonicalMemberRecord] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    attempts: list[tuple[StrategyTier, str]] = field(default_factory=list)
    succeeded_tier: StrategyTier | None = None


async def run_strategy_chain(
    strategies: list[BaseStrategy],
    fetcher: ResultsFetcher,
    region: str,
    period: str,
) -> ChainOutcome:
    """Attempt every strategy endpoint in order until one yields records.

    Args:
        strategies: Strategies in tier order.
        fetcher: Fetcher shared by every attempt.
        region: Lowercase region code.
        period: Election year.

    Returns:
        A ChainOutcome; never raises for attempt failures, expected or not.
    """
    outcome = ChainOutcome()
    for strategy in strategies:
        for url in strategy.endpoints(region, period):
            outcome.attempts.append((strategy.tier, url))
            try:
                records = await strategy.attempt(fetcher, url)
            except StrategyError as exc:
                logger.warning("Strategy attempt failed: {}", exc)
                outcome.errors.append(str(exc))
                continue
            except Exception as exc:
                logger.exception("Unexpected failure in {} attempt at {}", strategy.tier, url)
                outcome.errors.append(str(StrategyError(strategy.tier, url, f"unexpected error: {exc}")))
                continue

            logger.info("{} yielded {} records from {}", strategy.tier, len(records), url)
            outcome.records = records
            outcome.succeeded_tier = strategy.tier
            return outcome

    logger.warning("All strategies exhausted for {} {} ({} attempts)", region, period, len(outcome.attempts))
    return outcome
