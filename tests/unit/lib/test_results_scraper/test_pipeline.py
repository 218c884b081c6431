"""Unit tests for the scrape orchestrator."""

import asyncio

import httpx
import pytest

from electorate_scraper.lib.results_scraper.models import CanonicalMemberRecord
from electorate_scraper.lib.results_scraper.pipeline import PERIOD_REQUIRED, REGION_REQUIRED, scrape_electorates
from electorate_scraper.lib.results_scraper.strategies import BaseStrategy, StrategyTier


class StubStrategy(BaseStrategy):
    """Strategy with a single endpoint and a scripted attempt."""

    def __init__(self, behaviour) -> None:
        super().__init__()
        self.behaviour = behaviour
        self.seen: list[tuple[str, str]] = []

    @property
    def tier(self) -> StrategyTier:
        return StrategyTier.DIRECT_JSON

    def endpoints(self, region: str, period: str) -> list[str]:
        self.seen.append((region, period))
        return [f"https://example.com/{region}/{period}"]

    async def attempt(self, fetcher, url: str) -> list[CanonicalMemberRecord]:
        return await self.behaviour(url)


def _recording_client() -> tuple[httpx.AsyncClient, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(404)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler)), requests


class TestInputValidation:
    """Tests for input validation before any network call."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("region", ["", "   ", None])
    async def test_missing_region(self, settings, region):
        client, requests = _recording_client()

        result = await scrape_electorates(region, "2024", client=client, settings=settings)

        assert result.success is False
        assert result.errors == [REGION_REQUIRED]
        assert result.total_found == 0
        assert requests == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("period", ["", "  ", None])
    async def test_missing_period(self, settings, period):
        client, requests = _recording_client()

        result = await scrape_electorates("qld", period, client=client, settings=settings)

        assert result.errors == [PERIOD_REQUIRED]
        assert requests == []

    @pytest.mark.asyncio
    async def test_region_checked_before_period(self, settings):
        result = await scrape_electorates("", "", settings=settings)
        assert result.errors == [REGION_REQUIRED]

    @pytest.mark.asyncio
    async def test_region_normalized(self, settings, make_record):
        async def succeed(url):
            return [make_record()]

        strategy = StubStrategy(succeed)
        client, _ = _recording_client()

        await scrape_electorates(" QLD ", " 2024 ", strategies=[strategy], client=client, settings=settings)

        assert strategy.seen == [("qld", "2024")]


class TestScrapeElectorates:
    """Tests for scrape_electorates() outcomes."""

    @pytest.mark.asyncio
    async def test_exhausted_chain(self, settings):
        client, requests = _recording_client()

        result = await scrape_electorates("nsw", "2023", client=client, settings=settings)

        assert result.success is False
        assert result.records == []
        assert len(result.errors) == 5
        assert len(requests) == 5

    @pytest.mark.asyncio
    async def test_success_dedupes(self, settings, make_record):
        async def duplicates(url):
            return [make_record(), make_record(total_votes_cast=1), make_record(electorate_name="Cook")]

        client, _ = _recording_client()
        result = await scrape_electorates(
            "qld", "2024", strategies=[StubStrategy(duplicates)], client=client, settings=settings
        )

        assert result.success is True
        assert result.total_found == 2
        assert result.records[0].total_votes_cast == 50000
        assert result.errors == []

    @pytest.mark.asyncio
    async def test_timeout(self, settings):
        async def hang(url):
            await asyncio.sleep(10)
            return []

        client, _ = _recording_client()
        result = await scrape_electorates(
            "qld", "2024", timeout=0.05, strategies=[StubStrategy(hang)], client=client, settings=settings
        )

        assert result.success is False
        assert result.errors == ["Scrape of qld 2024 timed out after 0.05 seconds"]

    @pytest.mark.asyncio
    async def test_unexpected_attempt_error_is_per_attempt(self, settings, make_record):
        async def explode(url):
            raise RuntimeError("boom")

        async def succeed(url):
            return [make_record()]

        client, _ = _recording_client()
        result = await scrape_electorates(
            "qld", "2024", strategies=[StubStrategy(explode), StubStrategy(succeed)], client=client, settings=settings
        )

        assert result.success is True
        assert result.total_found == 1
        assert result.errors == ["direct_json https://example.com/qld/2024: unexpected error: boom"]

    @pytest.mark.asyncio
    async def test_unexpected_error_outside_attempts_captured(self, settings):
        class BrokenEndpoints(StubStrategy):
            def endpoints(self, region, period):
                raise RuntimeError("boom")

        async def never(url):
            raise AssertionError("attempt should not run")

        client, _ = _recording_client()
        result = await scrape_electorates(
            "qld", "2024", strategies=[BrokenEndpoints(never)], client=client, settings=settings
        )

        assert result.success is False
        assert result.errors == ["Unexpected error scraping qld 2024: boom"]

    @pytest.mark.asyncio
    async def test_injected_client_left_open(self, settings):
        client, _ = _recording_client()

        await scrape_electorates("nsw", "2023", client=client, settings=settings)

        assert client.is_closed is False
        await client.aclose()

    @pytest.mark.asyncio
    async def test_concurrent_runs_are_isolated(self, settings, make_record):
        async def per_region(url):
            await asyncio.sleep(0.01)
            region = url.rsplit("/", 2)[1]
            return [make_record(electorate_name=f"{region} seat")]

        client, _ = _recording_client()
        qld, wa = await asyncio.gather(
            scrape_electorates("qld", "2024", strategies=[StubStrategy(per_region)], client=client, settings=settings),
            scrape_electorates("wa", "2025", strategies=[StubStrategy(per_region)], client=client, settings=settings),
        )

        assert [r.electorate_name for r in qld.records] == ["qld seat"]
        assert [r.electorate_name for r in wa.records] == ["wa seat"]


class TestEndToEnd:
    """Full pipeline run against a mocked results source."""

    @pytest.mark.asyncio
    async def test_direct_json_payload(self, settings, make_item):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if request.url.path.endswith("/qld/2024/results/electorates.json"):
                return httpx.Response(200, json={"electorates": [make_item(), make_item()]})
            return httpx.Response(404)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        result = await scrape_electorates("qld", "2024", client=client, settings=settings)

        assert result.success is True
        assert result.total_found == 1
        assert result.errors == []
        assert len(requests) == 1
        (record,) = result.records
        assert (record.first_name, record.last_name) == ("Jane", "Smith")
        assert record.party_name == "Australian Labor Party"
        assert record.party_short_code == "ALP"
        assert record.current_margin_percent == 5.0
        assert record.current_margin_votes == 5000
