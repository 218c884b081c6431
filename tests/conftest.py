"""Shared test fixtures for settings, async database sessions and record factories."""

from collections.abc import AsyncGenerator, Callable
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from electorate_scraper.core.config import Settings
from electorate_scraper.lib.results_scraper.models import CanonicalMemberRecord
from electorate_scraper.models import Base


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        database_url="sqlite+aiosqlite:///:memory:",
        scrape_timeout_seconds=5.0,
    )


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory async SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def async_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create a per-test async session."""
    session_factory = async_sessionmaker(async_engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_record() -> Callable[..., CanonicalMemberRecord]:
    """Factory for canonical records with sensible defaults."""

    def _make(**overrides: Any) -> CanonicalMemberRecord:
        fields: dict[str, Any] = {
            "first_name": "Jane",
            "last_name": "Smith",
            "party_name": "Australian Labor Party",
            "party_short_code": "ALP",
            "electorate_name": "Brisbane Central",
            "total_votes_cast": 50000,
            "current_margin_votes": 5000,
            "current_margin_percent": 5.0,
            "winner_tpp_percent": 55.0,
            "loser_tpp_percent": 45.0,
            "winner_tpp_votes": 27500,
            "loser_tpp_votes": 22500,
            "source_url": "https://example.com/electorates.json",
        }
        fields.update(overrides)
        return CanonicalMemberRecord(**fields)

    return _make


@pytest.fixture
def make_item() -> Callable[..., dict[str, Any]]:
    """Factory for upstream electorate objects in the shape the results feed publishes."""

    def _make(**overrides: Any) -> dict[str, Any]:
        item: dict[str, Any] = {
            "name": "Brisbane Central",
            "leadingCandidate": {
                "name": "Jane Smith",
                "party": "Labor",
                "predicted2CP": {"pct": 55, "votes": 27500},
            },
            "trailingCandidate": {
                "name": "John Doe",
                "party": "LNP",
                "predicted2CP": {"pct": 45, "votes": 22500},
            },
        }
        item.update(overrides)
        return item

    return _make
