"""Tests for the database engine and session management module."""

import pytest
from sqlalchemy import text
from sqlalchemy.pool import StaticPool

import electorate_scraper.core.database as db_module
from electorate_scraper.core.database import (
    _engine_kwargs,
    dispose_engine,
    get_session_factory,
    init_engine,
    session_scope,
)


class TestGetSessionFactory:
    """Tests for get_session_factory."""

    def test_raises_when_not_initialized(self) -> None:
        original_factory = db_module._session_factory
        db_module._session_factory = None
        try:
            with pytest.raises(RuntimeError, match="Session factory not initialized"):
                get_session_factory()
        finally:
            db_module._session_factory = original_factory


class TestInitEngine:
    """Tests for init_engine and dispose_engine."""

    @pytest.mark.asyncio
    async def test_creates_engine_and_factory(self) -> None:
        engine = init_engine("sqlite+aiosqlite:///:memory:")
        try:
            assert engine is not None
            assert get_session_factory() is not None
        finally:
            await dispose_engine()
        assert db_module._engine is None
        assert db_module._session_factory is None

    @pytest.mark.asyncio
    async def test_dispose_without_engine_is_noop(self) -> None:
        await dispose_engine()
        await dispose_engine()


class TestEngineKwargs:
    """Tests for _engine_kwargs."""

    def test_sqlite_gets_no_pool_sizing(self) -> None:
        assert _engine_kwargs("sqlite+aiosqlite:///:memory:", None, {}) == {}

    def test_postgres_gets_pool_sizing(self) -> None:
        kwargs = _engine_kwargs("postgresql+asyncpg://localhost/db", None, {})
        assert kwargs["pool_size"] == 5
        assert kwargs["max_overflow"] == 5

    def test_static_pool_skips_pool_sizing(self) -> None:
        kwargs = _engine_kwargs("postgresql+asyncpg://localhost/db", None, {"poolclass": StaticPool})
        assert "pool_size" not in kwargs

    def test_schema_sets_search_path(self) -> None:
        kwargs = _engine_kwargs("postgresql+asyncpg://localhost/db", "pr_42", {"connect_args": {"ssl": False}})
        assert kwargs["connect_args"] == {"ssl": False, "options": "-c search_path=pr_42,public"}

    def test_connect_args_must_be_dict(self) -> None:
        with pytest.raises(TypeError, match="connect_args must be a dict"):
            _engine_kwargs("postgresql+asyncpg://localhost/db", "pr_42", {"connect_args": "nope"})


class TestSessionScope:
    """Tests for session_scope."""

    @pytest.mark.asyncio
    async def test_yields_working_session_and_disposes(self) -> None:
        async with session_scope("sqlite+aiosqlite:///:memory:") as session:
            result = await session.execute(text("SELECT 1"))
            assert result.scalar_one() == 1
        assert db_module._engine is None
