"""Async database engine and session management for the member store.

The scrape pipeline itself never touches the database; only the CLI
``--save`` path and ``seed-parties`` open sessions through this module.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the current session factory.

    Raises:
        RuntimeError: If the engine has not been initialized.
    """
    if _session_factory is None:
        msg = "Session factory not initialized. Call init_engine() first."
        raise RuntimeError(msg)
    return _session_factory


def _engine_kwargs(database_url: str, schema: str | None, kwargs: dict[str, object]) -> dict[str, object]:
    """Merge schema search path and pool defaults into engine kwargs."""
    if schema is not None:
        connect_args = kwargs.pop("connect_args", {})
        if not isinstance(connect_args, dict):
            msg = "connect_args must be a dict"
            raise TypeError(msg)
        connect_args["options"] = f"-c search_path={schema},public"
        kwargs["connect_args"] = connect_args
    # SQLite engines do not take pool sizing arguments
    if kwargs.get("poolclass") is not StaticPool and "sqlite" not in database_url:
        kwargs.setdefault("pool_size", 5)
        kwargs.setdefault("max_overflow", 5)
    return kwargs


def init_engine(database_url: str, *, schema: str | None = None, **kwargs: object) -> AsyncEngine:
    """Create and store the async engine and session factory.

    Args:
        database_url: Async SQLAlchemy connection string.
        schema: Optional PostgreSQL schema for isolated environments.
        **kwargs: Additional arguments passed to create_async_engine.

    Returns:
        The created async engine.
    """
    global _engine, _session_factory  # noqa: PLW0603
    _engine = create_async_engine(database_url, **_engine_kwargs(database_url, schema, dict(kwargs)))
    _session_factory = async_sessionmaker(_engine, expire_on_commit=False)
    return _engine


async def dispose_engine() -> None:
    """Dispose of the async engine and release connections."""
    global _engine, _session_factory  # noqa: PLW0603
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None


@asynccontextmanager
async def session_scope(database_url: str, *, schema: str | None = None) -> AsyncIterator[AsyncSession]:
    """Open one session on a freshly initialized engine, disposing it afterwards.

    Args:
        database_url: Async SQLAlchemy connection string.
        schema: Optional PostgreSQL schema.

    Yields:
        An AsyncSession bound to the engine.
    """
    init_engine(database_url, schema=schema, echo=False)
    try:
        async with get_session_factory()() as session:
            yield session
    finally:
        await dispose_engine()
