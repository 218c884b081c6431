"""CLI command that registers the canonical party taxonomy in the member store."""

import asyncio

import typer


def seed_parties() -> None:
    """Register every canonical party so scraped members can be saved against it."""
    created = asyncio.run(_seed_parties_impl())
    typer.echo(f"Registered {created} parties")


async def _seed_parties_impl() -> int:
    """Async implementation of the seed-parties command."""
    from electorate_scraper.core.config import get_settings
    from electorate_scraper.core.database import session_scope
    from electorate_scraper.services import member_service

    settings = get_settings()
    async with session_scope(settings.database_url, schema=settings.database_schema) as session:
        return await member_service.seed_parties(session)
