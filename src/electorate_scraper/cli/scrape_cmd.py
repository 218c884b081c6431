"""CLI commands for scraping election results.

Runs the results pipeline for one region and year, prints a summary or the
JSON envelope, and optionally saves the records to the member store.
"""

import asyncio
import json
from typing import Annotated

import typer
from loguru import logger

from electorate_scraper.lib.results_scraper import ScrapeResult

scrape_app = typer.Typer()


def _format_record_line(result_index: int, record_data: dict) -> str:
    return (
        f"{result_index:>3}. {record_data['electorateName']:<28} "
        f"{record_data['firstName']} {record_data['lastName']} ({record_data['partyShortCode']}) "
        f"margin {record_data['currentMarginPercent']:+.2f}% / {record_data['currentMarginVotes']} votes, "
        f"swing {record_data['swingPercent']:+.2f}%"
    )


def _echo_summary(result: ScrapeResult) -> None:
    payload = result.model_dump(mode="json", by_alias=True)
    for index, record_data in enumerate(payload["records"], start=1):
        typer.echo(_format_record_line(index, record_data))
    for error in result.errors:
        typer.echo(f"error: {error}", err=True)
    status = "succeeded" if result.success else "failed"
    typer.echo(f"Scrape {status}: {result.total_found} records, {len(result.errors)} errors")


@scrape_app.command("run")
def run(
    region: Annotated[str, typer.Option("--region", help="Region code, e.g. qld")],
    year: Annotated[str, typer.Option("--year", help="Election year, e.g. 2024")],
    as_json: Annotated[bool, typer.Option("--json", help="Print the result envelope as JSON")] = False,
    save: Annotated[bool, typer.Option("--save", help="Save records to the member store")] = False,
) -> None:
    """Scrape per-electorate results for one election."""
    result = asyncio.run(_run_impl(region, year, save))

    if as_json:
        typer.echo(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2))
    else:
        _echo_summary(result)

    if not result.success:
        raise typer.Exit(code=1)


async def _run_impl(region: str, year: str, save: bool) -> ScrapeResult:
    """Async implementation of the run command."""
    from electorate_scraper.core.config import get_settings
    from electorate_scraper.lib.results_scraper import scrape_electorates

    settings = get_settings()
    result = await scrape_electorates(region, year, settings=settings)

    if save and result.records:
        from electorate_scraper.core.database import session_scope
        from electorate_scraper.services.member_service import persist_records

        async with session_scope(settings.database_url, schema=settings.database_schema) as session:
            outcome = await persist_records(session, result.records, region)
        typer.echo(f"Saved {outcome.saved} members ({len(outcome.failures)} failed)", err=True)
        for failure in outcome.failures:
            logger.warning("Not saved: {}", failure)

    return result
