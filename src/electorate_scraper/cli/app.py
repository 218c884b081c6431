"""Typer CLI root application with serve command."""

import typer

from electorate_scraper.core.config import get_settings
from electorate_scraper.core.logging import setup_logging

app = typer.Typer(name="electorate-scraper", help="Australian election results scraper CLI")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir, json_logs=settings.log_json)


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload for development"),
    host: str = typer.Option("127.0.0.1", "--host", help="Bind host"),
    port: int = typer.Option(8000, "--port", help="Bind port"),
) -> None:
    """Start the API server."""
    import uvicorn

    uvicorn.run(
        "electorate_scraper.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


def _register_subcommands() -> None:
    """Register all CLI subcommand groups."""
    from electorate_scraper.cli.db_cmd import db_app
    from electorate_scraper.cli.scrape_cmd import scrape_app
    from electorate_scraper.cli.seed_cmd import seed_parties

    app.add_typer(db_app, name="db", help="Database migration commands")
    app.add_typer(scrape_app, name="scrape", help="Election results scraping commands")
    app.command("seed-parties")(seed_parties)


_register_subcommands()
