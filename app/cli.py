import asyncio
import json
import os
from typing import Optional

import httpx
import typer
import uvicorn

from afrisight.datasets import DatasetProvider
from afrisight.errors import ConfigurationError, ScrapeError
from afrisight.events import EventScraper
from afrisight.utils.config import DEFAULT_DATA_DIR, Settings
from afrisight.utils.logger import LoggerManager

app = typer.Typer(help="AfriSight creator analytics API")

cli_logger = LoggerManager.get_logger("cli")


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Interface to bind."),
    port: Optional[int] = typer.Option(None, help="Port; defaults to PORT from settings."),
    config: Optional[str] = typer.Option(None, help="Path to a YAML config file."),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes."),
):
    """
    Run the HTTP API with uvicorn.

    Settings are resolved before the server starts so a missing API key or
    token secret fails here instead of inside a worker.
    """
    try:
        settings = Settings.from_env(config_path=config)
    except ConfigurationError as e:
        typer.echo(f"❌ {e.message}")
        raise typer.Exit(code=1)
    if config:
        # create_app resolves settings again inside the server process
        os.environ["AFRISIGHT_CONFIG"] = config

    listen_port = port or settings.port
    cli_logger.info(
        "Starting AfriSight API",
        extra={"extra_data": {"host": host, "port": listen_port}},
    )
    uvicorn.run(
        "app.api.main:create_app",
        factory=True,
        host=host,
        port=listen_port,
        reload=reload,
    )


@app.command()
def stats(
    data_dir: str = typer.Option(str(DEFAULT_DATA_DIR), help="Directory holding the JSON datasets."),
):
    """
    Print record counts and summary statistics for the bundled datasets.
    """
    datasets = DatasetProvider(data_dir)
    try:
        data_stats = datasets.get_data_stats()
    except (OSError, ValueError) as e:
        typer.echo(f"❌ Failed to load datasets from {data_dir}: {e}")
        raise typer.Exit(code=1)

    payload = {
        "data": data_stats.model_dump(by_alias=True),
        "totalDataPoints": data_stats.total_data_points,
        "business": datasets.business_stats().model_dump(by_alias=True),
        "movies": datasets.movie_stats().model_dump(by_alias=True),
    }
    typer.echo(json.dumps(payload, indent=2))


@app.command()
def scrape(
    source: str = typer.Option("all", help="tix, luma or all."),
):
    """
    Scrape the event listing sites and print the events as JSON.
    """
    if source not in ("tix", "luma", "all"):
        typer.echo(f"❌ Unknown source: {source}")
        raise typer.Exit(code=1)

    async def run():
        async with httpx.AsyncClient(timeout=30.0, follow_redirects=True) as client:
            scraper = EventScraper(client)
            if source == "tix":
                return await scraper.scrape_tix()
            if source == "luma":
                return await scraper.scrape_luma()
            return (await scraper.scrape_all()).combined_events

    try:
        events = asyncio.run(run())
    except ScrapeError as e:
        typer.echo(f"❌ {e.message}: {e.details}")
        raise typer.Exit(code=1)

    typer.echo(
        json.dumps([event.model_dump(by_alias=True) for event in events], indent=2, ensure_ascii=False)
    )
    cli_logger.info(f"✅ Scraped {len(events)} events from {source}")


if __name__ == "__main__":
    app()
