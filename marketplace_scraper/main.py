"""
Marketplace Search Scraper - CLI Entry Point.
CLI using Click and Rich.
"""

import sys
import asyncio
import logging
from pathlib import Path
from functools import wraps

import click
from rich.console import Console
from rich.table import Table
from rich.logging import RichHandler

from marketplace_scraper import __version__
from marketplace_scraper.config.settings import get_settings
from marketplace_scraper.models.schemas import ExtractionResult, NOT_AVAILABLE
from marketplace_scraper.pipeline.orchestrator import ScrapeOrchestrator
from marketplace_scraper.services.fetch_service import UpstreamError
from marketplace_scraper.services.validation_service import ValidationError
from marketplace_scraper.utils.logger import setup_logging

# Initialize Rich Console
console = Console()

# =============================================================================
# Helper Functions
# =============================================================================

def async_command(f):
    """Decorator to run async click commands."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))
    return wrapper

def setup_logger(verbose: bool):
    """Configure logging based on verbosity."""
    level = "DEBUG" if verbose else "WARNING"
    setup_logging(level=level, json_format=False)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )
    # Silence third-party libs
    logging.getLogger("httpx").setLevel(logging.WARNING)

def build_products_table(result: ExtractionResult) -> Table:
    """Render products as a Rich table."""
    table = Table(title=f"Results for \"{result.keyword}\" ({result.total_products})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", overflow="fold")
    table.add_column("Rating", justify="right")
    table.add_column("Reviews", justify="right")
    table.add_column("Image", overflow="fold", style="cyan")

    for product in result.products:
        rating = f"{product.rating:.1f}" if product.rating != NOT_AVAILABLE else NOT_AVAILABLE
        table.add_row(
            str(product.sequence_id),
            product.title,
            rating,
            f"{product.review_count:,}",
            product.image_url,
        )
    return table

def print_result(result: ExtractionResult, as_json: bool):
    if as_json:
        console.print_json(result.to_json())
    elif result.products:
        console.print(build_products_table(result))
    else:
        console.print(f"[yellow]No products found for \"{result.keyword}\".[/yellow]")

# =============================================================================
# CLI Group
# =============================================================================

@click.group()
@click.version_option(version=__version__)
def cli():
    """Marketplace Search Scraper"""
    pass

# =============================================================================
# Commands
# =============================================================================

@cli.command()
@click.argument('keyword')
@click.option('--json', 'as_json', is_flag=True, help='Print the raw JSON response')
@click.option('--verbose', is_flag=True, help='Detailed logging')
@async_command
async def scrape(keyword: str, as_json: bool, verbose: bool):
    """
    Scrape the first search results page for KEYWORD.
    """
    setup_logger(verbose)

    try:
        async with ScrapeOrchestrator(settings=get_settings()) as orchestrator:
            with console.status(f"[cyan]Searching for {keyword}..."):
                result = await orchestrator.scrape(keyword)
    except ValidationError as e:
        console.print(f"[bold red]Invalid keyword:[/bold red] {e.message}")
        sys.exit(2)
    except UpstreamError as e:
        console.print(f"[bold red]Scrape failed ({e.status_code}):[/bold red] {e.message}")
        sys.exit(1)

    print_result(result, as_json)


@cli.command()
@click.argument('html_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--keyword', default='offline', help='Keyword to echo in the result')
@click.option('--json', 'as_json', is_flag=True, help='Print the raw JSON response')
@click.option('--verbose', is_flag=True, help='Detailed logging')
def extract(html_file: str, keyword: str, as_json: bool, verbose: bool):
    """
    Run extraction on a saved results page.

    HTML_FILE: Search results page saved to disk.
    """
    setup_logger(verbose)

    html = Path(html_file).read_text(encoding="utf-8", errors="replace")
    orchestrator = ScrapeOrchestrator(settings=get_settings())
    result = orchestrator.extract(keyword, html)

    print_result(result, as_json)


@cli.command()
@click.option('--host', default=None, help='Bind address (defaults to API_HOST)')
@click.option('--port', default=None, type=int, help='Port (defaults to API_PORT)')
@click.option('--reload', is_flag=True, help='Auto-reload on code changes')
def serve(host: str | None, port: int | None, reload: bool):
    """Run the HTTP API."""
    import uvicorn

    settings = get_settings()
    setup_logging(level=settings.log_level, json_format=settings.log_json)

    host = host or settings.api_host
    port = port or settings.api_port
    console.print(f"[green]API listening on http://{host}:{port}/api/scrape?keyword=example[/green]")
    uvicorn.run("marketplace_scraper.api.app:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    cli()
