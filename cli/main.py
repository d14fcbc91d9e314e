"""ScraperEx CLI: entry-point for scraping from the terminal.

Usage:
    python cli/main.py --help

Commands:
    scrape    → fetch a page through the relays and summarise it
    relays    → list the relay endpoints in fallback order
    history   → show or clear previously scraped addresses
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from scraperex.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
import logging

import typer

from cli.history import clear_history, load_history, record_address
from cli.rendering import render_result
from scraperex.config import settings
from scraperex.scraper import DEFAULT_RELAYS, ExtractionOptions, fetch_direct, scrape

app = typer.Typer(
    name="scraperex",
    help="ScraperEx CLI.",
    no_args_is_help=True,
)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )


# ---------------------------------------------------------------------------
# Scrape
# ---------------------------------------------------------------------------
@app.command("scrape")
def scrape_cmd(
    url: str = typer.Argument(..., help="Address to scrape (https:// is assumed)."),
    max_items: int = typer.Option(
        settings.max_items, "--max-items", min=1, help="Maximum items per category."
    ),
    metadata: bool = typer.Option(True, "--metadata/--no-metadata", help="Extract <meta> tags."),
    scripts: bool = typer.Option(False, "--scripts/--no-scripts", help="Extract <script> tags."),
    styles: bool = typer.Option(False, "--styles/--no-styles", help="Extract stylesheets."),
    tables: bool = typer.Option(True, "--tables/--no-tables", help="Extract tables."),
    lists: bool = typer.Option(True, "--lists/--no-lists", help="Extract lists."),
    raw_html: bool = typer.Option(False, "--raw-html/--no-raw-html", help="Attach the raw markup."),
    direct: bool = typer.Option(False, "--direct", help="Fetch the page directly, without relays."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Scrape a page and print its headings, links, images, tables, lists …"""
    _setup_logging(verbose)
    options = ExtractionOptions(
        include_metadata=metadata,
        extract_scripts=scripts,
        extract_styles=styles,
        extract_tables=tables,
        extract_lists=lists,
        include_raw_html=raw_html,
        max_items=max_items,
    )

    record_address(url)
    result = scrape(url, options, fetcher=fetch_direct if direct else None)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    elif result.ok:
        typer.echo(render_result(result))

    if not result.ok:
        if not as_json:
            typer.echo(f"[scrape] Error: {result.error}", err=True)
        raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Relays
# ---------------------------------------------------------------------------
@app.command("relays")
def relays_cmd() -> None:
    """List the relay endpoints in the order they are tried."""
    for i, relay in enumerate(DEFAULT_RELAYS, start=1):
        typer.echo(f"  {i}. {relay.name:<14} [{relay.style}]  {relay.base_url}")


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------
history_app = typer.Typer(help="Previously scraped addresses.", no_args_is_help=True)
app.add_typer(history_app, name="history")


@history_app.command("list")
def history_list() -> None:
    """Show saved addresses, most recent first."""
    history = load_history()
    if not history.addresses:
        typer.echo("[history] No saved addresses.")
        return
    for address in history.addresses:
        typer.echo(f"  {address}")


@history_app.command("clear")
def history_clear() -> None:
    """Forget every saved address."""
    clear_history()
    typer.echo("[history] Cleared.")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
