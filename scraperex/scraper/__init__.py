"""Scraper package: relay fetch & structured markup extraction."""

from scraperex.scraper.errors import FetchFailed, ParseFailed, RelayFailed, ScraperError
from scraperex.scraper.extractor import extract
from scraperex.scraper.fetcher import fetch, fetch_direct, normalize_address
from scraperex.scraper.models import ExtractionOptions, ScrapingResult
from scraperex.scraper.orchestrator import scrape
from scraperex.scraper.relays import DEFAULT_RELAYS, RelayEndpoint

__all__ = [
    "scrape",
    "fetch",
    "fetch_direct",
    "normalize_address",
    "extract",
    "ExtractionOptions",
    "ScrapingResult",
    "RelayEndpoint",
    "DEFAULT_RELAYS",
    "ScraperError",
    "RelayFailed",
    "FetchFailed",
    "ParseFailed",
]
