"""Scrape pipeline: fetch → parse → extract.

``scrape`` is the single entry point used by the CLI and the HTTP API.  It
never raises; every failure ends up in :attr:`ScrapingResult.error`.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Callable, Optional, Sequence

from scraperex.scraper.document import parse_document
from scraperex.scraper.errors import FetchFailed, ParseFailed
from scraperex.scraper.extractor import extract
from scraperex.scraper.fetcher import fetch, normalize_address
from scraperex.scraper.models import ExtractionOptions, ScrapingResult
from scraperex.scraper.relays import DEFAULT_RELAYS, RelayEndpoint

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], str]


def scrape(
    address: str,
    options: Optional[ExtractionOptions] = None,
    *,
    relays: Optional[Sequence[RelayEndpoint]] = None,
    fetcher: Optional[Fetcher] = None,
) -> ScrapingResult:
    """Fetch *address* and extract a :class:`ScrapingResult` from it.

    Args:
        address: Page address as typed by the user; ``https://`` is assumed
            when no scheme is given.
        options: Extraction options; defaults to :class:`ExtractionOptions()`.
        relays: Relay list for the default fetcher, in fallback order.
        fetcher: Callable taking the address and returning markup.  Defaults
            to :func:`~scraperex.scraper.fetcher.fetch` over *relays*; pass
            :func:`~scraperex.scraper.fetcher.fetch_direct` to skip relays.

    Returns:
        The extracted result, or a result whose ``error`` is set and whose
        content fields are all empty.
    """
    options = options or ExtractionOptions()
    if fetcher is None:
        fetcher = partial(fetch, relays=DEFAULT_RELAYS if relays is None else relays)

    try:
        markup = fetcher(address)
    except FetchFailed as exc:
        logger.error("Scraping error: %s", exc)
        return ScrapingResult.failure(str(exc))
    except Exception as exc:
        logger.exception("Unexpected fetch error for %s", address)
        return ScrapingResult.failure(str(exc) or "Unknown error occurred")

    try:
        doc = parse_document(markup)
        return extract(doc, normalize_address(address), options)
    except ParseFailed as exc:
        logger.error("Scraping error: %s", exc)
        return ScrapingResult.failure(str(exc))
    except Exception as exc:
        logger.exception("Extraction failed for %s", address)
        return ScrapingResult.failure(str(ParseFailed(f"Extraction failed: {exc}")))
