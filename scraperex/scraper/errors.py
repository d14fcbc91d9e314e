"""Error taxonomy for the fetch → extract pipeline.

None of these ever leave :func:`~scraperex.scraper.orchestrator.scrape`; they
are flattened into :attr:`ScrapingResult.error` at that boundary.
"""

from __future__ import annotations

from typing import List, Optional


class ScraperError(Exception):
    """Base class for every scraper failure."""


class RelayFailed(ScraperError):
    """A single relay attempt errored (network, timeout, non-2xx status)."""

    def __init__(self, relay_name: str, cause: str) -> None:
        super().__init__(f"Proxy {relay_name} failed: {cause}")
        self.relay_name = relay_name
        self.cause = cause


class FetchFailed(ScraperError):
    """Every configured relay failed, or a direct fetch failed.

    Only the most recent cause is part of the message; earlier relay failures
    are kept in :attr:`attempts`.
    """

    def __init__(
        self,
        message: str,
        last_cause: Optional[str] = None,
        attempts: Optional[List[RelayFailed]] = None,
    ) -> None:
        super().__init__(message)
        self.last_cause = last_cause
        self.attempts = list(attempts or [])


class ParseFailed(ScraperError):
    """The fetched text could not be parsed, or extraction raised."""

    def __init__(self, cause: str) -> None:
        super().__init__(cause)
        self.cause = cause
