"""HTTP fetcher that reaches the target page through an ordered list of relays."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence

import httpx

from scraperex.config import settings
from scraperex.scraper.errors import FetchFailed, RelayFailed
from scraperex.scraper.relays import DEFAULT_RELAYS, RelayEndpoint, encode_address

logger = logging.getLogger(__name__)


def _relay_headers() -> dict[str, str]:
    return {
        "User-Agent": settings.user_agent,
        "X-Requested-With": "XMLHttpRequest",
    }


def normalize_address(address: str) -> str:
    """Return *address* with ``https://`` prefixed when it has no http(s) scheme."""
    address = address.strip()
    if not address.startswith(("http://", "https://")):
        address = "https://" + address
    return address


def _describe(exc: Exception) -> str:
    """Human-readable cause for *exc*; some httpx errors have an empty message."""
    return str(exc) or exc.__class__.__name__


@contextmanager
def _client_scope(client: Optional[httpx.Client]) -> Iterator[httpx.Client]:
    if client is not None:
        yield client
        return
    with httpx.Client(follow_redirects=True) as owned:
        yield owned


def _get(client: httpx.Client, url: str, headers: dict[str, str], timeout: float) -> str:
    response = client.get(url, headers=headers, timeout=timeout)
    response.raise_for_status()
    return response.text


def fetch(
    address: str,
    relays: Sequence[RelayEndpoint] = DEFAULT_RELAYS,
    *,
    client: Optional[httpx.Client] = None,
    timeout: Optional[float] = None,
) -> str:
    """Fetch the markup of *address* through the first relay that answers.

    Relays are tried strictly in order, once each.  The body of the first
    2xx response is returned immediately.

    Raises:
        FetchFailed: If every relay failed.  The message carries the last
            relay's cause; all attempts are kept on ``attempts``.
    """
    url = normalize_address(address)
    encoded = encode_address(url)
    timeout = settings.request_timeout if timeout is None else timeout
    headers = _relay_headers()

    attempts: List[RelayFailed] = []
    with _client_scope(client) as http:
        for relay in relays:
            relay_url = relay.build_url(url, encoded)
            try:
                body = _get(http, relay_url, headers, timeout)
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                failure = RelayFailed(relay.name, _describe(exc))
                attempts.append(failure)
                logger.warning("%s", failure)
                continue
            logger.info("Fetched %s via %s (%d chars)", url, relay.name, len(body))
            return body

    last_cause = attempts[-1].cause if attempts else None
    message = last_cause or "All proxy services failed"
    logger.error("All proxy services failed: %s", message)
    raise FetchFailed(
        f"Unable to fetch content: {message}",
        last_cause=last_cause,
        attempts=attempts,
    )


def fetch_direct(
    address: str,
    *,
    client: Optional[httpx.Client] = None,
    timeout: Optional[float] = None,
) -> str:
    """Fetch *address* without any relay.

    Only useful where cross-origin restrictions do not apply.  Never used as
    an automatic fallback for :func:`fetch`.

    Raises:
        FetchFailed: On any transport error or non-2xx status.
    """
    url = normalize_address(address)
    timeout = settings.request_timeout if timeout is None else timeout
    try:
        with _client_scope(client) as http:
            return _get(http, url, {"User-Agent": settings.user_agent}, timeout)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        cause = _describe(exc)
        raise FetchFailed(f"Direct fetch failed: {cause}", last_cause=cause) from exc
