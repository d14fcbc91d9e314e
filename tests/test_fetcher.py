"""Tests for the relay fetcher.

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made; relays are matched by URL prefix.
- Most tests pass their own relay list so success/failure per relay is
  deterministic.
"""

from __future__ import annotations

import httpx
import pytest
import respx

from scraperex.scraper.errors import FetchFailed
from scraperex.scraper.fetcher import fetch, fetch_direct, normalize_address
from scraperex.scraper.relays import DEFAULT_RELAYS, RelayEndpoint, encode_address


# ---------------------------------------------------------------------------
# Fixtures / constants
# ---------------------------------------------------------------------------

_PAGE = "<html><head><title>Relayed</title></head><body><p>hi</p></body></html>"

_RELAYS = [
    RelayEndpoint("one", "https://relay-one.test/raw?url=", "append"),
    RelayEndpoint("two", "https://relay-two.test/", "prepend"),
    RelayEndpoint("three", "https://relay-three.test/?", "append"),
]


# ---------------------------------------------------------------------------
# Address handling
# ---------------------------------------------------------------------------

class TestNormalizeAddress:
    def test_adds_https_when_scheme_missing(self) -> None:
        assert normalize_address("example.com") == "https://example.com"

    def test_keeps_http(self) -> None:
        assert normalize_address("http://example.com/a") == "http://example.com/a"

    def test_keeps_https(self) -> None:
        assert normalize_address("https://example.com") == "https://example.com"

    def test_strips_whitespace(self) -> None:
        assert normalize_address("  example.com/x ") == "https://example.com/x"


class TestRelayUrls:
    def test_encode_is_full_uri_component(self) -> None:
        assert encode_address("https://example.com/a?b=1&c=2") == (
            "https%3A%2F%2Fexample.com%2Fa%3Fb%3D1%26c%3D2"
        )

    def test_append_uses_encoded_address(self) -> None:
        relay = RelayEndpoint("r", "https://relay.test/?url=", "append")
        assert relay.build_url("https://example.com", "ENC") == "https://relay.test/?url=ENC"

    def test_prepend_uses_raw_address(self) -> None:
        relay = RelayEndpoint("r", "https://relay.test/", "prepend")
        assert relay.build_url("https://example.com", "ENC") == (
            "https://relay.test/https://example.com"
        )

    def test_default_relay_order(self) -> None:
        assert [r.name for r in DEFAULT_RELAYS] == ["allOrigins", "corsAnywhere", "corsproxy"]
        assert [r.style for r in DEFAULT_RELAYS] == ["append", "prepend", "append"]

    def test_default_relays_are_immutable(self) -> None:
        assert isinstance(DEFAULT_RELAYS, tuple)
        with pytest.raises(AttributeError):
            DEFAULT_RELAYS.append(RelayEndpoint("extra", "https://extra.test/"))  # type: ignore[attr-defined]


# ---------------------------------------------------------------------------
# fetch
# ---------------------------------------------------------------------------

class TestFetch:
    def test_first_relay_success_skips_the_rest(self) -> None:
        with respx.mock:
            one = respx.get(url__startswith="https://relay-one.test/").mock(
                return_value=httpx.Response(200, text=_PAGE)
            )
            two = respx.get(url__startswith="https://relay-two.test/").mock(
                return_value=httpx.Response(200, text="other")
            )
            html = fetch("example.com", _RELAYS)

        assert html == _PAGE
        assert one.call_count == 1
        assert two.call_count == 0

    def test_address_normalized_before_relay_url_is_built(self) -> None:
        with respx.mock:
            one = respx.get(url__startswith="https://relay-one.test/").mock(
                return_value=httpx.Response(200, text=_PAGE)
            )
            fetch("example.com", _RELAYS)

        request = one.calls.last.request
        assert request.url.params["url"] == "https://example.com"

    def test_sends_browser_headers(self) -> None:
        with respx.mock:
            one = respx.get(url__startswith="https://relay-one.test/").mock(
                return_value=httpx.Response(200, text=_PAGE)
            )
            fetch("example.com", _RELAYS)

        headers = one.calls.last.request.headers
        assert headers["User-Agent"].startswith("Mozilla/5.0")
        assert headers["X-Requested-With"] == "XMLHttpRequest"

    def test_falls_back_in_order_until_success(self) -> None:
        with respx.mock:
            one = respx.get(url__startswith="https://relay-one.test/").mock(
                side_effect=httpx.ConnectTimeout
            )
            two = respx.get(url__startswith="https://relay-two.test/").mock(
                return_value=httpx.Response(503, text="busy")
            )
            three = respx.get(url__startswith="https://relay-three.test/").mock(
                return_value=httpx.Response(200, text=_PAGE)
            )
            html = fetch("example.com", _RELAYS)

        assert html == _PAGE
        assert (one.call_count, two.call_count, three.call_count) == (1, 1, 1)

    def test_prepend_relay_receives_raw_address(self) -> None:
        with respx.mock:
            respx.get(url__startswith="https://relay-one.test/").mock(
                return_value=httpx.Response(500)
            )
            two = respx.get(url__startswith="https://relay-two.test/").mock(
                return_value=httpx.Response(200, text=_PAGE)
            )
            fetch("example.com/page", _RELAYS)

        assert two.calls.last.request.url.path == "/https://example.com/page"

    def test_each_relay_tried_once(self) -> None:
        with respx.mock:
            routes = [
                respx.get(url__startswith=relay.base_url.split("?")[0]).mock(
                    return_value=httpx.Response(502)
                )
                for relay in _RELAYS
            ]
            with pytest.raises(FetchFailed):
                fetch("example.com", _RELAYS)

        assert [r.call_count for r in routes] == [1, 1, 1]

    def test_invalid_relay_url_falls_through_to_next_relay(self) -> None:
        """A control character is fine once encoded, but breaks the prepend relay URL."""
        with respx.mock:
            one = respx.get(url__startswith="https://relay-one.test/").mock(
                return_value=httpx.Response(500)
            )
            three = respx.get(url__startswith="https://relay-three.test/").mock(
                return_value=httpx.Response(200, text=_PAGE)
            )
            html = fetch("example.com/a\tb", _RELAYS)

        assert html == _PAGE
        assert one.call_count == 1
        assert three.call_count == 1

    def test_all_failing_raises_with_last_cause(self) -> None:
        with respx.mock:
            respx.get(url__startswith="https://relay-one.test/").mock(
                return_value=httpx.Response(500)
            )
            respx.get(url__startswith="https://relay-two.test/").mock(
                return_value=httpx.Response(502)
            )
            respx.get(url__startswith="https://relay-three.test/").mock(
                return_value=httpx.Response(404)
            )
            with pytest.raises(FetchFailed) as excinfo:
                fetch("example.com", _RELAYS)

        err = excinfo.value
        assert str(err).startswith("Unable to fetch content: ")
        assert "404" in str(err)
        assert "502" not in str(err)
        assert [a.relay_name for a in err.attempts] == ["one", "two", "three"]

    def test_empty_relay_list(self) -> None:
        with pytest.raises(FetchFailed, match="All proxy services failed"):
            fetch("example.com", [])

    def test_uses_injected_client(self) -> None:
        with respx.mock:
            respx.get(url__startswith="https://relay-one.test/").mock(
                return_value=httpx.Response(200, text=_PAGE)
            )
            with httpx.Client() as client:
                assert fetch("example.com", _RELAYS, client=client) == _PAGE


# ---------------------------------------------------------------------------
# fetch_direct
# ---------------------------------------------------------------------------

class TestFetchDirect:
    def test_fetches_target_without_relay(self) -> None:
        with respx.mock:
            route = respx.get("https://example.com/").mock(
                return_value=httpx.Response(200, text=_PAGE)
            )
            html = fetch_direct("example.com/")

        assert html == _PAGE
        assert "X-Requested-With" not in route.calls.last.request.headers

    def test_failure_raises_fetch_failed(self) -> None:
        with respx.mock:
            respx.get("https://example.com/missing").mock(
                return_value=httpx.Response(404, text="Not Found")
            )
            with pytest.raises(FetchFailed, match="^Direct fetch failed: "):
                fetch_direct("https://example.com/missing")

    def test_invalid_url_raises_fetch_failed(self) -> None:
        with respx.mock:
            with pytest.raises(FetchFailed, match="^Direct fetch failed: "):
                fetch_direct("example.com/a\tb")
