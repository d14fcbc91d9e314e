"""Relay (CORS proxy) endpoints used by the fetcher, in fallback order."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple
from urllib.parse import quote

InsertionStyle = Literal["append", "prepend"]

# encodeURIComponent leaves these unescaped
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass(frozen=True)
class RelayEndpoint:
    """A third-party service that fetches a page on our behalf.

    ``append`` relays take the percent-encoded target after ``base_url``;
    ``prepend`` relays take the raw target.
    """

    name: str
    base_url: str
    style: InsertionStyle = "append"

    def build_url(self, address: str, encoded_address: str) -> str:
        if self.style == "append":
            return f"{self.base_url}{encoded_address}"
        return f"{self.base_url}{address}"


# Order is the fallback priority: the first relay that answers wins.
DEFAULT_RELAYS: Tuple[RelayEndpoint, ...] = (
    RelayEndpoint("allOrigins", "https://api.allorigins.win/raw?url=", "append"),
    RelayEndpoint("corsAnywhere", "https://cors-anywhere.herokuapp.com/", "prepend"),
    RelayEndpoint("corsproxy", "https://corsproxy.io/?", "append"),
)


def encode_address(address: str) -> str:
    """Percent-encode *address* as a single URI component."""
    return quote(address, safe=_URI_COMPONENT_SAFE)
