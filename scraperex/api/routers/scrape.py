"""Scrape endpoints.

Routes
------
POST /scrape           Body: {"url": "example.com", "options": {...}}  → scrape
GET  /scrape/relays    → configured relay list, in fallback order

Scrape failures are part of the result (``error``), so ``POST /scrape``
answers 200 even when every relay failed.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from scraperex.config import settings
from scraperex.scraper import DEFAULT_RELAYS, ExtractionOptions, scrape

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class OptionsBody(BaseModel):
    include_metadata: bool = True
    extract_scripts: bool = False
    extract_styles: bool = False
    extract_tables: bool = True
    extract_lists: bool = True
    include_raw_html: bool = False
    max_items: int = Field(default_factory=lambda: settings.max_items, ge=1)


class ScrapeRequest(BaseModel):
    url: str = Field(..., min_length=1)
    options: OptionsBody = Field(default_factory=OptionsBody)


class RelayResponse(BaseModel):
    name: str
    base_url: str
    style: str


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("")
def scrape_endpoint(body: ScrapeRequest) -> dict[str, Any]:
    """Fetch ``url`` through the relays and return the extracted summary."""
    options = ExtractionOptions(**body.options.model_dump())
    return scrape(body.url, options).to_dict()


@router.get("/relays", response_model=list[RelayResponse])
def list_relays() -> list[dict[str, str]]:
    """Return the relay endpoints in the order they are tried."""
    return [
        {"name": relay.name, "base_url": relay.base_url, "style": relay.style}
        for relay in DEFAULT_RELAYS
    ]
