"""FastAPI application factory.

Routers
-------
All endpoint groups are mounted under their respective path prefix:

    /scrape    - fetch a page through the relays and summarise it
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from scraperex import __version__
from scraperex.api.routers import scrape as scrape_router


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="ScraperEx API",
        description=(
            "REST interface for ScraperEx. Fetches a page through an ordered "
            "list of CORS relays and returns headings, links, images, "
            "paragraphs, tables, lists, metadata, scripts and styles."
        ),
        version=__version__,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(scrape_router.router, prefix="/scrape", tags=["scrape"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn scraperex.api.app:app --reload
app = create_app()
