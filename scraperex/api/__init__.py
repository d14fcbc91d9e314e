"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from scraperex.api import app

    uvicorn scraperex.api:app --reload
"""

from scraperex.api.app import app

__all__ = ["app"]
