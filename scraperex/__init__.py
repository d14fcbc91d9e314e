"""ScraperEx: fetch a web page through CORS relays and summarise its markup."""

__version__ = "0.1.0"
