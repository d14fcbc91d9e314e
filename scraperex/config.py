"""Centralised settings for ScraperEx.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_CHROME_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "15.0"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("SCRAPER_USER_AGENT", _CHROME_USER_AGENT)
    )

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------
    max_items: int = field(
        default_factory=lambda: int(os.environ.get("SCRAPER_MAX_ITEMS", "20"))
    )

    # ------------------------------------------------------------------
    # CLI
    # ------------------------------------------------------------------
    cli_config_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("SCRAPEREX_CLI_DIR", Path.home() / ".scraperex_cli")
        )
    )
    history_limit: int = field(
        default_factory=lambda: int(os.environ.get("SCRAPER_HISTORY_LIMIT", "10"))
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("SCRAPEREX_LOG_LEVEL", "WARNING").upper()
    )

    @property
    def history_path(self) -> Path:
        """Absolute path to the CLI address history file."""
        return self.cli_config_dir / "history.json"


# Module-level singleton, import this everywhere:
#   from scraperex.config import settings
settings = Settings()
