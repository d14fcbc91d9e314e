"""Persistent address history for the ScraperEx CLI.

Keeps the most recently scraped addresses, newest first, in
`~/.scraperex_cli/history.json`.  The scraper core never touches this file.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import List

from scraperex.config import settings


@dataclass
class History:
    addresses: List[str] = field(default_factory=list)

    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=2)

    @classmethod
    def from_json(cls, data: str) -> History:
        try:
            raw = json.loads(data)
            addresses = raw["addresses"]
        except (json.JSONDecodeError, TypeError, KeyError):
            return cls()
        if not isinstance(addresses, list):
            return cls()
        return cls(addresses=[a for a in addresses if isinstance(a, str)])

    def record(self, address: str, limit: int) -> bool:
        """Put *address* in front unless already known. Returns True if added."""
        address = address.strip()
        if not address or address in self.addresses:
            return False
        self.addresses = [address, *self.addresses][:limit]
        return True


def _get_history_path() -> Path:
    """Return the path to the history JSON file."""
    return settings.history_path


def load_history() -> History:
    """Load the history from disk. Returns an empty history if missing/corrupt."""
    path = _get_history_path()
    if not path.exists():
        return History()
    try:
        return History.from_json(path.read_text(encoding="utf-8"))
    except OSError:
        return History()


def save_history(history: History) -> None:
    """Save the history to disk."""
    path = _get_history_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(history.to_json(), encoding="utf-8")


def record_address(address: str) -> History:
    """Add *address* to the saved history (capped at ``settings.history_limit``)."""
    history = load_history()
    if history.record(address, settings.history_limit):
        save_history(history)
    return history


def clear_history() -> None:
    """Forget every saved address."""
    _get_history_path().unlink(missing_ok=True)
