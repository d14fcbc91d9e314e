"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Literal, Optional, Tuple

from scraperex.config import settings

ListKind = Literal["ordered", "unordered"]


@dataclass(frozen=True)
class ExtractionOptions:
    """Which categories to extract and how many items to keep per category."""

    include_metadata: bool = True
    extract_scripts: bool = False
    extract_styles: bool = False
    extract_tables: bool = True
    extract_lists: bool = True
    include_raw_html: bool = False
    max_items: int = field(default_factory=lambda: settings.max_items)

    def __post_init__(self) -> None:
        if isinstance(self.max_items, bool) or not isinstance(self.max_items, int):
            raise ValueError(f"max_items must be an integer, got {self.max_items!r}")
        if self.max_items < 1:
            raise ValueError(f"max_items must be positive, got {self.max_items}")


@dataclass(frozen=True)
class Link:
    text: str
    url: str


@dataclass(frozen=True)
class Image:
    alt: str
    url: str


@dataclass(frozen=True)
class Table:
    headers: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...]


@dataclass(frozen=True)
class HtmlList:
    kind: ListKind
    items: Tuple[str, ...]


@dataclass(frozen=True)
class Script:
    src: Optional[str] = None
    content: Optional[str] = None


@dataclass(frozen=True)
class Style:
    href: Optional[str] = None
    content: Optional[str] = None


@dataclass(frozen=True)
class ScrapingResult:
    """Structured, bounded summary of one page.

    Either the content fields are populated or :attr:`error` is set, never
    both.
    """

    title: str = ""
    headings: Tuple[str, ...] = ()
    links: Tuple[Link, ...] = ()
    images: Tuple[Image, ...] = ()
    paragraphs: Tuple[str, ...] = ()
    tables: Tuple[Table, ...] = ()
    lists: Tuple[HtmlList, ...] = ()
    metadata: Dict[str, str] = field(default_factory=dict)
    scripts: Tuple[Script, ...] = ()
    styles: Tuple[Style, ...] = ()
    raw_html: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def failure(cls, message: str) -> ScrapingResult:
        """Return a result with every content field empty and *message* as error."""
        return cls(error=message)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-ready representation (tuples become lists)."""
        return _listify(asdict(self))


def _listify(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _listify(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_listify(v) for v in value]
    return value
