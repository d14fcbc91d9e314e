"""Content extraction: turns a :class:`ParsedDocument` into a :class:`ScrapingResult`."""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple
from urllib.parse import urlsplit

from scraperex.scraper.document import Element, ParsedDocument
from scraperex.scraper.models import (
    ExtractionOptions,
    HtmlList,
    Image,
    Link,
    ScrapingResult,
    Script,
    Style,
    Table,
)

logger = logging.getLogger(__name__)

_DEFAULT_PORTS = {"http": 80, "https": 443}
_SECTION_TAGS = {"thead", "tbody", "tfoot"}


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _clean(el: Element) -> str:
    return el.text().strip()


def _origin(base_address: str) -> Optional[str]:
    """Return ``scheme://host[:port]`` of *base_address*, or ``None`` if malformed."""
    try:
        parts = urlsplit(base_address)
        port = parts.port
    except ValueError:
        return None
    if not parts.scheme or not parts.hostname:
        return None
    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"
    if port is not None and _DEFAULT_PORTS.get(parts.scheme) != port:
        host = f"{host}:{port}"
    return f"{parts.scheme}://{host}"


def resolve_url(reference: str, base_address: str) -> str:
    """Make a root-relative *reference* absolute against *base_address*.

    Anything not starting with ``/`` is returned as written, as is every
    reference when the base cannot be parsed.
    """
    if not reference.startswith("/"):
        return reference
    origin = _origin(base_address)
    if origin is None:
        return reference
    return f"{origin}{reference}"


def _extract_title(doc: ParsedDocument) -> str:
    """Return the text of the first ``<title>`` element, or empty string."""
    title = doc.first("title")
    return _clean(title) if title is not None else ""


def _extract_texts(doc: ParsedDocument, *tags: str) -> List[str]:
    texts = (_clean(el) for el in doc.by_tag_name(*tags))
    return [text for text in texts if text]


def _extract_headings(doc: ParsedDocument, base_address: str) -> List[str]:
    return _extract_texts(doc, "h1", "h2", "h3", "h4", "h5", "h6")


def _extract_paragraphs(doc: ParsedDocument, base_address: str) -> List[str]:
    return _extract_texts(doc, "p")


def _extract_links(doc: ParsedDocument, base_address: str) -> List[Link]:
    """Return ``<a>`` elements with an ``href``; text may be empty."""
    links: List[Link] = []
    for anchor in doc.by_tag_name("a"):
        href = anchor.attribute("href") or ""
        if href:
            links.append(Link(text=_clean(anchor), url=resolve_url(href, base_address)))
    return links


def _extract_images(doc: ParsedDocument, base_address: str) -> List[Image]:
    images: List[Image] = []
    for img in doc.by_tag_name("img"):
        src = img.attribute("src") or ""
        if src:
            images.append(Image(alt=img.attribute("alt") or "", url=resolve_url(src, base_address)))
    return images


def _row_cells(row: Element) -> Tuple[str, ...]:
    return tuple(_clean(td) for td in row.by_tag_name("td"))


def _is_body_row(row: Element, table: Element) -> bool:
    """True unless the row's closest section inside *table* is a thead/tfoot.

    Rows sitting directly under ``<table>`` count as body rows, as they would
    in a browser, which wraps them in an implicit ``<tbody>``.
    """
    node = row.parent
    while node is not None and node != table:
        if node.tag in _SECTION_TAGS:
            return node.tag == "tbody"
        node = node.parent
    return True


def _extract_table(table: Element) -> Optional[Table]:
    headers = [_clean(th) for th in table.by_tag_name("th")]
    rows = table.by_tag_name("tr")

    if headers:
        data_rows = [row for row in rows if _is_body_row(row, table)]
    elif rows:
        # No header cells: the first row doubles as the header.
        headers = list(_row_cells(rows[0]))
        data_rows = rows[1:]
    else:
        data_rows = []

    body = tuple(cells for cells in map(_row_cells, data_rows) if cells)
    if not headers and not body:
        return None
    return Table(headers=tuple(headers), rows=body)


def _extract_tables(doc: ParsedDocument, base_address: str) -> List[Table]:
    tables = (_extract_table(table) for table in doc.by_tag_name("table"))
    return [table for table in tables if table is not None]


def _extract_lists(doc: ParsedDocument, base_address: str) -> List[HtmlList]:
    """Every ``<ul>`` then every ``<ol>``; nested lists appear on their own too."""
    lists: List[HtmlList] = []
    for tag, kind in (("ul", "unordered"), ("ol", "ordered")):
        for list_el in doc.by_tag_name(tag):
            items = tuple(text for text in map(_clean, list_el.by_tag_name("li")) if text)
            if items:
                lists.append(HtmlList(kind=kind, items=items))
    return lists


def _extract_metadata(doc: ParsedDocument) -> Dict[str, str]:
    """Merge ``<meta>`` tags; Open Graph then Twitter passes overwrite earlier keys."""
    metas = doc.by_tag_name("meta")
    metadata: Dict[str, str] = {}

    for meta in metas:
        key = meta.attribute("name") or meta.attribute("property") or ""
        content = meta.attribute("content") or ""
        if key and content:
            metadata[key] = content

    for attr, prefix in (("property", "og:"), ("name", "twitter:")):
        for meta in metas:
            key = meta.attribute(attr) or ""
            content = meta.attribute("content") or ""
            if key.startswith(prefix) and content:
                metadata[key] = content

    return metadata


def _extract_scripts(doc: ParsedDocument, base_address: str) -> List[Script]:
    return [
        Script(src=script.attribute("src"), content=script.inner_html().strip())
        for script in doc.by_tag_name("script")
    ]


def _extract_styles(doc: ParsedDocument, base_address: str) -> List[Style]:
    styles = [
        Style(href=link.attribute("href"))
        for link in doc.by_tag_name("link")
        if link.has_token("rel", "stylesheet")
    ]
    styles.extend(Style(content=style.inner_html().strip()) for style in doc.by_tag_name("style"))
    return styles


# Every sequence field of the result: (field, extractor, gating option flag).
# Fields without a flag are always extracted.
_Extractor = Callable[[ParsedDocument, str], Sequence[object]]
_SEQUENCE_FIELDS: Tuple[Tuple[str, _Extractor, Optional[str]], ...] = (
    ("headings", _extract_headings, None),
    ("links", _extract_links, None),
    ("images", _extract_images, None),
    ("paragraphs", _extract_paragraphs, None),
    ("tables", _extract_tables, "extract_tables"),
    ("lists", _extract_lists, "extract_lists"),
    ("scripts", _extract_scripts, "extract_scripts"),
    ("styles", _extract_styles, "extract_styles"),
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract(doc: ParsedDocument, base_address: str, options: ExtractionOptions) -> ScrapingResult:
    """Project *doc* into a :class:`ScrapingResult` under *options*.

    Disabled categories come back empty; every sequence field is cut to its
    first ``options.max_items`` entries after full extraction.  Metadata,
    title and raw HTML are never truncated.
    """
    sequences: Dict[str, Tuple[object, ...]] = {}
    for name, extractor, flag in _SEQUENCE_FIELDS:
        if flag is not None and not getattr(options, flag):
            sequences[name] = ()
            continue
        items = extractor(doc, base_address)
        logger.debug("Extracted %d %s", len(items), name)
        sequences[name] = tuple(items[: options.max_items])

    return ScrapingResult(
        title=_extract_title(doc),
        metadata=_extract_metadata(doc) if options.include_metadata else {},
        raw_html=doc.source if options.include_raw_html else None,
        **sequences,  # type: ignore[arg-type]
    )
