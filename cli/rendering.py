"""Utilities for rendering scrape results in the CLI."""

from __future__ import annotations

from typing import List

from scraperex.scraper.models import ScrapingResult

# Display limits; the result itself is never cut.
_CODE_PREVIEW_CHARS = 500
_RAW_HTML_PREVIEW_CHARS = 10000


def _preview(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def _section(lines: List[str], title: str, count: int) -> None:
    lines.append("")
    lines.append(f"== {title} ({count}) ==")


def render_result(result: ScrapingResult) -> str:
    """Render *result* as a plain-text summary.

    Args:
        result: A successful scrape result.

    Returns:
        Multi-line string, one section per non-empty category.
    """
    lines: List[str] = [f"Title: {result.title or '(none)'}"]

    if result.headings:
        _section(lines, "Headings", len(result.headings))
        lines.extend(f"  {h}" for h in result.headings)

    if result.paragraphs:
        _section(lines, "Paragraphs", len(result.paragraphs))
        lines.extend(f"  {p}" for p in result.paragraphs)

    if result.links:
        _section(lines, "Links", len(result.links))
        lines.extend(f"  {link.text or '(no text)'} -> {link.url}" for link in result.links)

    if result.images:
        _section(lines, "Images", len(result.images))
        lines.extend(f"  {img.alt or '(no alt)'} -> {img.url}" for img in result.images)

    for i, table in enumerate(result.tables, start=1):
        _section(lines, f"Table {i}", len(table.rows))
        if table.headers:
            lines.append("  | " + " | ".join(table.headers) + " |")
        lines.extend("  | " + " | ".join(row) + " |" for row in table.rows)

    for i, html_list in enumerate(result.lists, start=1):
        _section(lines, f"List {i} ({html_list.kind})", len(html_list.items))
        if html_list.kind == "ordered":
            lines.extend(f"  {n}. {item}" for n, item in enumerate(html_list.items, start=1))
        else:
            lines.extend(f"  - {item}" for item in html_list.items)

    if result.metadata:
        _section(lines, "Metadata", len(result.metadata))
        lines.extend(f"  {key}: {value}" for key, value in result.metadata.items())

    if result.scripts:
        _section(lines, "Scripts", len(result.scripts))
        for script in result.scripts:
            if script.src:
                lines.append(f"  src: {script.src}")
            if script.content:
                lines.append(_indent(_preview(script.content, _CODE_PREVIEW_CHARS)))

    if result.styles:
        _section(lines, "Styles", len(result.styles))
        for style in result.styles:
            if style.href:
                lines.append(f"  href: {style.href}")
            if style.content:
                lines.append(_indent(_preview(style.content, _CODE_PREVIEW_CHARS)))

    if result.raw_html is not None:
        _section(lines, "Raw HTML", len(result.raw_html))
        lines.append(_preview(result.raw_html, _RAW_HTML_PREVIEW_CHARS))

    return "\n".join(lines)


def _indent(block: str) -> str:
    return "\n".join(f"    {line}" for line in block.splitlines())
