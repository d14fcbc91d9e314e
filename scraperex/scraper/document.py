"""Typed tree model over parsed markup.

Extraction code only talks to :class:`Element` / :class:`ParsedDocument`;
BeautifulSoup stays an implementation detail of this module.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Union

from bs4 import BeautifulSoup, Tag

from scraperex.scraper.errors import ParseFailed

# bs4 exposes multi-valued attributes (class, rel, …) as lists
_AttrValue = Union[str, List[str]]


def _flatten(value: _AttrValue) -> str:
    if isinstance(value, list):
        return " ".join(value)
    return value


class Element:
    """One element of a :class:`ParsedDocument`."""

    __slots__ = ("_node",)

    def __init__(self, node: Tag) -> None:
        self._node = node

    def __repr__(self) -> str:
        return f"<Element {self.tag} {self.attributes!r}>"

    # Two wrappers are equal when they wrap the very same node.
    def __eq__(self, other: object) -> bool:
        return isinstance(other, Element) and other._node is self._node

    def __hash__(self) -> int:
        return id(self._node)

    @property
    def tag(self) -> str:
        return self._node.name.lower()

    @property
    def parent(self) -> Optional[Element]:
        node = self._node.parent
        return Element(node) if node is not None else None

    @property
    def attributes(self) -> Dict[str, str]:
        return {name: _flatten(value) for name, value in self._node.attrs.items()}

    @property
    def children(self) -> List[Element]:
        return [Element(child) for child in self._node.children if isinstance(child, Tag)]

    def attribute(self, name: str) -> Optional[str]:
        """Return attribute *name*, or ``None`` when it is not set."""
        value = self._node.get(name)
        if value is None:
            return None
        return _flatten(value)

    def has_token(self, name: str, token: str) -> bool:
        """True if whitespace-separated attribute *name* contains *token*."""
        value = self.attribute(name)
        if not value:
            return False
        return token.lower() in value.lower().split()

    def text(self) -> str:
        """Concatenated text of every descendant text node, untrimmed."""
        return self._node.get_text()

    def inner_html(self) -> str:
        """Serialized markup of the element's contents."""
        return self._node.decode_contents()

    def iter_descendants(self) -> Iterator[Element]:
        for node in self._node.descendants:
            if isinstance(node, Tag):
                yield Element(node)

    def by_tag_name(self, *names: str) -> List[Element]:
        """Descendants whose tag is one of *names*, in document order."""
        wanted = {name.lower() for name in names}
        return [el for el in self.iter_descendants() if el.tag in wanted]

    def first(self, name: str) -> Optional[Element]:
        found = self._node.find(name.lower())
        return Element(found) if isinstance(found, Tag) else None


class ParsedDocument(Element):
    """Root of a parsed page, remembering the markup it was built from."""

    __slots__ = ("source",)

    def __init__(self, soup: BeautifulSoup, source: str) -> None:
        super().__init__(soup)
        self.source = source

    @property
    def tag(self) -> str:
        return "#document"


def parse_document(markup: Union[str, bytes]) -> ParsedDocument:
    """Parse *markup* into a :class:`ParsedDocument`.

    Raises:
        ParseFailed: If *markup* is not text, or the parser rejects it.
    """
    if isinstance(markup, bytes):
        markup = markup.decode("utf-8", errors="replace")
    if not isinstance(markup, str):
        raise ParseFailed(f"Expected markup text, got {type(markup).__name__}")
    try:
        soup = BeautifulSoup(markup, "html.parser")
    except Exception as exc:
        raise ParseFailed(f"Could not parse markup: {exc}") from exc
    return ParsedDocument(soup, markup)
