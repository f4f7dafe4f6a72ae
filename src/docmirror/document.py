"""Queryable HTML document backed by BeautifulSoup.

The extractor and link discovery only talk to :class:`HtmlDocument`, so the
parsing library stays behind this small surface: ``select``, ``select_one``,
``remove``, ``text`` and ``attr``.
"""

from typing import Iterable, Optional

from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup

from .exceptions import ExtractionError

Node = Tag
"""A node of the parsed tree, as handed out by :class:`HtmlDocument`."""


class HtmlDocument:
    """A parsed HTML page that can be queried and pruned with CSS selectors."""

    def __init__(self, html: str, url: str = "", parser: str = "html.parser"):
        self.url = url
        try:
            self._soup = BeautifulSoup(html, parser)
        except ParserRejectedMarkup as e:
            raise ExtractionError(f"Failed to parse {url}: {e}", url) from e

    @property
    def root(self) -> Node:
        return self._soup

    @property
    def body(self) -> Optional[Node]:
        return self._soup.body

    def select(self, selector: str, node: Optional[Node] = None) -> list[Node]:
        """Return every node matching selector, in document order."""
        return (self._soup if node is None else node).select(selector)

    def select_one(self, selector: str, node: Optional[Node] = None) -> Optional[Node]:
        return (self._soup if node is None else node).select_one(selector)

    def remove(self, selectors: Iterable[str] | str) -> int:
        """Detach every node matching the selector(s); returns the count removed."""
        if isinstance(selectors, str):
            selectors = [selectors]
        removed = 0
        for node in self._soup.select(", ".join(selectors)):
            if node.decomposed:
                continue  # inside an already removed region
            node.decompose()
            removed += 1
        return removed

    @staticmethod
    def text(node: Node) -> str:
        return node.get_text()

    @staticmethod
    def attr(node: Node, name: str) -> Optional[str]:
        """Return an attribute as a string; multi-valued ones are space-joined."""
        value = node.get(name)
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            return " ".join(value)
        return str(value)

    @staticmethod
    def tag_name(node: Node) -> str:
        return node.name or ""
