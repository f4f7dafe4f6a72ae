"""Heuristic content extraction from documentation pages.

Boilerplate regions are removed by selector, the main content region is
located, and its block-level elements are turned into :class:`Block` values
in document order. Rendering lives in :mod:`docmirror.formatter`.
"""

import logging
from typing import Optional

from .document import HtmlDocument, Node
from .formatter import render_page
from .models import Block, BlockKind, Page
from .urls import UrlScope
from .utils import page_filename

logger = logging.getLogger(__name__)

BOILERPLATE_SELECTORS = (
    "header", "footer", "nav",
    ".header", ".footer", ".navigation", ".nav", ".navbar",
    ".sidebar", ".side-bar", ".menu", ".toc",
    ".ad", ".ads", ".advertisement",
    ".cookie-banner", ".cookies",
    ".search", ".searchbox",
    '[role="banner"]', '[role="navigation"]',
    ".social-links", ".share-buttons",
)

MAIN_CONTENT_SELECTORS = (
    "article",
    "main",
    '[role="main"]',
    ".main-content",
    ".content",
    ".article",
    ".post",
    ".documentation",
    ".doc-content",
    "#content",
    "#main",
)

BLOCK_SELECTOR = "h2, h3, h4, h5, h6, p, pre, ul, ol, blockquote"

LANGUAGE_CLASS_PREFIXES = ("language-", "lang-", "brush:")

_HEADINGS = {"h2", "h3", "h4", "h5", "h6"}


def strip_boilerplate(doc: HtmlDocument) -> int:
    """Remove navigation, banners and other non-content regions."""
    return doc.remove(BOILERPLATE_SELECTORS)


def find_main_region(doc: HtmlDocument) -> Node:
    """Return the first main-content match by priority, else body, else the document."""
    for selector in MAIN_CONTENT_SELECTORS:
        region = doc.select_one(selector)
        if region is not None:
            return region
    return doc.body if doc.body is not None else doc.root


def extract_title(doc: HtmlDocument, region: Node) -> str:
    heading = doc.select_one("h1", region)
    if heading is None:
        return ""
    return doc.text(heading).strip()


def detect_language(class_attr: Optional[str]) -> str:
    """Read a code language from classes like ``language-python`` or ``brush: js``."""
    if not class_attr:
        return ""
    for prefix in LANGUAGE_CLASS_PREFIXES:
        if prefix in class_attr:
            tokens = class_attr.split(prefix, 1)[1].split()
            return tokens[0] if tokens else ""
    return ""


def _heading_block(doc: HtmlDocument, node: Node) -> Optional[Block]:
    text = doc.text(node).strip()
    if not text:
        return None
    return Block(BlockKind.HEADING, text=text, level=int(doc.tag_name(node)[1]))


def _paragraph_block(doc: HtmlDocument, node: Node) -> Optional[Block]:
    text = doc.text(node).strip()
    if not text:
        return None
    return Block(BlockKind.PARAGRAPH, text=text)


def _code_block(doc: HtmlDocument, node: Node) -> Optional[Block]:
    code_nodes = doc.select("code", node)
    if not code_nodes:
        return None
    code = "".join(doc.text(c) for c in code_nodes).strip()
    if not code:
        return None
    language = detect_language(doc.attr(code_nodes[0], "class"))
    return Block(BlockKind.CODE, text=code, language=language)


def _list_block(doc: HtmlDocument, node: Node) -> Block:
    items = tuple(
        text for text in (doc.text(li).strip() for li in doc.select("li", node)) if text
    )
    return Block(BlockKind.LIST, items=items)


def _quote_block(doc: HtmlDocument, node: Node) -> Optional[Block]:
    text = doc.text(node).strip()
    if not text:
        return None
    return Block(BlockKind.QUOTE, text=text)


_BUILDERS = {
    "p": _paragraph_block,
    "pre": _code_block,
    "ul": _list_block,
    "ol": _list_block,
    "blockquote": _quote_block,
}


def extract_blocks(doc: HtmlDocument, region: Node) -> list[Block]:
    """Walk the region's block elements in document order."""
    blocks = []
    for node in doc.select(BLOCK_SELECTOR, region):
        name = doc.tag_name(node)
        builder = _heading_block if name in _HEADINGS else _BUILDERS.get(name)
        if builder is None:
            continue
        block = builder(doc, node)
        if block is not None:
            blocks.append(block)
    return blocks


def extract_page(doc: HtmlDocument, url: str, scope: UrlScope) -> Page:
    """Strip, locate, walk and render one page. Mutates doc."""
    removed = strip_boilerplate(doc)
    region = find_main_region(doc)
    title = extract_title(doc, region)
    blocks = extract_blocks(doc, region)
    logger.debug(
        "Extracted %d blocks from %s (%d boilerplate nodes removed)",
        len(blocks), url, removed,
    )

    return Page(
        title=title,
        content=render_page(url, title, blocks),
        url=url,
        filename=page_filename(title, url),
        level=scope.page_level(url),
    )
