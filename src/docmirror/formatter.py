"""Markdown rendering of extracted blocks, pages and the index."""

from typing import Iterable

from .models import Block, BlockKind, Page
from .utils import strip_scheme

PAGE_SEPARATOR = "---\n\n"
INDENT = "  "


def render_block(block: Block) -> str:
    """Render a single block, including its trailing blank line."""
    if block.kind is BlockKind.HEADING:
        return f"{'#' * block.level} {block.text}\n\n"
    if block.kind is BlockKind.PARAGRAPH:
        return f"{block.text}\n\n"
    if block.kind is BlockKind.CODE:
        return f"```{block.language}\n{block.text}\n```\n\n"
    if block.kind is BlockKind.LIST:
        return "".join(f"- {item}\n" for item in block.items) + "\n"
    if block.kind is BlockKind.QUOTE:
        lines = (line.strip() for line in block.text.split("\n"))
        return "".join(f"> {line}\n" for line in lines) + "\n"
    raise ValueError(f"Unknown block kind: {block.kind}")


def render_page(url: str, title: str, blocks: Iterable[Block]) -> str:
    """Assemble a page body: source line, optional title, blocks, separator."""
    parts = [f"\n## Source: {url}\n\n"]
    if title:
        parts.append(f"# {title}\n\n")
    parts.extend(render_block(block) for block in blocks)
    parts.append(PAGE_SEPARATOR)
    return "".join(parts)


def render_corpus_header(base_url: str) -> str:
    return f"# Documentation: {strip_scheme(base_url)}\n\n"


def render_index(base_url: str, pages: Iterable[Page]) -> str:
    """Table of contents linking every page, indented by depth, in crawl order."""
    lines = [render_corpus_header(base_url), "## Table of Contents\n\n"]
    for page in pages:
        indent = INDENT * (page.level - 1)
        lines.append(f"{indent}- [{page.title}]({page.filename}) - [source]({page.url})\n")
    return "".join(lines)
