"""Data models for docmirror."""

from dataclasses import dataclass
from enum import Enum


class BlockKind(Enum):
    """Kinds of content block the extractor recognizes."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    CODE = "code"
    LIST = "list"
    QUOTE = "quote"


@dataclass(frozen=True)
class Block:
    """One semantic unit of extracted content."""

    kind: BlockKind
    text: str = ""
    level: int = 0  # headings only
    language: str = ""  # code only
    items: tuple[str, ...] = ()  # lists only


@dataclass(frozen=True)
class Page:
    """A crawled page rendered to Markdown."""

    title: str
    content: str  # markdown body, including the source line
    url: str
    filename: str
    level: int = 1
