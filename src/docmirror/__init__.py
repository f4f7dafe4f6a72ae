"""Crawl a documentation site and mirror its content as Markdown."""

__version__ = "0.1.0"
