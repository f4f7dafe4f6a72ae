"""Utility functions for docmirror."""

from urllib.parse import urlparse

MAX_FILENAME_LENGTH = 100
MARKDOWN_EXTENSION = ".md"

_UNSAFE_CHARS = ("/", "\\", "?", "%", "*", ":", "|", '"', "<", ">", ".", " ")


def sanitize_filename(name: str) -> str:
    """Convert text to a lower-case, filesystem-safe file stem."""
    result = name.lower()
    for char in _UNSAFE_CHARS:
        result = result.replace(char, "_")
    if not result:
        result = "unnamed"
    return result[:MAX_FILENAME_LENGTH]


def last_path_segment(url: str) -> str:
    """Return the final non-empty segment of a URL path."""
    segments = [s for s in urlparse(url).path.split("/") if s]
    return segments[-1] if segments else ""


def page_filename(title: str, url: str) -> str:
    """Derive a page's output filename from its title or URL."""
    stem = title.strip() or last_path_segment(url)
    return sanitize_filename(stem) + MARKDOWN_EXTENSION


def strip_scheme(url: str) -> str:
    """Remove a leading http:// or https:// from a URL."""
    for prefix in ("https://", "http://"):
        if url.startswith(prefix):
            return url[len(prefix):]
    return url
