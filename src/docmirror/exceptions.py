"""Custom exceptions for docmirror."""

from typing import Optional


class DocMirrorError(Exception):
    """Base exception for docmirror."""


class ConfigError(DocMirrorError):
    """Raised when configuration is missing or invalid."""


class FetchError(DocMirrorError):
    """Raised when a page cannot be retrieved."""

    def __init__(self, message: str, url: str):
        self.url = url
        super().__init__(message)


class ExtractionError(DocMirrorError):
    """Raised when a fetched page cannot be parsed into content."""

    def __init__(self, message: str, url: str):
        self.url = url
        super().__init__(message)


class LinkDiscoveryError(DocMirrorError):
    """Raised when outbound links cannot be read from a fetched page."""

    def __init__(self, message: str, url: str):
        self.url = url
        super().__init__(message)


class OutputError(DocMirrorError):
    """Raised when an output file cannot be written."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)
