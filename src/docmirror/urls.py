"""URL resolution and crawl scope filtering.

Relative references are joined by plain string concatenation against the
seed URL rather than full RFC 3986 resolution, so ``../`` and ``./``
segments are passed through as-is. A trailing ``/`` on the seed is dropped
before joining, so ``https://x/docs/`` + ``intro`` gives
``https://x/docs/intro`` rather than ``base_url + "/" + href`` verbatim.
"""

import logging
import re
from typing import Container
from urllib.parse import urlparse

from .document import HtmlDocument
from .exceptions import LinkDiscoveryError

logger = logging.getLogger(__name__)

IGNORED_PATH_INFIXES = (
    "/assets/", "/static/", "/img/", "/images/",
    "/js/", "/css/", "/fonts/", "/examples/",
    "/blog/", "/community/", "/download/",
)

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")


def domain_prefix(url: str) -> str:
    """Return the scheme://host part of a URL."""
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def resolve_url(href: str, base_url: str) -> str:
    """Turn an href found on a page into an absolute URL."""
    if _SCHEME_RE.match(href):
        return href
    if href.startswith("//"):
        return f"{urlparse(base_url).scheme}:{href}"
    if href.startswith("/"):
        return domain_prefix(base_url) + href
    return base_url.rstrip("/") + "/" + href


class UrlScope:
    """Decides which URLs belong to the documentation rooted at base_url."""

    def __init__(self, base_url: str):
        self.base_url = base_url
        parsed = urlparse(base_url)
        self.host = parsed.netloc
        self.base_path = parsed.path.rstrip("/")

    def resolve(self, href: str) -> str:
        return resolve_url(href, self.base_url)

    def relative_path(self, path: str) -> str:
        if self.base_path and path.startswith(self.base_path):
            return path[len(self.base_path):]
        return path

    def in_scope(self, url: str, visited: Container[str] = ()) -> bool:
        """Whether url is on the seed's host, unvisited, and not an ignored branch."""
        try:
            parsed = urlparse(url)
        except ValueError:
            return False

        if parsed.netloc != self.host:
            return False
        if url in visited:
            return False

        rel_path = self.relative_path(parsed.path)
        return not any(infix in rel_path for infix in IGNORED_PATH_INFIXES)

    def page_level(self, url: str) -> int:
        """Depth of url below the seed, counted in path segments (minimum 1)."""
        if url.startswith(self.base_url):
            rel = url[len(self.base_url):]
        else:
            try:
                rel = self.relative_path(urlparse(url).path)
            except ValueError:
                rel = ""
        segments = [s for s in rel.strip("/").split("/") if s]
        return max(1, len(segments))

    def discover_links(self, document: HtmlDocument, visited: Container[str] = ()) -> list[str]:
        """Collect in-scope links from every anchor in the document, in order."""
        links: list[str] = []
        seen: set[str] = set()
        try:
            anchors = document.select("a[href]")
        except ValueError as e:
            raise LinkDiscoveryError(
                f"Failed to read links from {document.url}: {e}", document.url
            ) from e

        for anchor in anchors:
            href = (document.attr(anchor, "href") or "").strip()
            href = href.split("#", 1)[0]
            if not href:
                continue
            url = self.resolve(href)
            if url in seen or not self.in_scope(url, visited):
                continue
            seen.add(url)
            links.append(url)

        logger.debug("Found %d in-scope links on %s", len(links), document.url)
        return links
