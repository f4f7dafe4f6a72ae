"""HTTP page retrieval."""

import logging

import requests

from .config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from .exceptions import FetchError

logger = logging.getLogger(__name__)

_HTML_TYPES = ("text/html", "application/xhtml+xml")


def _guess_encoding(response: requests.Response) -> str:
    """Pick a body encoding when the server sent no charset; UTF-8 wins if it decodes."""
    try:
        response.content.decode("utf-8")
        return "utf-8"
    except UnicodeDecodeError:
        return response.apparent_encoding or "utf-8"


class PageFetcher:
    """Fetches pages with a fixed User-Agent and a bounded timeout."""

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ):
        self.user_agent = user_agent
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, url: str) -> str:
        """GET url and return its HTML body."""
        try:
            response = self.session.get(
                url,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(f"Failed to fetch {url}: {e}", url) from e

        content_type = response.headers.get("Content-Type", "")
        if content_type and content_type.split(";")[0].strip().lower() not in _HTML_TYPES:
            raise FetchError(f"Not an HTML page ({content_type}): {url}", url)

        if "charset" not in content_type.lower():
            response.encoding = _guess_encoding(response)

        logger.debug("Fetched %s (%d bytes, %s)", url, len(response.content), response.encoding)
        return response.text

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "PageFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
