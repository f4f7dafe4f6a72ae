"""Fixtures: fake fetcher, a small documentation site, logger reset."""

import logging

import pytest

from docmirror.config import Organization, ScrapeConfig
from docmirror.delay import PolitenessDelay
from docmirror.exceptions import FetchError

BASE_URL = "https://docs.example.com/guide"


def make_page(title: str, body: str = "", links: tuple[str, ...] = ()) -> str:
    anchors = "".join(f'<li><a href="{href}">{href}</a></li>' for href in links)
    return (
        "<html><head><title>ignored</title></head><body>"
        f"<nav><ul>{anchors}</ul></nav>"
        f"<main><h1>{title}</h1>{body}</main>"
        "<footer><p>Copyright</p></footer>"
        "</body></html>"
    )


SITE = {
    BASE_URL: make_page(
        "Guide",
        "<p>Welcome to the guide.</p>",
        links=("/guide/alpha", "beta", "/guide/blog/post", "https://elsewhere.org/x"),
    ),
    f"{BASE_URL}/alpha": make_page(
        "Alpha",
        '<h2>Install</h2><pre><code class="language-bash">pip install alpha</code></pre>',
        links=("/guide", "/guide/beta", "/guide/alpha#usage"),
    ),
    f"{BASE_URL}/beta": make_page("Beta", "<p>Second page.</p>", links=("/guide/alpha",)),
    f"{BASE_URL}/blog/post": make_page("Blog post"),
}


class FakeFetcher:
    """Serves pages from a dict and records every fetch."""

    def __init__(self, pages: dict[str, str], failing: tuple[str, ...] = ()):
        self.pages = pages
        self.failing = set(failing)
        self.calls: list[str] = []
        self.closed = False

    def fetch(self, url: str) -> str:
        self.calls.append(url)
        if url in self.failing or url not in self.pages:
            raise FetchError(f"Failed to fetch {url}: 404", url)
        return self.pages[url]

    def close(self) -> None:
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class FixedRandom:
    """Stand-in for random.Random that replays a fixed sequence."""

    def __init__(self, values):
        self.values = list(values)
        self._i = 0

    def random(self) -> float:
        value = self.values[self._i % len(self.values)]
        self._i += 1
        return value


@pytest.fixture(autouse=True)
def reset_docmirror_logger():
    """Undo setup_logging so caplog sees records in every test."""
    yield
    logger = logging.getLogger("docmirror")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def site_fetcher():
    return FakeFetcher(SITE)


@pytest.fixture
def no_delay():
    return PolitenessDelay(0.0, 0.0, enabled=False)


@pytest.fixture
def make_config(tmp_path):
    def _make(organization=Organization.SINGLE, single_page=False, output="out/docs.md"):
        return ScrapeConfig(
            base_url=BASE_URL,
            output_path=tmp_path / output,
            organization=organization,
            single_page=single_page,
            no_delay=True,
        )

    return _make
