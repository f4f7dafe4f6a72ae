"""Crawl engine tests against an in-memory site."""

from unittest.mock import patch

from conftest import BASE_URL, SITE, FakeFetcher, FixedRandom, make_page
from docmirror.config import Organization
from docmirror.crawler import CrawlEngine, CrawlState, Frontier
from docmirror.delay import PolitenessDelay
from docmirror.exceptions import LinkDiscoveryError
from docmirror.urls import UrlScope
from docmirror.writer import create_writer

ALPHA = f"{BASE_URL}/alpha"
BETA = f"{BASE_URL}/beta"


def _engine(config, fetcher, delay):
    return CrawlEngine(config, fetcher, create_writer(config), delay)


# --- Frontier ---


def test_frontier_starts_with_seed():
    frontier = Frontier("https://x.org")
    assert list(frontier.queue) == ["https://x.org"]
    assert frontier.visited == set()


def test_frontier_never_queues_twice():
    frontier = Frontier("https://x.org")
    assert frontier.push("https://x.org/a")
    assert not frontier.push("https://x.org/a")
    assert not frontier.push("https://x.org")
    assert frontier.extend(["https://x.org/b", "https://x.org/a", "https://x.org/b"]) == 1
    assert list(frontier.queue) == ["https://x.org", "https://x.org/a", "https://x.org/b"]


def test_frontier_never_requeues_visited():
    frontier = Frontier("https://x.org")
    frontier.mark_visited(frontier.pop())
    assert not frontier
    assert not frontier.push("https://x.org")


# --- CrawlEngine ---


def test_crawl_is_breadth_first_and_deduplicated(make_config, site_fetcher, no_delay):
    engine = _engine(make_config(Organization.PAGES), site_fetcher, no_delay)
    pages = engine.run()

    assert [p.url for p in pages] == [BASE_URL, ALPHA, BETA]
    assert site_fetcher.calls == [BASE_URL, ALPHA, BETA]
    assert engine.frontier.visited == set(site_fetcher.calls)
    assert engine.state is CrawlState.DONE


def test_crawl_never_fetches_ignored_or_foreign_links(make_config, site_fetcher, no_delay):
    _engine(make_config(), site_fetcher, no_delay).run()
    assert f"{BASE_URL}/blog/post" not in site_fetcher.calls
    assert all(url.startswith("https://docs.example.com/") for url in site_fetcher.calls)


def test_page_levels_and_titles(make_config, site_fetcher, no_delay):
    pages = _engine(make_config(), site_fetcher, no_delay).run()
    assert [(p.title, p.level, p.filename) for p in pages] == [
        ("Guide", 1, "guide.md"),
        ("Alpha", 1, "alpha.md"),
        ("Beta", 1, "beta.md"),
    ]


def test_failed_page_is_skipped_and_not_retried(make_config, no_delay, caplog):
    fetcher = FakeFetcher(SITE, failing=(ALPHA,))
    pages = _engine(make_config(), fetcher, no_delay).run()

    assert [p.url for p in pages] == [BASE_URL, BETA]
    # beta links back to alpha; it must not be fetched a second time
    assert fetcher.calls.count(ALPHA) == 1
    assert f"Error scraping {ALPHA}" in caplog.text


def test_failed_seed_produces_no_pages(make_config, no_delay):
    fetcher = FakeFetcher({})
    engine = _engine(make_config(), fetcher, no_delay)
    assert engine.run() == []
    assert fetcher.calls == [BASE_URL]
    assert engine.state is CrawlState.DONE


def test_link_discovery_failure_keeps_page(make_config, site_fetcher, no_delay, caplog):
    with patch.object(
        UrlScope, "discover_links", side_effect=LinkDiscoveryError("bad markup", BASE_URL)
    ):
        pages = _engine(make_config(), site_fetcher, no_delay).run()

    assert [p.url for p in pages] == [BASE_URL]
    assert "Error getting links from" in caplog.text


def test_single_page_mode_skips_link_discovery(make_config, site_fetcher, no_delay):
    engine = _engine(make_config(single_page=True), site_fetcher, no_delay)
    with patch.object(UrlScope, "discover_links") as discover:
        pages = engine.run()

    discover.assert_not_called()
    assert [p.url for p in pages] == [BASE_URL]
    assert site_fetcher.calls == [BASE_URL]
    assert engine.frontier is None


def test_delay_applied_between_fetches_only(make_config, site_fetcher):
    slept = []
    delay = PolitenessDelay(1.0, 2.0, rng=FixedRandom([0.5]), sleep=slept.append)
    _engine(make_config(), site_fetcher, delay).run()
    # three fetches, two gaps between them
    assert slept == [1.5, 1.5]


def test_self_links_do_not_loop(make_config, no_delay):
    site = {BASE_URL: make_page("Loop", "<p>x</p>", links=(BASE_URL, "/guide", "./"))}
    fetcher = FakeFetcher(site)
    pages = _engine(make_config(), fetcher, no_delay).run()
    assert len(pages) == 1
    # "./" resolves to a distinct URL that is fetched once and fails
    assert fetcher.calls == [BASE_URL, f"{BASE_URL}/./"]
