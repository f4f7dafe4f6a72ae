"""Breadth-first crawl of a documentation site."""

import logging
from collections import deque
from enum import Enum
from typing import Iterable, Optional

from .config import ScrapeConfig
from .delay import PolitenessDelay
from .document import HtmlDocument
from .exceptions import DocMirrorError, LinkDiscoveryError
from .extractor import extract_page
from .fetcher import PageFetcher
from .models import Page
from .urls import UrlScope
from .writer import MultiFileWriter, SingleFileWriter

logger = logging.getLogger(__name__)


class CrawlState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    DRAINING = "draining"
    DONE = "done"


class Frontier:
    """FIFO queue of pending URLs plus the set of URLs already processed."""

    def __init__(self, seed: str):
        self.queue: deque[str] = deque([seed])
        self.visited: set[str] = set()
        self._queued: set[str] = {seed}

    def __len__(self) -> int:
        return len(self.queue)

    def __bool__(self) -> bool:
        return bool(self.queue)

    def push(self, url: str) -> bool:
        """Enqueue url unless it was already visited or is waiting; returns True if added."""
        if url in self.visited or url in self._queued:
            return False
        self.queue.append(url)
        self._queued.add(url)
        return True

    def extend(self, urls: Iterable[str]) -> int:
        return sum(1 for url in urls if self.push(url))

    def pop(self) -> str:
        url = self.queue.popleft()
        self._queued.discard(url)
        return url

    def mark_visited(self, url: str) -> None:
        self.visited.add(url)


class CrawlEngine:
    """Fetches, extracts and records pages, following in-scope links breadth-first."""

    def __init__(
        self,
        config: ScrapeConfig,
        fetcher: PageFetcher,
        writer: SingleFileWriter | MultiFileWriter,
        delay: PolitenessDelay,
    ):
        self.config = config
        self.fetcher = fetcher
        self.writer = writer
        self.delay = delay
        self.scope = UrlScope(config.base_url)
        self.frontier: Optional[Frontier] = None
        self.pages: list[Page] = []
        self.state = CrawlState.IDLE

    def run(self) -> list[Page]:
        """Crawl to completion and write the output; returns pages in crawl order."""
        self.state = CrawlState.RUNNING
        if self.config.single_page:
            self._run_single_page()
        else:
            self._run_frontier()

        self.state = CrawlState.DRAINING
        self.writer.finalize(self.pages)
        self.state = CrawlState.DONE
        return self.pages

    def _run_single_page(self) -> None:
        url = self.config.base_url
        logger.info("Scraping: %s", url)
        result = self._scrape(url)
        if result is not None:
            self._record(result[0])

    def _run_frontier(self) -> None:
        self.frontier = Frontier(self.config.base_url)
        frontier = self.frontier

        while frontier:
            url = frontier.pop()
            if url in frontier.visited:
                continue
            frontier.mark_visited(url)

            logger.info("Scraping: %s", url)
            result = self._scrape(url)
            if result is not None:
                page, links = result
                self._record(page)
                if links:
                    added = frontier.extend(links)
                    logger.debug("Queued %d new link(s) from %s", added, url)

            if frontier:
                self.delay.pause()

    def _scrape(self, url: str) -> Optional[tuple[Page, Optional[list[str]]]]:
        """Fetch and extract one page; returns None when the page is skipped."""
        try:
            html = self.fetcher.fetch(url)
            document = HtmlDocument(html, url)
            links = None if self.config.single_page else self._discover(document)
            page = extract_page(document, url, self.scope)
        except DocMirrorError as e:
            logger.warning("Error scraping %s: %s", url, e)
            return None
        return page, links

    def _discover(self, document: HtmlDocument) -> Optional[list[str]]:
        visited = self.frontier.visited if self.frontier is not None else ()
        try:
            return self.scope.discover_links(document, visited)
        except LinkDiscoveryError as e:
            logger.warning("Error getting links from %s: %s", document.url, e)
            return None

    def _record(self, page: Page) -> None:
        self.pages.append(page)
        self.writer.add(page)
