"""Write crawled pages to the filesystem."""

import logging
from pathlib import Path

from .config import ScrapeConfig
from .exceptions import OutputError
from .formatter import render_corpus_header, render_index
from .models import Page

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.md"


def write_text(path: Path, content: str) -> None:
    """Write content to path, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class SingleFileWriter:
    """Accumulates every page into one document written at the end of the crawl."""

    def __init__(self, base_url: str, output_path: Path, include_header: bool = True):
        self.base_url = base_url
        self.output_path = Path(output_path)
        self.include_header = include_header
        self._parts: list[str] = []

    def add(self, page: Page) -> None:
        self._parts.append(page.content)

    def finalize(self, pages: list[Page]) -> Path:
        header = render_corpus_header(self.base_url) if self.include_header else ""
        try:
            write_text(self.output_path, header + "".join(self._parts))
        except OSError as e:
            raise OutputError(f"Failed to write {self.output_path}: {e}", str(self.output_path)) from e
        logger.info("Wrote %d page(s) to %s", len(pages), self.output_path)
        return self.output_path


class MultiFileWriter:
    """Writes each page to its own file as it arrives, then an index."""

    def __init__(self, base_url: str, output_dir: Path):
        self.base_url = base_url
        self.output_dir = Path(output_dir)
        self._written: dict[str, str] = {}

    def add(self, page: Page) -> None:
        path = self.output_dir / page.filename
        previous = self._written.get(page.filename)
        if previous is not None and previous != page.url:
            logger.warning(
                "%s from %s overwrites the page written from %s",
                page.filename, page.url, previous,
            )
        try:
            write_text(path, page.content)
        except OSError as e:
            logger.error("Error writing file %s: %s", path, e)
            return
        self._written[page.filename] = page.url

    def finalize(self, pages: list[Page]) -> Path:
        index_path = self.output_dir / INDEX_FILENAME
        try:
            write_text(index_path, render_index(self.base_url, pages))
        except OSError as e:
            raise OutputError(f"Failed to write {index_path}: {e}", str(index_path)) from e
        logger.info("Wrote %d page(s) and an index to %s", len(pages), self.output_dir)
        return index_path


def create_writer(config: ScrapeConfig) -> SingleFileWriter | MultiFileWriter:
    """Pick the writer for the configured organization."""
    if config.organization.multi_file:
        return MultiFileWriter(config.base_url, config.output_dir)
    return SingleFileWriter(
        config.base_url,
        config.output_path,
        include_header=not config.single_page,
    )
