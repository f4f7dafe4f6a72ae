"""CLI entry point for docmirror."""

import random
import sys

import click

from .config import Organization, load_config
from .crawler import CrawlEngine
from .delay import PolitenessDelay
from .exceptions import ConfigError, OutputError
from .fetcher import PageFetcher
from .logging_config import setup_logging
from .writer import create_writer

EPILOG = """\b
Organization types:
  single    Create a single file containing all documentation
  chapters  Split documentation into chapter files
  pages     Split documentation into individual page files

\b
Examples:
  docmirror -u https://nextjs.org/docs -o nextjs_doc.md
  docmirror -u https://react.dev/reference/react -o react_docs/doc.md --org pages
  docmirror -u https://docs.python.org/3/ -o python_doc.md --org chapters

When using 'chapters' or 'pages' organization, the output path without its
extension is used as the base directory for the documentation files.
"""


@click.command(
    epilog=EPILOG,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option(
    "-u", "--url",
    required=True,
    help="Documentation URL to scrape",
)
@click.option(
    "-o", "--output",
    type=click.Path(),
    required=True,
    help="Output file path (Markdown format)",
)
@click.option(
    "--min", "min_delay",
    type=float,
    default=None,
    help="Minimum delay between requests in seconds (default: 0.5)",
)
@click.option(
    "--max", "max_delay",
    type=float,
    default=None,
    help="Maximum delay between requests in seconds (default: 5.0)",
)
@click.option(
    "-n", "--nodelay", "no_delay",
    is_flag=True,
    default=False,
    help="Disable delay between requests",
)
@click.option(
    "-s", "--single-page",
    is_flag=True,
    default=False,
    help="Scrape only the given URL without following links",
)
@click.option(
    "--org", "--organization", "organization",
    type=click.Choice([o.value for o in Organization], case_sensitive=False),
    default=None,
    help="Organization type (default: single)",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Random seed for delay sampling",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
def main(url, output, min_delay, max_delay, no_delay, single_page, organization, seed, verbose):
    """Scrape a documentation site into Markdown.

    Starting from URL, every reachable page on the same site is fetched,
    stripped of navigation and other boilerplate, and written as Markdown
    to OUTPUT.
    """
    setup_logging(verbose)

    try:
        config = load_config(
            url=url,
            output=output,
            min_delay=min_delay,
            max_delay=max_delay,
            organization=organization,
            single_page=single_page,
            no_delay=no_delay,
            seed=seed,
            verbose=verbose,
        )
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(2)

    if verbose:
        click.echo(f"Organization: {config.organization.value}")
        target = config.output_dir if config.organization.multi_file else config.output_path
        click.echo(f"Output: {target}")

    delay = PolitenessDelay(
        config.min_delay,
        config.max_delay,
        rng=random.Random(config.seed),
        enabled=not config.no_delay,
    )

    with PageFetcher(user_agent=config.user_agent, timeout=config.timeout) as fetcher:
        engine = CrawlEngine(config, fetcher, create_writer(config), delay)
        try:
            pages = engine.run()
        except OutputError as e:
            click.echo(f"Failed to write output: {e}", err=True)
            sys.exit(1)

    if not pages:
        click.echo(f"No pages could be scraped from {config.base_url}", err=True)
        sys.exit(1)

    click.echo(f"Done! Scraped {len(pages)} page(s).")
