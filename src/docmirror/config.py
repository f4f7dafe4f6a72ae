"""Configuration loading and validation."""

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

from .exceptions import ConfigError

DEFAULT_MIN_DELAY = 0.5
DEFAULT_MAX_DELAY = 5.0
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "Mozilla/5.0"


class Organization(str, Enum):
    """How crawled pages map to output files."""

    SINGLE = "single"
    CHAPTERS = "chapters"
    PAGES = "pages"

    @classmethod
    def parse(cls, value: str) -> "Organization":
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(o.value for o in cls)
            raise ConfigError(
                f"Unknown organization: {value}. Use one of: {choices}."
            ) from None

    @property
    def multi_file(self) -> bool:
        return self is not Organization.SINGLE


@dataclass(frozen=True)
class ScrapeConfig:
    """Per-run scraping configuration."""

    base_url: str
    output_path: Path
    min_delay: float = DEFAULT_MIN_DELAY
    max_delay: float = DEFAULT_MAX_DELAY
    organization: Organization = Organization.SINGLE
    single_page: bool = False
    no_delay: bool = False
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    seed: Optional[int] = None
    verbose: bool = False

    @property
    def output_dir(self) -> Path:
        """Directory used by the multi-file organizations."""
        return self.output_path.with_suffix("")

    def validate(self) -> None:
        """Validate the configuration before any network activity."""
        if not self.base_url:
            raise ConfigError("A documentation URL is required.")
        parsed = urlparse(self.base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigError(
                f"Invalid URL: {self.base_url}. Use an absolute http(s) address."
            )
        if not self.output_path.name:
            raise ConfigError("An output path is required.")
        if not self.organization.multi_file and self.output_path.is_dir():
            raise ConfigError(f"Output path is a directory: {self.output_path}")
        if self.min_delay < 0 or self.max_delay < 0:
            raise ConfigError("Delays cannot be negative.")
        if self.min_delay > self.max_delay:
            raise ConfigError("Minimum delay must be less than maximum delay.")
        if self.timeout <= 0:
            raise ConfigError("timeout must be positive.")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got: {raw}") from None


def load_config(
    url: str,
    output: str,
    min_delay: Optional[float] = None,
    max_delay: Optional[float] = None,
    organization: Optional[str] = None,
    single_page: bool = False,
    no_delay: bool = False,
    seed: Optional[int] = None,
    verbose: bool = False,
) -> ScrapeConfig:
    """Load config from .env and apply CLI overrides."""
    load_dotenv()

    config = ScrapeConfig(
        base_url=(url or "").strip(),
        output_path=Path(output) if output else Path(""),
        min_delay=min_delay if min_delay is not None else _env_float(
            "DOCMIRROR_MIN_DELAY", DEFAULT_MIN_DELAY
        ),
        max_delay=max_delay if max_delay is not None else _env_float(
            "DOCMIRROR_MAX_DELAY", DEFAULT_MAX_DELAY
        ),
        organization=Organization.parse(
            organization or os.getenv("DOCMIRROR_ORGANIZATION", "single")
        ),
        single_page=single_page,
        no_delay=no_delay,
        seed=seed,
        verbose=verbose,
    )

    config.validate()
    return config
