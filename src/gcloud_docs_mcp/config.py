"""Runtime settings for the Google Cloud docs MCP server.

Every value can be overridden through an environment variable. The CLI loads
a `.env` file from the working directory before reading them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .exceptions import ConfigurationError

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        number = float(value)
    except ValueError:
        raise ConfigurationError(name, value, "a number of seconds") from None
    if number <= 0:
        raise ConfigurationError(name, value, "a positive number of seconds")
    return number


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        number = int(value)
    except ValueError:
        raise ConfigurationError(name, value, "an integer") from None
    if number <= 0:
        raise ConfigurationError(name, value, "a positive integer")
    return number


@dataclass
class Settings:
    # Documentation site
    docs_base_url: str = field(
        default_factory=lambda: os.environ.get(
            "GCLOUD_DOCS_BASE_URL", "https://cloud.google.com"
        ).rstrip("/")
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("GCLOUD_DOCS_USER_AGENT", DEFAULT_USER_AGENT)
    )

    # Timeouts, in seconds
    page_timeout: float = field(
        default_factory=lambda: _env_float("GCLOUD_DOCS_PAGE_TIMEOUT", 30.0)
    )
    search_timeout: float = field(
        default_factory=lambda: _env_float("GCLOUD_DOCS_SEARCH_TIMEOUT", 15.0)
    )

    # Output bounds
    max_content_chars: int = field(
        default_factory=lambda: _env_int("GCLOUD_DOCS_MAX_CONTENT_CHARS", 20000)
    )
    fetch_top_k: int = 3
    related_docs_count: int = 3

    # Search probes
    web_search_enabled: bool = field(
        default_factory=lambda: _env_bool("GCLOUD_DOCS_WEB_SEARCH", True)
    )
    site_search_enabled: bool = field(
        default_factory=lambda: _env_bool("GCLOUD_DOCS_SITE_SEARCH", True)
    )

    @property
    def docs_domain(self) -> str:
        """Host name of the documentation site, e.g. ``cloud.google.com``."""
        return self.docs_base_url.split("://", 1)[-1].split("/", 1)[0]

    def doc_url(self, path: str) -> str:
        """Absolute URL for a documentation path."""
        return f"{self.docs_base_url}/{path}"


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
