"""Shared pieces of the scrapers that build track lists from music sites."""

from __future__ import annotations

import enum
from pathlib import Path

import httpx

from .errors import LowfiError


class ScrapeError(LowfiError):
    """A scraping request failed."""

    default_message = "scraping failed"


class Source(enum.Enum):
    """The sites that can be scraped."""

    LOFIGIRL = "lofigirl"
    ARCHIVE = "archive"
    CHILLHOP = "chillhop"

    def cache_dir(self) -> str:
        """Name of this source's cache directory."""
        return self.value

    def url(self) -> str:
        """Root URL of this source."""
        return _URLS[self]


_URLS = {
    Source.CHILLHOP: "https://chillhop.com",
    Source.ARCHIVE: "https://ia601004.us.archive.org/31/items/lofigirl",
    Source.LOFIGIRL: "https://lofigirl.com/wp-content/uploads",
}


async def get_cached(client: httpx.AsyncClient, path: str, source: Source) -> str:
    """Fetch ``path`` from ``source``, caching the body under ``./cache``."""
    trimmed = path.strip("/")
    cache = Path(f"./cache/{source.cache_dir()}/{trimmed}.html")
    try:
        return cache.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        pass

    response = await client.get(f"{source.url()}/{trimmed}", follow_redirects=False)
    status = response.status_code
    if status == 429:
        raise ScrapeError(f"rate limit reached: {path}")
    if status != 404 and not response.is_success and not response.is_redirect:
        raise ScrapeError(f"non success code {status}: {path}")

    text = response.text
    cache.parent.mkdir(parents=True, exist_ok=True)
    cache.write_text(text, encoding="utf-8")

    if response.is_redirect:
        raise ScrapeError(f"redirect: {path}")
    if status == 404:
        raise ScrapeError(f"not found: {path}")
    return text