"""Scraper for the archived lofi file server."""

from __future__ import annotations

import asyncio

import httpx
from bs4 import BeautifulSoup

from .scrapers import Source, get_cached

_SELECTOR = "html > body > pre > a"
_TRAILING = 4


def extract_links(document: str) -> list[str]:
    """The link targets of a directory listing, without the parent link."""
    soup = BeautifulSoup(document, "html.parser")
    return [str(a.get("href", "")) for a in soup.select(_SELECTOR)[1:]]


async def parse_listing(client: httpx.AsyncClient, path: str) -> list[str]:
    return extract_links(await get_cached(client, path, Source.LOFIGIRL))


async def _release_files(client: httpx.AsyncClient, release: str) -> list[str]:
    items = await parse_listing(client, release)
    return [f"{release}{item}" for item in items if item.endswith(".mp3")]


async def scan() -> list[str]:
    """Every MP3 path on the server, release by release."""
    async with httpx.AsyncClient() as client:
        releases = await parse_listing(client, "/")
        if len(releases) < _TRAILING:
            raise ValueError("the listing has too few entries")
        releases = releases[: len(releases) - _TRAILING]
        results = await asyncio.gather(*(_release_files(client, r) for r in releases))
    return [file for files in results for file in files]


async def scrape() -> None:
    """Print a track list of everything on the server."""
    print(f"{Source.LOFIGIRL.url()}/")
    for file in await scan():
        print(file)