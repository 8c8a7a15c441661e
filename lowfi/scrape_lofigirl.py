"""Scraper for the lofigirl upload directory."""

from __future__ import annotations

import asyncio

import httpx
from bs4 import BeautifulSoup

from .scrapers import Source, get_cached

_SELECTOR = "html > body > pre > a"
_SKIP = 5


def extract_links(document: str) -> list[str]:
    """The link targets of a directory listing, without its header links."""
    soup = BeautifulSoup(document, "html.parser")
    return [str(a.get("href", "")) for a in soup.select(_SELECTOR)[_SKIP:]]


async def parse_listing(client: httpx.AsyncClient, path: str) -> list[str]:
    return extract_links(await get_cached(client, path, Source.LOFIGIRL))


def _year(item: str) -> int | None:
    if not item.endswith("/"):
        return None
    digits = item[:-1]
    return int(digits) if digits.isascii() and digits.isdigit() else None


async def _month_files(client: httpx.AsyncClient, year: int, month: str) -> list[str]:
    path = f"{year}/{month}"
    items = await parse_listing(client, path)
    return [f"{path}{item}" for item in items if item.endswith(".mp3")]


async def scan() -> list[str]:
    """Every MP3 path, walking years and then months."""
    async with httpx.AsyncClient() as client:
        items = await parse_listing(client, "/")
        years = sorted(y for y in map(_year, items) if y is not None)
        jobs = []
        for year in years:
            for month in await parse_listing(client, str(year)):
                jobs.append(_month_files(client, year, month))
        results = await asyncio.gather(*jobs)
    return [file for files in results for file in files]


async def scrape() -> None:
    """Print every MP3 path found."""
    for file in await scan():
        print(file)