"""Scraper for the chillhop release pages."""

from __future__ import annotations

import asyncio
import html
import json
import sys
from collections.abc import Coroutine
from dataclasses import dataclass, field
from typing import Any

import httpx
from bs4 import BeautifulSoup
from tqdm import tqdm

from .errors import LowfiError
from .scrapers import ScrapeError, Source, get_cached

PAGE_COUNT = 40
PAGE_SIZE = 12
TRACK_COUNT = 1625
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/138.0.0.0 Safari/537.36"
)
IGNORED_TRACKS = frozenset({
    74707, 21655, 21773, 8172, 55397, 75135, 24827, 8141, 8157, 64052, 31612,
    41956, 8001, 9217, 8730, 55372, 9262, 30131, 9372, 20561, 21652, 9306,
    21646, 8469, 7832, 10448, 9446, 9396,
})
IGNORED_ARTISTS = frozenset({"Kenji"})


@dataclass
class ChillhopTrack:
    """One track of a release."""

    title: str
    file_id: int
    artists: str

    def clean(self) -> None:
        """Decode HTML entities in the title and artists."""
        self.artists = html.unescape(self.artists)
        self.title = html.unescape(self.title)


@dataclass
class Release:
    """A release page and its tracks, last track first."""

    path: str
    index: int
    tracks: list[ChillhopTrack] = field(default_factory=list)


def _track(raw: dict) -> ChillhopTrack:
    file_id = raw["fileId"]
    if not isinstance(file_id, str) or not (file_id.isascii() and file_id.isdigit()):
        raise ScrapeError(f"invalid release: bad file id {file_id!r}")
    number = int(file_id)
    if number > 0xFFFFFFFF:
        raise ScrapeError(f"invalid release: bad file id {file_id!r}")
    return ChillhopTrack(title=raw["title"], file_id=number, artists=raw["artists"])


def parse_release(content: str, path: str, index: int) -> Release:
    """Read the track data embedded in a release page."""
    textarea = BeautifulSoup(content, "html.parser").find("textarea")
    if textarea is None:
        raise ScrapeError(f"invalid release: unable to find textarea: {path}")
    try:
        data = json.loads(textarea.get_text())
        tracks = [_track(raw) for raw in data["tracks"]]
    except (ValueError, KeyError, TypeError) as exc:
        raise ScrapeError(f"invalid release: {exc}: {path}") from exc
    tracks.reverse()
    return Release(path=path, index=index, tracks=tracks)


def release_links(content: str, number: int) -> list[tuple[str, int]]:
    """Release paths on a listing page with their overall index, minus compilations."""
    soup = BeautifulSoup(content, "html.parser")
    links = []
    for i, anchor in enumerate(soup.select(".table-body > a")):
        label = anchor.select_one("label")
        if label is None or label.decode_contents() == "Compilation":
            continue
        href = anchor.get("href")
        if href is None:
            continue
        links.append((str(href), number * PAGE_SIZE + i))
    return links


async def _scan_release(client: httpx.AsyncClient, path: str, index: int, bar) -> Release:
    content = await get_cached(client, path, Source.CHILLHOP)
    release = parse_release(content, path, index)
    bar.update(len(release.tracks))
    return release


async def scan_page(
    number: int, client: httpx.AsyncClient, bar
) -> list[Coroutine[Any, Any, Release]]:
    """Coroutines that scan every release listed on page ``number``."""
    content = await get_cached(client, f"releases/?page={number}", Source.CHILLHOP)
    return [
        _scan_release(client, path, index, bar)
        for path, index in release_links(content, number)
    ]


async def _settle(job: Coroutine[Any, Any, Release]) -> Release | Exception:
    try:
        return await job
    except (LowfiError, httpx.HTTPError, OSError) as exc:
        return exc


async def scrape() -> None:
    """Print a track list of every chillhop release."""
    import pathlib

    pathlib.Path("./cache/chillhop").mkdir(parents=True, exist_ok=True)
    bar = tqdm(total=TRACK_COUNT + PAGE_SIZE * PAGE_COUNT, file=sys.stderr)
    async with httpx.AsyncClient(headers={"User-Agent": USER_AGENT}) as client:
        jobs = []
        for page in range(PAGE_COUNT + 1):
            bar.update(PAGE_SIZE)
            jobs.extend(await scan_page(page, client, bar))
        results = await asyncio.gather(*(_settle(job) for job in jobs))
    bar.close()

    print("sorting...", file=sys.stderr)
    ordered = sorted(results, key=lambda r: r.index if isinstance(r, Release) else 0)
    ordered.reverse()

    print("printing...", file=sys.stderr)
    errors = []
    printed: set[int] = set()
    for result in ordered:
        if not isinstance(result, Release):
            errors.append(result)
            continue
        for track in result.tracks:
            if (
                track.file_id in IGNORED_TRACKS
                or track.artists in IGNORED_ARTISTS
                or track.file_id in printed
            ):
                continue
            printed.add(track.file_id)
            track.clean()
            print(f"{track.file_id}!{track.title}")

    print("-- ERROR REPORT --", file=sys.stderr)
    for error in errors:
        print(error, file=sys.stderr)