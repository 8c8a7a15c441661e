"""Track lists: where tracks come from and how they are fetched."""

from __future__ import annotations

import asyncio
import random
from dataclasses import dataclass, field
from pathlib import Path

import httpx

from . import config
from .downloader import Progress
from .errors import TrackError, TrackErrorKind
from .tracks import Queued

_FILE_SCHEME = "file://"
_NO_HEADER = "noheader"
_RESERVED = frozenset({"volume.txt", "bookmarks.txt"})


def _content_length(response: httpx.Response) -> int | None:
    value = response.headers.get("content-length")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


async def _read_local(location: str, track: str) -> bytes:
    resolved = location
    if location.startswith("~"):
        try:
            home = str(Path.home())
        except RuntimeError as exc:
            raise TrackError(TrackErrorKind.INVALID_PATH, track=track) from exc
        resolved = location.replace("~", home)
    try:
        return await asyncio.to_thread(Path(resolved).read_bytes)
    except OSError as exc:
        raise TrackError(TrackErrorKind.FILE, track=location, cause=exc) from exc


@dataclass
class TrackList:
    """A list of tracks; the first line is the base URL the others extend."""

    name: str
    lines: list[str] = field(default_factory=list)
    path: str | None = None

    @classmethod
    def from_text(cls, name: str, text: str, path: str | None = None) -> TrackList:
        """Parse the text of a track list."""
        trimmed = text.rstrip()
        lines = [line.rstrip() for line in trimmed.split("\n")] if trimmed else []
        return cls(name=name, lines=lines, path=path)

    def header(self) -> str:
        """The base URL of the list."""
        return self.lines[0].strip()

    def random_path(self, rng: random.Random) -> tuple[str, str | None]:
        """Pick a random track, returning its path and its custom name if any."""
        line = self.lines[rng.randrange(1, len(self.lines))]
        path, sep, display = line.partition("!")
        return (path, display) if sep else (line, None)

    async def download(
        self,
        track: str,
        client: httpx.AsyncClient,
        progress: Progress | None = None,
    ) -> tuple[bytes, str]:
        """Fetch the raw data of ``track``, returning it with its full path."""
        path = track if "://" in track else f"{self.header()}{track}"

        if path.startswith(_FILE_SCHEME):
            return await _read_local(path[len(_FILE_SCHEME) :], track), path

        try:
            async with client.stream("GET", path) as response:
                if progress is None:
                    return await response.aread(), path

                total = _content_length(response)
                if total is None:
                    raise TrackError(TrackErrorKind.UNKNOWN_LENGTH, track=track)

                chunks = []
                downloaded = 0
                async for chunk in response.aiter_bytes():
                    downloaded = min(downloaded + len(chunk), total)
                    progress.set(downloaded / total if total else 0.0)
                    chunks.append(chunk)
                return b"".join(chunks), path
        except httpx.HTTPError as exc:
            raise TrackError(TrackErrorKind.REQUEST, track=track, cause=exc) from exc

    async def random(
        self,
        client: httpx.AsyncClient,
        progress: Progress,
        rng: random.Random,
    ) -> Queued:
        """Download a random track from the list."""
        track, display = self.random_path(rng)
        data, path = await self.download(track, client, progress)
        return Queued.from_download(path, data, display)


async def _read_text(path: Path) -> str:
    try:
        return await asyncio.to_thread(path.read_text, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TrackError(TrackErrorKind.FILE, cause=exc) from exc


async def load(tracks: str) -> TrackList:
    """Load a list by name from the data directory, or else from a file path."""
    candidate = config.data_dir() / f"{tracks}.txt"
    path = candidate if candidate.exists() else Path(tracks)

    raw = await _read_text(path)
    raw = raw.removeprefix(_NO_HEADER)

    name = path.stem
    if not name:
        raise TrackError(TrackErrorKind.INVALID_NAME, track=tracks)
    return TrackList.from_text(name, raw, str(path))


async def load_all() -> list[TrackList]:
    """Every track list found in the data directory."""
    directory = config.data_dir()
    try:
        entries = sorted(directory.iterdir())
    except OSError as exc:
        raise TrackError(TrackErrorKind.FILE, cause=exc) from exc

    lists = []
    for path in entries:
        if path.suffix != ".txt" or path.name in _RESERVED:
            continue
        raw = await _read_text(path)
        lists.append(TrackList.from_text(path.stem, raw, str(path)))
    return lists