"""Background downloading of tracks into a bounded buffer."""

from __future__ import annotations

import asyncio
import math
import random
from dataclasses import dataclass, field

import httpx

from .errors import TrackError
from .message import Message, MessageKind
from .tasks import Tasks
from .tracks import Queued

_USER_AGENT = "lowfi/2.0.2"
_ERROR_TIMEOUT = 1.0
_PROGRESS_MAX = 255


class _Shared:
    """Download state shared by the downloader and whoever reads from it."""

    def __init__(self) -> None:
        self.progress = 0
        self.loading = False


_GLOBAL = _Shared()


@dataclass(frozen=True)
class Progress:
    """Handle to the download progress of the track being fetched.

    Progress is kept as an integer from 0 to 255, so it only has that
    much resolution.
    """

    store: _Shared = field(default_factory=lambda: _GLOBAL, repr=False)

    def set(self, value: float) -> None:
        """Record progress as a fraction between 0 and 1."""
        scaled = value * _PROGRESS_MAX
        if math.isnan(scaled):
            level = 0
        elif math.isinf(scaled):
            level = _PROGRESS_MAX if scaled > 0 else 0
        else:
            level = math.floor(abs(scaled) + 0.5) * (1 if scaled >= 0 else -1)
        self.store.progress = max(0, min(_PROGRESS_MAX, level))

    def get(self) -> float:
        """The progress as a fraction between 0 and 1."""
        return self.store.progress / _PROGRESS_MAX


@dataclass(frozen=True)
class Loading:
    """No track is ready yet; ``progress`` tracks the one being downloaded."""

    progress: Progress | None = None


class Downloader:
    """Keeps fetching random tracks and pushing them into the buffer."""

    def __init__(
        self,
        queue: asyncio.Queue,
        tx: asyncio.Queue,
        tracks,
        client: httpx.AsyncClient,
        rng: random.Random | None = None,
        store: _Shared | None = None,
    ) -> None:
        self.queue = queue
        self.tx = tx
        self.tracks = tracks
        self.client = client
        self.rng = rng if rng is not None else random.Random()
        self._store = store if store is not None else _GLOBAL

    async def run(self) -> None:
        """Download tracks forever, telling the player when a wait is over."""
        progress = Progress(self._store)
        try:
            while True:
                try:
                    track = await self.tracks.random(self.client, progress, self.rng)
                except TrackError as error:
                    self._store.progress = 0
                    if not error.timeout():
                        await asyncio.sleep(_ERROR_TIMEOUT)
                    continue

                await self.queue.put(track)
                if self._store.loading:
                    await self.tx.put(Message(MessageKind.LOADED))
                    self._store.loading = False
        finally:
            await self.client.aclose()


class DownloadHandle:
    """The reading end of the download buffer."""

    def __init__(self, queue: asyncio.Queue, store: _Shared | None = None) -> None:
        self.queue = queue
        self._store = store if store is not None else _GLOBAL

    def track(self) -> Loading | Queued:
        """Take a buffered track, or report that one is still loading."""
        try:
            return self.queue.get_nowait()
        except asyncio.QueueEmpty:
            self._store.loading = True
            return Loading(Progress(self._store))


def start_downloader(tasks: Tasks, size: int, timeout: float, tracks) -> DownloadHandle:
    """Start downloading from ``tracks`` with a buffer of ``size`` tracks."""
    if size < 2:
        raise ValueError("the buffer size must be at least 2")

    client = httpx.AsyncClient(
        headers={"User-Agent": _USER_AGENT},
        timeout=timeout,
        follow_redirects=True,
    )
    queue: asyncio.Queue = asyncio.Queue(maxsize=size - 1)
    downloader = Downloader(queue, tasks.tx, tracks, client, random.Random())
    tasks.spawn(downloader.run())
    return DownloadHandle(queue)