"""State shared between the player and the interface, and the updates between them."""

from __future__ import annotations

import asyncio
import enum
import time
from dataclasses import dataclass, field
from typing import Union

from .audio import Sink
from .downloader import Loading
from .errors import UIError
from .tracks import Info

Current = Union[Loading, Info]

_VOLUME_DISPLAY_SECONDS = 1.0
_CHANNEL_CAPACITY = 8


@dataclass
class State:
    """Everything the interface needs to show."""

    sink: Sink
    tracklist: str
    current: Current = field(default_factory=Loading)
    bookmarked: bool = False
    volume_timer: float | None = None

    def tick(self) -> None:
        """Handle small periodic updates, such as hiding the volume bar."""
        if (
            self.volume_timer is not None
            and time.monotonic() - self.volume_timer > _VOLUME_DISPLAY_SECONDS
        ):
            self.volume_timer = None


class UpdateKind(enum.Enum):
    """What changed in the player."""

    TRACK = "track"
    BOOKMARKED = "bookmarked"
    VOLUME = "volume"
    QUIT = "quit"


@dataclass(frozen=True)
class Update:
    """A change sent from the player to the interface."""

    kind: UpdateKind
    value: object = None

    @classmethod
    def track(cls, current: Current) -> Update:
        return cls(UpdateKind.TRACK, current)

    @classmethod
    def bookmarked(cls, flag: bool) -> Update:
        return cls(UpdateKind.BOOKMARKED, flag)

    @classmethod
    def volume(cls) -> Update:
        return cls(UpdateKind.VOLUME)

    @classmethod
    def quit(cls) -> Update:
        return cls(UpdateKind.QUIT)


class UIHandle:
    """Broadcasts updates to every subscribed reader.

    A reader that falls behind loses its oldest updates.
    """

    def __init__(self, capacity: int = _CHANNEL_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._subscribers: list[asyncio.Queue] = []

    def subscribe(self) -> asyncio.Queue:
        """A new queue that receives every later update."""
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._capacity)
        self._subscribers.append(queue)
        return queue

    def update(self, update: Update) -> None:
        """Send ``update`` to every subscriber."""
        if not self._subscribers:
            raise UIError("couldn't update UI state")
        for queue in self._subscribers:
            if queue.full():
                queue.get_nowait()
            queue.put_nowait(update)