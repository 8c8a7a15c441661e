"""The player's terminal interface and the loop that draws it."""

from __future__ import annotations

import asyncio
import sys
import time
from dataclasses import dataclass
from typing import TextIO

from . import components
from .clock import Clock
from .config import env
from .errors import UIError
from .ui_state import State, Update, UpdateKind
from .window import Window

_MAX_WIDTH_STEPS = 32


def _percentage(volume: float) -> str:
    return f"{abs(components._round(volume * 100))}%"


@dataclass(frozen=True)
class Params:
    """Options controlling how the interface looks."""

    borderless: bool = False
    minimalist: bool = False
    enabled: bool = True
    clock: bool = False
    width: int = 27
    delta: float = 1.0 / 12.0

    @classmethod
    def from_args(cls, args) -> Params:
        """Build parameters from parsed command-line arguments."""
        if args.fps <= 0:
            raise ValueError("fps must be positive")

        if env("LOWFI_DISABLE_UI"):
            raise UIError("you can't disable the UI without MPRIS!")

        return cls(
            borderless=args.borderless,
            minimalist=args.minimalist,
            enabled=True,
            clock=args.clock,
            width=21 + min(args.width, _MAX_WIDTH_STEPS) * 2,
            delta=1.0 / args.fps,
        )


class Interface:
    """Draws the player each frame at a steady rate."""

    def __init__(self, params: Params | None = None, writer: TextIO | None = None) -> None:
        self.params = params if params is not None else Params()
        self.window = Window(self.params.width, self.params.borderless, False, True)
        self.clock = Clock(self.window) if self.params.clock else None
        self._writer = writer
        self._deadline = time.monotonic()

    def menu(self, state: State) -> list[str]:
        """The lines of the window for ``state``."""
        width = self.params.width
        top = components.action(state, width)

        if state.volume_timer is not None:
            volume = state.sink.volume
            middle = components.audio_bar(width - 17, volume, _percentage(volume))
        else:
            middle = components.progress_bar(state, width - 16)

        if self.params.minimalist:
            return [top, middle]
        return [top, middle, components.controls(width)]

    async def draw(self, state: State) -> None:
        """Draw one frame, then wait until the next one is due."""
        if self.clock is not None:
            self.clock.update(self.window)

        writer = self._writer if self._writer is not None else sys.stdout
        self.window.draw(writer, self.menu(state))

        delay = self._deadline - time.monotonic()
        if delay > 0:
            await asyncio.sleep(delay)
        self._deadline += self.params.delta


def _apply(state: State, update: Update) -> bool:
    """Apply ``update`` to ``state``; False means the interface should stop."""
    if update.kind is UpdateKind.QUIT:
        return False
    if update.kind is UpdateKind.TRACK:
        state.current = update.value
    elif update.kind is UpdateKind.BOOKMARKED:
        state.bookmarked = bool(update.value)
    elif update.kind is UpdateKind.VOLUME:
        state.volume_timer = time.monotonic()
    return True


async def run_ui(updates: asyncio.Queue, state: State, params: Params) -> None:
    """Apply updates and redraw the interface until told to quit."""
    interface = Interface(params)
    while True:
        try:
            update = updates.get_nowait()
        except asyncio.QueueEmpty:
            pass
        else:
            if not _apply(state, update):
                return

        await interface.draw(state)
        state.tick()