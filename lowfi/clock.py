"""A clock shown in the window's title bar."""

from __future__ import annotations

import time

from .window import Window

_REFRESH_SECONDS = 0.2


def _now() -> str:
    return time.strftime("%H:%M:%S", time.localtime())


class Clock:
    """Shows the local time in the title bar, refreshing it a few times a second."""

    def __init__(self, window: Window) -> None:
        window.titlebar.display(_now())
        self._last = time.monotonic()

    def update(self, window: Window) -> None:
        """Refresh the displayed time if the last refresh is old enough."""
        if time.monotonic() - self._last >= _REFRESH_SECONDS:
            window.titlebar.display(_now())
            self._last = time.monotonic()