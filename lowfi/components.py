"""The pieces the player's interface is made of."""

from __future__ import annotations

import math

import regex

from .downloader import Loading
from .tracks import Info

_GRAPHEME = regex.compile(r"\X")
_MUTED_HINT = "+ to increase volume"
_MUTE_THRESHOLD = 0.01
_CONTROLS = (("[s]", "kip"), ("[p]", "ause"), ("[q]", "uit"))


def _round(value: float) -> int:
    """Round half away from zero, treating non-finite values as zero."""
    if not math.isfinite(value):
        return 0
    if value >= 0:
        return math.floor(value + 0.5)
    return -math.floor(-value + 0.5)


def bold(text: str) -> str:
    """``text`` wrapped in the terminal codes for bold type."""
    return f"\x1b[1m{text}\x1b[0m"


def format_duration(seconds: float) -> str:
    """Whole seconds as ``MM:SS``; minutes are not wrapped into hours."""
    whole = int(seconds)
    return f"{whole // 60:02}:{whole % 60:02}"


def progress_bar(state, width: int) -> str:
    """The playback progress bar with elapsed and total time."""
    current = state.current
    elapsed = state.sink.position() if isinstance(current, Info) else 0.0
    duration = 0.0
    filled = 0

    if isinstance(current, Info) and current.duration is not None:
        duration = current.duration
        total = int(duration)
        if total:
            filled = max(0, _round(int(elapsed) / total * width))

    return (
        f" [{'/' * filled}{' ' * max(0, width - filled)}] "
        f"{format_duration(elapsed)}/{format_duration(duration)} "
    )


def audio_bar(width: int, volume: float, percentage: str) -> str:
    """The volume bar shown briefly after the volume changes."""
    audio = max(0, _round(volume * width))
    return (
        f" volume: [{'/' * audio}{' ' * max(0, width - audio)}] "
        f"{' ' * max(0, 4 - len(percentage))}{percentage} "
    )


def _action_parts(state) -> tuple[str, tuple[str, int] | None]:
    current = state.current
    if isinstance(current, Loading):
        subject = None
        if current.progress is not None:
            percent = min(_round(current.progress.get() * 100), 255)
            if percent:
                subject = (f"{min(percent, 99):<2}%", 3)
        return "loading", subject

    if state.sink.volume < _MUTE_THRESHOLD:
        return "muted,", (_MUTED_HINT, len(_MUTED_HINT))
    word = "paused" if state.sink.is_paused() else "playing"
    return word, (current.display, current.width)


def action(state, width: int) -> str:
    """The top line: what the player is doing and what track it is on."""
    word, subject = _action_parts(state)
    if subject is None:
        main, length = word, len(word)
    else:
        text, text_width = subject
        star = "*" if state.bookmarked else ""
        main = f"{word} {star}{bold(text)}"
        length = len(word) + 1 + text_width + len(star)

    if length > width:
        return "".join(_GRAPHEME.findall(main)[: width + 1]) + "..."
    return main + " " * (width - length)


def controls(width: int) -> str:
    """The bottom line listing the keyboard controls, spread over ``width``."""
    length = sum(len(key) + len(rest) for key, rest in _CONTROLS)
    if width < length:
        raise ValueError(f"width must be at least {length}")
    gap = " " * ((width - length) // (len(_CONTROLS) - 1))
    line = gap.join(bold(key) + rest for key, rest in _CONTROLS)
    return line + (" " if width % 2 == 0 else "")