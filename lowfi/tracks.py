"""Tracks as they move from download to playback."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from urllib.parse import unquote_plus

import regex

from .audio import Source, decode
from .errors import TrackError, TrackErrorKind

_LEADING = "0123456789.()"


def _decode_url(text: str) -> str:
    """Decode form-encoded text, joining each key with its value."""
    decoded = []
    for pair in text.split("&"):
        if not pair:
            continue
        key, _, value = pair.partition("=")
        decoded.append(unquote_plus(key) + unquote_plus(value))
    return "".join(decoded)


def format_name(name: str) -> str:
    """Turn a track path into a display name.

    The extension is dropped, the name is URL-decoded and leading track
    numbers are removed, unless the name is nothing but a number.
    """
    stem = PurePosixPath(name).stem
    if not stem or stem == "..":
        raise TrackError(TrackErrorKind.INVALID_NAME, track=name)

    decoded = _decode_url(stem)
    stripped = decoded.lstrip(_LEADING)
    return (stripped or decoded).strip()


def grapheme_count(text: str) -> int:
    """The number of user-perceived characters in ``text``."""
    return len(regex.findall(r"\X", text))


@dataclass(repr=False)
class Queued:
    """A downloaded track that has not been decoded yet."""

    display: str
    path: str
    data: bytes

    def __repr__(self) -> str:
        return f"Queued(display={self.display!r}, path={self.path!r}, data={len(self.data)})"

    @classmethod
    def from_download(cls, path: str, data: bytes, display: str | None = None) -> Queued:
        """Build a queued track, deriving the display name from ``path`` if none is given."""
        return cls(
            display=format_name(path) if display is None else display,
            path=path,
            data=data,
        )

    def decode(self) -> Decoded:
        return Decoded.from_queued(self)


@dataclass(frozen=True)
class Info:
    """What the interface needs to know about a playing track."""

    path: str
    display: str
    width: int
    duration: float | None

    @classmethod
    def from_source(cls, source: Source, path: str, display: str) -> Info:
        return cls(
            path=path,
            display=display,
            width=grapheme_count(display),
            duration=source.duration,
        )

    def to_entry(self) -> str:
        """The track-list line that describes this track."""
        return f"{self.path}!{self.display}"


@dataclass(frozen=True)
class Decoded:
    """A track ready to be handed to the sink."""

    info: Info
    data: Source

    @classmethod
    def from_queued(cls, queued: Queued) -> Decoded:
        try:
            source = decode(queued.data)
        except TrackError as exc:
            raise TrackError(exc.kind, track=queued.display, cause=exc.cause) from exc
        return cls(info=Info.from_source(source, queued.path, queued.display), data=source)