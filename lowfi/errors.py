"""Error types used across the player."""

from __future__ import annotations

import enum

import httpx


class LowfiError(Exception):
    """Base class for every error the player raises."""

    default_message = "lowfi failure"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class BookmarkError(LowfiError):
    """Bookmarks could not be loaded or saved."""

    default_message = "unable to load/save bookmarks"


class VolumeError(LowfiError):
    """The persistent volume could not be loaded or saved."""

    default_message = "unable to load/save the persistent volume"


class UIError(LowfiError):
    """Drawing the interface or reading input failed."""

    default_message = "ui failure"


class TrackErrorKind(enum.Enum):
    """The different ways handling a track can fail."""

    DECODE = "unable to decode"
    INVALID_NAME = "invalid name"
    INVALID_PATH = "invalid file path"
    UNKNOWN_LENGTH = "unknown target track length"
    FILE = "unable to read file"
    REQUEST = "unable to fetch data"
    INTEGER = "couldn't handle integer track length"


class TrackError(LowfiError):
    """A failure while finding, downloading or decoding a track."""

    def __init__(
        self,
        kind: TrackErrorKind,
        track: str | None = None,
        cause: object = None,
    ) -> None:
        self.kind = kind
        self.track = track
        self.cause = cause
        text = kind.value if cause is None else f"{kind.value}: {cause}"
        if track is not None:
            text += f' (track: "{track}") '
        super().__init__(text)

    def timeout(self) -> bool:
        """Whether the failure was a request that timed out."""
        return self.kind is TrackErrorKind.REQUEST and isinstance(
            self.cause, httpx.TimeoutException
        )