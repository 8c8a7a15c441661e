"""Bookmarked tracks, kept in ``bookmarks.txt`` in the data directory."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from . import config
from .errors import BookmarkError
from .tracks import Info

_NO_HEADER = "noheader"


def bookmarks_path() -> Path:
    """Path of the bookmarks file, creating its directory if needed."""
    directory = config.data_dir()
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise BookmarkError(f"data directory not usable: {exc}") from exc
    return directory / "bookmarks.txt"


@dataclass
class Bookmarks:
    """Bookmarked tracks as track-list entries."""

    entries: list[str] = field(default_factory=list)

    @classmethod
    def load(cls, path: Path | str | None = None) -> Bookmarks:
        """Read bookmarks from ``path``; a missing or unreadable file gives none."""
        target = Path(path) if path is not None else bookmarks_path()
        try:
            text = target.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            text = ""

        while text.startswith(_NO_HEADER):
            text = text[len(_NO_HEADER) :]

        lines = (line.rstrip("\r") for line in text.strip().split("\n"))
        return cls(entries=[line for line in lines if line])

    def save(self, path: Path | str | None = None) -> None:
        """Write the bookmarks out as a header-less track list."""
        target = Path(path) if path is not None else bookmarks_path()
        text = f"{_NO_HEADER}\n" + "\n".join(self.entries)
        try:
            target.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise BookmarkError(f"io failure: {exc}") from exc

    def bookmark(self, track: Info) -> bool:
        """Toggle ``track`` and return whether it is now bookmarked."""
        entry = track.to_entry()
        if entry in self.entries:
            self.entries.remove(entry)
            return False
        self.entries.append(entry)
        return True

    def bookmarked(self, track: Info) -> bool:
        return track.to_entry() in self.entries