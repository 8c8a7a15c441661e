"""The playback volume remembered between sessions."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from pathlib import Path

from . import config
from .errors import VolumeError

_DEFAULT = 100
_U16_MAX = 65535
_NUMBER = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True)
class PersistentVolume:
    """The saved volume as a whole percentage."""

    inner: int

    def as_float(self) -> float:
        """The volume scaled to the range 0 to 1."""
        return self.inner / 100


def volume_path() -> Path:
    """Path of ``volume.txt``, creating the config directory if needed."""
    directory = config.config_dir()
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise VolumeError(f"io error: {exc}") from exc
    return directory / "volume.txt"


def load_volume(path: Path | str | None = None) -> PersistentVolume:
    """Read the saved volume, writing and returning 100 if there is none."""
    target = Path(path) if path is not None else volume_path()
    try:
        if not target.exists():
            target.write_text(str(_DEFAULT), encoding="utf-8")
            return PersistentVolume(_DEFAULT)
        contents = target.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise VolumeError(f"io error: {exc}") from exc

    number = contents.strip().removesuffix("%")
    if not _NUMBER.fullmatch(number) or int(number) > _U16_MAX:
        raise VolumeError(f"error parsing volume integer: {number!r}")
    return PersistentVolume(int(number))


def _percentage(volume: float) -> int:
    scaled = abs(volume * 100.0)
    if math.isnan(scaled):
        return 0
    if math.isinf(scaled):
        return _U16_MAX
    return min(math.floor(scaled + 0.5), _U16_MAX)


def save_volume(volume: float, path: Path | str | None = None) -> None:
    """Save ``volume`` (0 to 1) as a whole percentage."""
    target = Path(path) if path is not None else volume_path()
    try:
        target.write_text(str(_percentage(volume)), encoding="utf-8")
    except OSError as exc:
        raise VolumeError(f"io error: {exc}") from exc