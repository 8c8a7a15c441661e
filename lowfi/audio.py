"""MP3 decoding, a playback queue and the end-of-track watcher."""

from __future__ import annotations

import asyncio
import io
import os
import time
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import NamedTuple, Protocol

from .errors import LowfiError, TrackError, TrackErrorKind
from .message import Message, MessageKind
from .tasks import Tasks

_POLL_INTERVAL = 0.016

_BITRATES_KBPS = {
    (True, 1): (0, 32, 64, 96, 128, 160, 192, 224, 256, 288, 320, 352, 384, 416, 448),
    (True, 2): (0, 32, 48, 56, 64, 80, 96, 112, 128, 160, 192, 224, 256, 320, 384),
    (True, 3): (0, 32, 40, 48, 56, 64, 80, 96, 112, 128, 160, 192, 224, 256, 320),
    (False, 1): (0, 32, 48, 56, 64, 80, 96, 112, 128, 144, 160, 176, 192, 224, 256),
    (False, 2): (0, 8, 16, 24, 32, 40, 48, 56, 64, 80, 96, 112, 128, 144, 160),
    (False, 3): (0, 8, 16, 24, 32, 40, 48, 56, 64, 80, 96, 112, 128, 144, 160),
}

# Keyed by the two version bits of the frame header.
_SAMPLE_RATES = {
    3: (44100, 48000, 32000),
    2: (22050, 24000, 16000),
    0: (11025, 12000, 8000),
}


@dataclass(frozen=True)
class Source:
    """Encoded audio ready to be played, with its length in seconds if known."""

    data: bytes = field(repr=False)
    duration: float | None
    sample_rate: int | None = None


class _Frame(NamedTuple):
    length: int
    samples: int
    sample_rate: int
    layer: int
    mpeg1: bool
    mono: bool


def _parse_header(data: bytes, pos: int) -> _Frame | None:
    header = data[pos : pos + 4]
    if len(header) < 4 or header[0] != 0xFF or header[1] & 0xE0 != 0xE0:
        return None

    version = (header[1] >> 3) & 0b11
    layer_bits = (header[1] >> 1) & 0b11
    bitrate_index = header[2] >> 4
    rate_index = (header[2] >> 2) & 0b11
    if version == 1 or layer_bits == 0 or bitrate_index in (0, 15) or rate_index == 3:
        return None

    mpeg1 = version == 3
    layer = 4 - layer_bits
    padding = (header[2] >> 1) & 1
    bitrate = _BITRATES_KBPS[(mpeg1, layer)][bitrate_index] * 1000
    sample_rate = _SAMPLE_RATES[version][rate_index]

    if layer == 1:
        samples = 384
        length = (12 * bitrate // sample_rate + padding) * 4
    else:
        samples = 1152 if layer == 2 or mpeg1 else 576
        length = samples // 8 * bitrate // sample_rate + padding

    if length < 4:
        return None
    mono = header[3] >> 6 == 0b11
    return _Frame(length, samples, sample_rate, layer, mpeg1, mono)


def _audio_start(data: bytes) -> int:
    """Offset just past a leading ID3v2 tag, or zero."""
    if len(data) < 10 or data[:3] != b"ID3":
        return 0
    size = 0
    for byte in data[6:10]:
        size = (size << 7) | (byte & 0x7F)
    footer = 10 if data[5] & 0x10 else 0
    return 10 + size + footer


def _frames(data: bytes) -> Iterator[tuple[int, _Frame]]:
    end = len(data)
    pos = _audio_start(data)
    locked = False
    while pos + 4 <= end:
        if not locked:
            pos = data.find(b"\xff", pos)
            if pos < 0 or pos + 4 > end:
                return
        frame = _parse_header(data, pos)
        if frame is not None and pos + frame.length <= end:
            following = pos + frame.length
            # A frame counts once the next one lines up, so stray sync bytes are skipped.
            if locked or following + 4 > end or _parse_header(data, following) is not None:
                yield pos, frame
                locked = True
                pos = following
                continue
        locked = False
        pos += 1


def _is_info_frame(data: bytes, pos: int, frame: _Frame) -> bool:
    if frame.layer != 3:
        return False
    if frame.mpeg1:
        side_info = 17 if frame.mono else 32
    else:
        side_info = 9 if frame.mono else 17
    tag_at = pos + 4 + side_info
    return data[tag_at : tag_at + 4] in (b"Xing", b"Info")


def decode(data: bytes) -> Source:
    """Check that ``data`` holds MPEG audio and work out its duration."""
    data = bytes(data)
    samples = 0
    sample_rate: int | None = None
    for pos, frame in _frames(data):
        if sample_rate is None:
            sample_rate = frame.sample_rate
            if _is_info_frame(data, pos, frame):
                continue
        samples += frame.samples

    if sample_rate is None:
        raise TrackError(TrackErrorKind.DECODE, cause="no MPEG audio frames found")
    return Source(data, samples / sample_rate, sample_rate)


class Output(Protocol):
    """A device that plays one source at a time."""

    def start(self, source: Source) -> None: ...

    def pause(self) -> None: ...

    def resume(self) -> None: ...

    def stop(self) -> None: ...

    def busy(self) -> bool: ...

    def set_volume(self, volume: float) -> None: ...


class MixerOutput:
    """Plays sources on the default audio device through pygame's mixer."""

    def __init__(self) -> None:
        os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
        import pygame

        self._pygame = pygame
        try:
            pygame.mixer.init()
        except pygame.error as exc:
            raise LowfiError(f"audio playing error: {exc}") from exc
        self._music = pygame.mixer.music

    def start(self, source: Source) -> None:
        self._music.load(io.BytesIO(source.data), "mp3")
        self._music.play()

    def pause(self) -> None:
        self._music.pause()

    def resume(self) -> None:
        self._music.unpause()

    def stop(self) -> None:
        self._music.stop()
        self._music.unload()

    def busy(self) -> bool:
        return bool(self._music.get_busy())

    def set_volume(self, volume: float) -> None:
        self._music.set_volume(volume)

    def close(self) -> None:
        self._music.stop()
        self._pygame.mixer.quit()


class Sink:
    """A queue of sources played one after another.

    Without an output the sink only keeps time, which is enough to drive
    the interface and the end-of-track watcher.
    """

    def __init__(self, output: Output | None = None) -> None:
        self._output = output
        self._queue: deque[Source] = deque()
        self._paused = False
        self._volume = 1.0
        self._elapsed = 0.0
        self._resumed_at: float | None = None

    @property
    def volume(self) -> float:
        return self._volume

    @volume.setter
    def volume(self, value: float) -> None:
        self._volume = float(value)
        if self._output is not None:
            self._output.set_volume(self._volume)

    def append(self, source: Source) -> None:
        """Queue ``source``, starting it straight away if nothing is playing."""
        self._queue.append(source)
        if len(self._queue) == 1:
            self._begin()

    def play(self) -> None:
        if not self._paused:
            return
        self._paused = False
        if self._queue:
            self._resumed_at = time.monotonic()
            if self._output is not None:
                self._output.resume()

    def pause(self) -> None:
        if self._paused:
            return
        self._paused = True
        if self._queue:
            self._elapsed = self.position()
            self._resumed_at = None
            if self._output is not None:
                self._output.pause()

    def is_paused(self) -> bool:
        return self._paused

    def stop(self) -> None:
        """Drop everything queued, including the current source."""
        self._queue.clear()
        self._reset_clock()
        if self._output is not None:
            self._output.stop()

    def empty(self) -> bool:
        """Whether nothing is left to play."""
        self._advance()
        return not self._queue

    def position(self) -> float:
        """Seconds played of the current source."""
        if not self._queue:
            return 0.0
        position = self._elapsed
        if self._resumed_at is not None:
            position += time.monotonic() - self._resumed_at
        duration = self._queue[0].duration
        return position if duration is None else min(position, duration)

    def _reset_clock(self) -> None:
        self._elapsed = 0.0
        self._resumed_at = None

    def _begin(self) -> None:
        self._elapsed = 0.0
        self._resumed_at = None if self._paused else time.monotonic()
        if self._output is not None:
            self._output.start(self._queue[0])
            if self._paused:
                self._output.pause()

    def _finished(self) -> bool:
        if self._output is not None:
            return not self._paused and not self._output.busy()
        duration = self._queue[0].duration
        return duration is not None and self.position() >= duration

    def _advance(self) -> None:
        while self._queue and self._finished():
            self._queue.popleft()
            if self._queue:
                self._begin()
            else:
                self._reset_clock()


class Waiter:
    """Wakes the end-of-track watcher after a new source was appended."""

    def __init__(self) -> None:
        self._wake = asyncio.Event()

    def notify(self) -> None:
        self._wake.set()

    async def _watch(self, sink: Sink, tx: asyncio.Queue) -> None:
        while True:
            await self._wake.wait()
            self._wake.clear()

            while not sink.empty():
                await asyncio.sleep(_POLL_INTERVAL)

            try:
                tx.put_nowait(Message(MessageKind.NEXT))
            except asyncio.QueueFull:
                return


def start_waiter(tasks: Tasks, sink: Sink) -> Waiter:
    """Watch ``sink`` and send a NEXT message whenever it runs dry."""
    waiter = Waiter()
    tasks.spawn(waiter._watch(sink, tasks.tx))
    return waiter