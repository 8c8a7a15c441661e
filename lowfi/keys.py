"""Reading key presses from the terminal and turning them into messages."""

from __future__ import annotations

import asyncio
import os
import sys

from .message import Message, MessageKind

_ARROWS = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
}

_NAMED = {
    "up": Message(MessageKind.CHANGE_VOLUME, 0.1),
    "right": Message(MessageKind.CHANGE_VOLUME, 0.01),
    "down": Message(MessageKind.CHANGE_VOLUME, -0.1),
    "left": Message(MessageKind.CHANGE_VOLUME, -0.01),
    "ctrl+c": Message(MessageKind.QUIT),
    "play": Message(MessageKind.PLAY_PAUSE),
    "pause": Message(MessageKind.PLAY_PAUSE),
    "play_pause": Message(MessageKind.PLAY_PAUSE),
    "stop": Message(MessageKind.PAUSE),
    "track_next": Message(MessageKind.NEXT),
    "lower_volume": Message(MessageKind.CHANGE_VOLUME, -0.1),
    "raise_volume": Message(MessageKind.CHANGE_VOLUME, 0.1),
    "mute_volume": Message(MessageKind.CHANGE_VOLUME, -1.0),
}

_CHARACTERS = {
    "q": Message(MessageKind.QUIT),
    "s": Message(MessageKind.NEXT),
    "n": Message(MessageKind.NEXT),
    "l": Message(MessageKind.NEXT),
    "p": Message(MessageKind.PLAY_PAUSE),
    " ": Message(MessageKind.PLAY_PAUSE),
    "+": Message(MessageKind.CHANGE_VOLUME, 0.1),
    "=": Message(MessageKind.CHANGE_VOLUME, 0.1),
    "k": Message(MessageKind.CHANGE_VOLUME, 0.1),
    "-": Message(MessageKind.CHANGE_VOLUME, -0.1),
    "_": Message(MessageKind.CHANGE_VOLUME, -0.1),
    "j": Message(MessageKind.CHANGE_VOLUME, -0.1),
    "b": Message(MessageKind.BOOKMARK),
}


def message_for_key(key: str) -> Message | None:
    """The message for a key, given as a single character or a key name."""
    if key in _NAMED:
        return _NAMED[key]
    if len(key) == 1:
        lowered = key.lower() if key.isascii() else key
        return _CHARACTERS.get(lowered)
    return None


def _parse_keys(text: str) -> list[str]:
    """Split raw terminal input into keys."""
    keys = []
    rest = text
    while rest:
        for sequence, name in _ARROWS.items():
            if rest.startswith(sequence):
                keys.append(name)
                rest = rest[len(sequence) :]
                break
        else:
            char, rest = rest[0], rest[1:]
            keys.append("ctrl+c" if char == "\x03" else char)
    return keys


async def listen(sender: asyncio.Queue) -> None:
    """Read key presses from stdin forever, sending their messages to ``sender``."""
    fd = sys.stdin.fileno()
    while True:
        raw = await asyncio.to_thread(os.read, fd, 64)
        if not raw:
            await asyncio.sleep(0.05)
            continue
        for key in _parse_keys(raw.decode("utf-8", errors="ignore")):
            message = message_for_key(key)
            if message is not None:
                await sender.put(message)