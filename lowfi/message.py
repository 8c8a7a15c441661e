"""Messages exchanged between the parts of the player."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class MessageKind(enum.Enum):
    """What a message asks the player to do."""

    NEXT = "next"
    LOADED = "loaded"
    INIT = "init"
    PLAY = "play"
    PAUSE = "pause"
    PLAY_PAUSE = "play_pause"
    CHANGE_VOLUME = "change_volume"
    SET_VOLUME = "set_volume"
    BOOKMARK = "bookmark"
    QUIT = "quit"


_VOLUME_KINDS = frozenset({MessageKind.CHANGE_VOLUME, MessageKind.SET_VOLUME})


@dataclass(frozen=True)
class Message:
    """A request sent to the player.

    Volume messages carry an ``amount``; every other kind carries none.
    """

    kind: MessageKind
    amount: float | None = None

    def __post_init__(self) -> None:
        if self.kind in _VOLUME_KINDS:
            if self.amount is None:
                raise ValueError(f"{self.kind.name} needs an amount")
        elif self.amount is not None:
            raise ValueError(f"{self.kind.name} takes no amount")