"""The bordered window the player is drawn in."""

from __future__ import annotations

import os
from typing import TextIO

import regex

from .errors import UIError
from .titlebar import TitleBar

_GRAPHEME = regex.compile(r"\X")
_RESET = "\x1b[0m"
_CLEAR_DOWN = "\x1b[J"
_COLUMN_ZERO = "\x1b[1G"
_MAX_LINES = 65535


def _move_up(lines: int) -> str:
    return f"\x1b[{lines}A" if lines else ""


class Window:
    """Frames lines of content with borders and draws them in place."""

    def __init__(
        self,
        width: int,
        borderless: bool = False,
        spaced: bool = False,
        fancy: bool = True,
    ) -> None:
        self.width = width
        self.borderless = borderless
        self.spaced = spaced
        self.fancy = fancy
        self.titlebar = TitleBar(width, borderless)
        self.statusbar = "" if borderless else "└" + "─" * (width + 2) + "┘"

    def render(self, content: list[str]) -> tuple[str, int]:
        """Render ``content`` as the full window text, returning it with its height."""
        if len(content) > _MAX_LINES:
            raise UIError("unable to convert number: too many lines")

        newline = "\r\n" if self.fancy else "\n"
        padding = " " if self.borderless else "│"

        lines = []
        for line in content:
            space = ""
            if self.spaced:
                space = " " * max(0, self.width - len(_GRAPHEME.findall(line)))
            center = f"{_RESET}{line}{_RESET}" if self.fancy else line
            lines.append(f"{padding} {center}{space} {padding}{newline}")
        menu = "".join(lines)

        # Windows misbehaves when the last line is rewritten over and over.
        if os.name == "nt":
            height, suffix = len(content) + 3, newline
        else:
            height, suffix = len(content) + 2, ""

        return f"{self.titlebar.content}{newline}{menu}{self.statusbar}{suffix}", height

    def draw(self, writer: TextIO, content: list[str]) -> None:
        """Draw the window to ``writer`` and return the cursor to its top."""
        rendered, height = self.render(content)
        try:
            writer.write(
                f"{_CLEAR_DOWN}{_COLUMN_ZERO}{rendered}{_COLUMN_ZERO}{_move_up(height - 1)}"
            )
            writer.flush()
        except OSError as exc:
            raise UIError(f"unable to write output: {exc}") from exc