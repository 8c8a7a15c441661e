"""The top row of the player window."""

from __future__ import annotations

import regex

_GRAPHEME = regex.compile(r"\X")


def _blank(width: int, borderless: bool) -> str:
    if borderless:
        return ""
    return "┌" + "─" * (width + 2) + "┐"


class TitleBar:
    """The top row of the window, which can show a short message."""

    def __init__(self, width: int, borderless: bool = False) -> None:
        self.width = width
        self.borderless = borderless
        self.content = _blank(width, borderless)

    def empty(self) -> None:
        """Remove whatever is displayed."""
        self.content = _blank(self.width, self.borderless)

    def display(self, text: object) -> None:
        """Show ``text`` in the bar, cutting it short if it does not fit."""
        text = str(text)
        graphemes = _GRAPHEME.findall(text)
        length = len(graphemes)
        inner = self.width - 2
        if inner < 0:
            raise ValueError("the titlebar is too narrow to display text")

        if length > inner:
            if inner < 3:
                raise ValueError("the titlebar is too narrow to display text")
            text = "".join(graphemes[: inner - 3]) + "..."
            length = inner

        if self.borderless:
            prefix, middle, suffix = "  ", " ", "  "
        else:
            prefix, middle, suffix = "┌─", "─", "─┐"

        self.content = f"{prefix} {text} {middle * (inner - length)}{suffix}"