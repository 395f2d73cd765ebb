"""ANSI terminal drawing: cursor movement, colours and the play-field border."""

from __future__ import annotations

import sys
from enum import IntEnum
from typing import TextIO

ESC = "\033"
NORMAL_TEXT = "[0m"
BOLD_TEXT = "[1m"
ITALIC_TEXT = "[3m"
BLINK_TEXT = "[5m"
REVERSE_TEXT = "[7m"
HOME_CURSOR = "[f"
SHOW_CURSOR = "[?25h"
HIDE_CURSOR = "[?25l"
CLEAR_SCREEN = "[2J"

BOX_ENABLE = "(0"
BOX_DISABLE = "(B"
BOX_VLINE = chr(0x78)
BOX_HLINE = chr(0x71)
BOX_UPLEFT = chr(0x6C)
BOX_UPRIGHT = chr(0x6B)
BOX_DWNLEFT = chr(0x6D)
BOX_DWNRIGHT = chr(0x6A)
BOX_CROSS = chr(0x6E)
BOX_TLEFT = chr(0x74)
BOX_TRIGHT = chr(0x75)
BOX_TUP = chr(0x77)
BOX_TDOWN = chr(0x76)
BOX_DIAMOND = chr(0x60)
BOX_BLOCK = chr(0x61)
BOX_DOT = chr(0x7E)

SCR_START_X = 3
SCR_END_X = 75
SCR_START_Y = 1
SCR_END_Y = 23

MIN_X = 1
MIN_Y = 1
MAX_X = 80
MAX_Y = 24


class Color(IntEnum):
    """Terminal colours in ANSI order."""

    BLACK = 0
    RED = 1
    GREEN = 2
    BROWN = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    LIGHTGRAY = 7
    DARKGRAY = 8
    LIGHTRED = 9
    LIGHTGREEN = 10
    YELLOW = 11
    LIGHTBLUE = 12
    LIGHTMAGENTA = 13
    LIGHTCYAN = 14
    WHITE = 15


def gotoxy_sequence(x: int, y: int) -> str:
    """Escape sequence that moves the cursor to (x, y), clamped to the screen."""
    x = min(max(x, 0), MAX_X - 1)
    y = min(max(y, 0), MAX_Y)
    return f"{ESC}[f{ESC}[{y}B{ESC}[{x}C"


def color_sequence(fg: int, bg: int) -> str:
    """Escape sequence selecting foreground and background colours."""
    fg = int(fg)
    bg = int(bg)
    weight = 0
    if fg > Color.LIGHTGRAY:
        weight = 1
        fg -= 8
    return f"{ESC}[{weight};{fg + 30};{bg + 40}m"


class Screen:
    """Writes terminal control sequences and text to a stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def write(self, text: str) -> None:
        self.stream.write(text)

    def _control(self, code: str) -> None:
        self.write(ESC + code)

    def home_cursor(self) -> None:
        self._control(HOME_CURSOR)

    def show_cursor(self) -> None:
        self._control(SHOW_CURSOR)

    def hide_cursor(self) -> None:
        self._control(HIDE_CURSOR)

    def clear(self) -> None:
        self.home_cursor()
        self._control(CLEAR_SCREEN)

    def update(self) -> None:
        self.stream.flush()

    def set_normal(self) -> None:
        self._control(NORMAL_TEXT)

    def set_bold(self) -> None:
        self._control(BOLD_TEXT)

    def set_blink(self) -> None:
        self._control(BLINK_TEXT)

    def set_reverse(self) -> None:
        self._control(REVERSE_TEXT)

    def box_enable(self) -> None:
        self._control(BOX_ENABLE)

    def box_disable(self) -> None:
        self._control(BOX_DISABLE)

    def init(self, draw_borders: bool) -> None:
        """Clear the screen, optionally draw the border, and hide the cursor."""
        self.clear()
        if draw_borders:
            self.draw_borders()
        self.home_cursor()
        self.hide_cursor()

    def destroy(self) -> None:
        """Reset colours, clear the screen and show the cursor again."""
        self.write(f"{ESC}[0;39;49m")
        self.set_normal()
        self.clear()
        self.home_cursor()
        self.show_cursor()

    def draw_borders(self) -> None:
        """Clear the screen and draw a box around the whole play field."""
        self.clear()
        self.box_enable()

        self.gotoxy(MIN_X, MIN_Y)
        self.write(BOX_UPLEFT)
        for x in range(MIN_X + 1, MAX_X):
            self.gotoxy(x, MIN_Y)
            self.write(BOX_HLINE)
        self.gotoxy(MAX_X, MIN_Y)
        self.write(BOX_UPRIGHT)

        for y in range(MIN_Y + 1, MAX_Y):
            self.gotoxy(MIN_X, y)
            self.write(BOX_VLINE)
            self.gotoxy(MAX_X, y)
            self.write(BOX_VLINE)

        self.gotoxy(MIN_X, MAX_Y)
        self.write(BOX_DWNLEFT)
        for x in range(MIN_X + 1, MAX_X):
            self.gotoxy(x, MAX_Y)
            self.write(BOX_HLINE)
        self.gotoxy(MAX_X, MAX_Y)
        self.write(BOX_DWNRIGHT)

        self.box_disable()

    def gotoxy(self, x: int, y: int) -> None:
        self.write(gotoxy_sequence(x, y))

    def set_color(self, fg: int, bg: int) -> None:
        self.write(color_sequence(fg, bg))