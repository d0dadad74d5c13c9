"""Curses display backend."""

import curses
from typing import Optional


class CursesDisplay:
    """Paints single cells onto a curses window."""

    def __init__(self, stdscr, lines: int, cols: int):
        self.stdscr = stdscr
        self.lines = lines
        self.cols = cols

    def resize(self, lines: int, cols: int) -> None:
        self.lines = lines
        self.cols = cols

    def paint_cell(
        self,
        row: int,
        col: int,
        glyph: str,
        bold: bool = False,
        color_pair: Optional[int] = None,
    ) -> None:
        if not (0 <= row < self.lines and 0 <= col < self.cols):
            return
        # Avoid bottom-right corner (curses quirk)
        if row == self.lines - 1 and col == self.cols - 1:
            return

        attr = curses.A_BOLD if bold else curses.A_NORMAL
        if color_pair is not None:
            attr |= curses.color_pair(color_pair)
        try:
            self.stdscr.addstr(row, col, glyph, attr)
        except curses.error:
            pass

    def refresh(self) -> None:
        self.stdscr.refresh()
