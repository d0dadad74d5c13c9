"""A droplet is a single vertical streak of characters bound to one column."""

import logging
from typing import Optional

from digirain.attrs import CharLoc, ColorMode, ShadingMode
from digirain.config import HEAD_FLASH_MS

log = logging.getLogger(__name__)


class Droplet:
    """One independently timed streak.

    The head (bottom) grows down the column until it reaches ``end_line``;
    the tail (top) follows once the streak is full length, and the droplet
    dies when the tail catches the head. ``*_put_line`` is where the
    simulation wants an edge to be, ``*_cur_line`` is where it was last drawn.
    """

    def __init__(
        self,
        cloud=None,
        display=None,
        column: Optional[int] = None,
        end_line: Optional[int] = None,
        pool_index: Optional[int] = None,
        length: Optional[int] = None,
        chars_per_second: float = 0.0,
        linger_ms: int = 0,
        epoch: bool = False,
    ):
        self.reset()
        self.configure(
            cloud, display, column, end_line, pool_index, length,
            chars_per_second, linger_ms, epoch,
        )

    def configure(
        self,
        cloud,
        display,
        column: Optional[int],
        end_line: Optional[int],
        pool_index: Optional[int],
        length: Optional[int],
        chars_per_second: float,
        linger_ms: int,
        epoch: bool,
    ) -> None:
        """Bind geometry and speed. The droplet stays inert until activate()."""
        self._cloud = cloud
        self._display = display
        self._column = column
        self._end_line = end_line
        self._pool_index = pool_index
        self._length = length
        self.chars_per_second = chars_per_second
        self._linger_ms = linger_ms
        self._epoch = epoch

    def reset(self) -> None:
        """Return to the inert default state so the droplet can be reused."""
        self._cloud = None
        self._display = None
        self._alive = False
        self._head_crawling = False
        self._tail_crawling = False
        self._column: Optional[int] = None
        self._head_put_line = 0
        self._head_cur_line = 0
        self._tail_put_line: Optional[int] = None
        self._tail_cur_line = 0
        self._end_line: Optional[int] = None
        self._pool_index: Optional[int] = None
        self._length: Optional[int] = None
        self.chars_per_second = 0.0
        self._last_tick_ms = 0
        self._head_stop_ms = 0
        self._linger_ms = 0
        self._fractional_chars = 0.0
        self._epoch = False
        self._data_offset: Optional[int] = None
        self._top_freeze_line: Optional[int] = None

    # Accessors

    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def column(self) -> Optional[int]:
        return self._column

    @property
    def head_put_line(self) -> int:
        return self._head_put_line

    @property
    def head_cur_line(self) -> int:
        return self._head_cur_line

    @property
    def tail_put_line(self) -> Optional[int]:
        return self._tail_put_line

    @property
    def tail_cur_line(self) -> int:
        return self._tail_cur_line

    @property
    def head_crawling(self) -> bool:
        return self._head_crawling

    @property
    def tail_crawling(self) -> bool:
        return self._tail_crawling

    @property
    def end_line(self) -> Optional[int]:
        return self._end_line

    @property
    def length(self) -> Optional[int]:
        return self._length

    @property
    def pool_index(self) -> Optional[int]:
        return self._pool_index

    @property
    def epoch(self) -> bool:
        return self._epoch

    @property
    def fractional_chars(self) -> float:
        return self._fractional_chars

    @property
    def head_stop_ms(self) -> int:
        return self._head_stop_ms

    @property
    def data_offset(self) -> Optional[int]:
        return self._data_offset

    @property
    def top_freeze_line(self) -> Optional[int]:
        return self._top_freeze_line

    def set_simulation_data(self, data_offset: int, top_freeze_line: int) -> None:
        """Pin rows at or below ``top_freeze_line`` to frozen data starting at ``data_offset``."""
        self._data_offset = data_offset
        self._top_freeze_line = top_freeze_line

    def set_cloud(self, cloud) -> None:
        self._cloud = cloud

    def set_display(self, display) -> None:
        self._display = display

    # Animation

    def activate(self, now_ms: int) -> None:
        self._alive = True
        self._head_crawling = True
        self._tail_crawling = True
        self._last_tick_ms = now_ms

    def advance(self, now_ms: int) -> None:
        """Move head and tail by however many whole rows have elapsed since the last tick."""
        elapsed_ms = max(0, now_ms - self._last_tick_ms)
        self._fractional_chars += self.chars_per_second * (elapsed_ms / 1000.0)
        chars = int(self._fractional_chars)
        if not chars:
            self._last_tick_ms = now_ms
            return
        self._fractional_chars -= chars

        old_tail_cur_line = self._tail_cur_line

        if self._head_crawling:
            self._head_put_line = min(self._head_put_line + chars, self._end_line)

            # Head reached the end: stop it and maybe the tail too
            if self._head_put_line == self._end_line:
                self._head_crawling = False
                if self._head_stop_ms == 0:
                    self._head_stop_ms = now_ms
                    if self._linger_ms > 0:
                        self._tail_crawling = False

        if self._tail_crawling and (
            self._head_put_line >= self._length or self._head_put_line >= self._end_line
        ):
            if self._tail_put_line is None:
                self._tail_put_line = chars
            else:
                self._tail_put_line += chars
            self._tail_put_line = min(self._tail_put_line, self._end_line)

            # Far enough down the screen, let the column spawn another droplet
            thresh_line = self._cloud.visible_line_count() // 4
            if old_tail_cur_line <= thresh_line < self._tail_put_line:
                self._cloud.notify_column_spawn_eligible(self._column, True)

        if (
            not self._tail_crawling
            and self._head_stop_ms > 0
            and now_ms >= self._head_stop_ms + self._linger_ms
        ):
            self._tail_crawling = True

        if self._tail_put_line == self._head_put_line:
            self._alive = False
            log.debug("droplet in column %s died at line %d", self._column, self._head_put_line)

        self._last_tick_ms = now_ms

    def sync_cur_line(self) -> None:
        """Commit the put lines as drawn. Call once per tick, after draw()."""
        self._head_cur_line = self._head_put_line
        if self._tail_put_line is not None:
            self._tail_cur_line = self._tail_put_line

    def draw(self, now_ms: int) -> None:
        """Erase the trailing edge and paint the cells that changed since the last sync."""
        start_line = 0
        if self._tail_put_line is not None:
            for line in range(self._tail_cur_line, self._tail_put_line + 1):
                self._display.paint_cell(line, self._column, " ")
            start_line = self._tail_put_line + 1

        cloud = self._cloud
        redraw_all = cloud.shading_mode() is ShadingMode.DISTANCE_FROM_HEAD
        use_color = cloud.color_mode() is not ColorMode.MONO
        head_bright = self._is_head_bright(now_ms)

        for line in range(start_line, self._head_put_line + 1):
            if self._top_freeze_line is not None and line >= self._top_freeze_line:
                offset = self._data_offset + line - self._top_freeze_line
            else:
                offset = None
            glyph = cloud.get_char(line, self._pool_index, offset)

            loc = CharLoc.MIDDLE
            if self._tail_put_line is not None and line == self._tail_put_line + 1:
                loc = CharLoc.TAIL
            if line == self._head_put_line and head_bright:
                loc = CharLoc.HEAD

            # Cells between the tail and the drawn head have not changed
            if (
                loc is CharLoc.MIDDLE
                and line < self._head_cur_line
                and line != self._end_line
                and not redraw_all
            ):
                continue

            attr = cloud.get_attr(
                line, self._column, glyph, loc, now_ms, self._head_put_line, self._length
            )
            if use_color:
                self._display.paint_cell(
                    line, self._column, glyph, bold=attr.is_bold, color_pair=attr.color_pair
                )
            else:
                self._display.paint_cell(line, self._column, glyph, bold=attr.is_bold)

    def _is_head_bright(self, now_ms: int) -> bool:
        if self._head_crawling:
            return True
        return self._head_stop_ms > 0 and now_ms <= self._head_stop_ms + HEAD_FLASH_MS
