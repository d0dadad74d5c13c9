"""The cloud owns every droplet on screen and answers their glyph/attribute queries."""

import logging
import random
from typing import List, Optional

from digirain import config
from digirain.attrs import CharAttr, CharLoc, ColorMode, ShadingMode
from digirain.config import RainConfig
from digirain.droplet import Droplet

log = logging.getLogger(__name__)


class Cloud:
    """Column coordinator: spawns, ticks and recycles droplets."""

    def __init__(
        self,
        display,
        lines: int,
        cols: int,
        rain_config: Optional[RainConfig] = None,
        color_mode: ColorMode = ColorMode.COLOR256,
        rng: Optional[random.Random] = None,
    ):
        self.display = display
        self.config = rain_config or RainConfig()
        self._color_mode = color_mode
        self.rng = rng or random.Random(self.config.seed)
        self.epoch = False
        self.droplets: List[Droplet] = []
        self._free: List[Droplet] = []
        self.resize(lines, cols)

    def resize(self, lines: int, cols: int) -> None:
        """Drop all droplets and rebuild pools and spawn flags for a new screen size."""
        self.lines = lines
        self.cols = cols
        for droplet in self.droplets:
            droplet.reset()
            self._free.append(droplet)
        self.droplets = []
        self.char_pools = [
            [self.rng.choice(self.config.chars) for _ in range(lines)]
            for _ in range(config.POOL_COUNT)
        ]
        self.column_spawn = [True] * cols
        log.debug("cloud sized to %dx%d", cols, lines)

    # Queries used by droplets

    def visible_line_count(self) -> int:
        return self.lines

    def get_char(self, row: int, pool_index: int, offset: Optional[int]) -> str:
        pool = self.char_pools[pool_index]
        if offset is None:
            return pool[row % len(pool)]
        return pool[offset % len(pool)]

    def shading_mode(self) -> ShadingMode:
        return self.config.shading

    def color_mode(self) -> ColorMode:
        return self._color_mode

    def get_attr(
        self,
        row: int,
        col: int,
        glyph: str,
        loc: CharLoc,
        now_ms: int,
        head_line: int,
        length: int,
    ) -> CharAttr:
        """Pick bold and color for one cell."""
        if loc is CharLoc.HEAD:
            return CharAttr(is_bold=True, color_pair=config.COLOR_HEAD)
        if loc is CharLoc.TAIL:
            return CharAttr(color_pair=config.COLOR_DIM)
        gradient = config.GRADIENT
        if self.config.shading is ShadingMode.DISTANCE_FROM_HEAD:
            ratio = (head_line - row) / max(1, length)
            step = min(len(gradient) - 1, int(ratio * len(gradient)))
        else:
            step = self.rng.randrange(len(gradient))
        return CharAttr(color_pair=gradient[step])

    def notify_column_spawn_eligible(self, col: int, allowed: bool) -> None:
        self.column_spawn[col] = allowed

    # Animation

    def droplet_count(self) -> int:
        return len(self.droplets)

    def tick(self, now_ms: int) -> None:
        """Spawn, then advance, draw and sync every live droplet in that order."""
        self._spawn_droplets(now_ms)

        for droplet in self.droplets:
            droplet.advance(now_ms)
        for droplet in self.droplets:
            droplet.draw(now_ms)
        for droplet in self.droplets:
            droplet.sync_cur_line()

        # Recycle dead droplets
        dead = [d for d in self.droplets if not d.alive]
        self.droplets = [d for d in self.droplets if d.alive]
        occupied = {d.column for d in self.droplets}
        for droplet in dead:
            # An emptied column may spawn again even if its droplet died short of the spawn line
            if droplet.column not in occupied:
                self.column_spawn[droplet.column] = True
            droplet.reset()
            self._free.append(droplet)

    def _spawn_droplets(self, now_ms: int) -> None:
        for col in range(self.cols):
            if self.column_spawn[col] and self.rng.random() < self.config.density:
                self.spawn(col, now_ms)

    def spawn(self, col: int, now_ms: int) -> Droplet:
        """Start a new droplet at the top of ``col``."""
        rng = self.rng
        end_line = self.lines - 1
        if rng.random() < config.SHORT_DROPLET_CHANCE:
            end_line = rng.randint(end_line // 2, end_line)

        droplet = self._free.pop() if self._free else Droplet()
        droplet.configure(
            cloud=self,
            display=self.display,
            column=col,
            end_line=end_line,
            pool_index=rng.randrange(config.POOL_COUNT),
            length=rng.randint(*config.TRAIL_LENGTH_RANGE),
            chars_per_second=rng.choice(self.config.speed_tiers),
            linger_ms=rng.randint(config.LINGER_MS_RANGE[0], self.config.max_linger_ms),
            epoch=self.epoch,
        )
        droplet.activate(now_ms)
        self.droplets.append(droplet)
        self.column_spawn[col] = False
        log.debug("spawned droplet in column %d, end line %d", col, end_line)
        return droplet
