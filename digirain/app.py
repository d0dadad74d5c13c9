#!/usr/bin/env python3
"""Matrix-style terminal rain animation."""

import curses
import locale
import logging
import signal
import sys
import time

from digirain import config
from digirain.attrs import ColorMode
from digirain.cloud import Cloud
from digirain.config import RainConfig, parse_args
from digirain.display import CursesDisplay
from digirain.log import configure_logging

log = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.monotonic() * 1000)


class MatrixRain:
    """Main application controller."""

    def __init__(self, stdscr, rain_config: RainConfig):
        self.stdscr = stdscr
        self.config = rain_config
        self.height = 0
        self.width = 0
        self.color_mode = ColorMode.MONO
        self.display = None
        self.cloud = None
        self.running = True

    def setup(self) -> None:
        """Initialize curses settings and validate terminal."""
        # Initialize locale for proper Unicode rendering
        locale.setlocale(locale.LC_ALL, "")

        # Hide cursor (some terminals don't support this)
        try:
            curses.curs_set(0)
        except curses.error:
            pass

        # Non-blocking input
        self.stdscr.nodelay(True)
        self.stdscr.timeout(0)

        self.height, self.width = self.stdscr.getmaxyx()
        self._check_size()

        self.color_mode = self._setup_colors()

        # Clear screen and set background
        if self.color_mode is ColorMode.MONO:
            self.stdscr.bkgd(" ", curses.A_NORMAL)
        else:
            self.stdscr.bkgd(" ", curses.color_pair(0))
        self.stdscr.clear()

        self.display = CursesDisplay(self.stdscr, self.height, self.width)
        self.cloud = Cloud(
            self.display, self.height, self.width, self.config, color_mode=self.color_mode
        )
        log.info("started %dx%d, color mode %s", self.width, self.height, self.color_mode.name)

    def _check_size(self) -> None:
        if self.width < config.MIN_WIDTH or self.height < config.MIN_HEIGHT:
            log.error("terminal too small: %dx%d", self.width, self.height)
            raise RuntimeError(
                f"Terminal too small: {self.width}x{self.height}. "
                f"Minimum size: {config.MIN_WIDTH}x{config.MIN_HEIGHT}."
            )

    def _setup_colors(self) -> ColorMode:
        """Initialize color pairs for gradient with fallback for limited terminals."""
        if self.config.color is ColorMode.MONO:
            return ColorMode.MONO

        curses.start_color()
        curses.use_default_colors()

        if not curses.has_colors():
            if self.config.color is not None:
                log.error("color mode %s requested without color support", self.config.color.name)
                raise RuntimeError("Terminal does not support colors.")
            return ColorMode.MONO

        mode = self.config.color
        if mode is None:
            mode = ColorMode.COLOR256 if curses.COLORS >= 256 else ColorMode.COLOR16

        if mode is ColorMode.COLOR256 and curses.COLORS >= 256:
            # 256-color palette indices:
            # 255 = bright white (head)
            # 46  = bright green (#00ff00)
            # 40  = medium green (#00d700)
            # 34  = dim green (#00af00)
            curses.init_pair(config.COLOR_HEAD, 255, -1)
            curses.init_pair(config.COLOR_BRIGHT, 46, -1)
            curses.init_pair(config.COLOR_MEDIUM, 40, -1)
            curses.init_pair(config.COLOR_DIM, 34, -1)
        else:
            # 16-color palette, also the fallback when 256 colors are unavailable
            curses.init_pair(config.COLOR_HEAD, curses.COLOR_WHITE, -1)
            curses.init_pair(config.COLOR_BRIGHT, curses.COLOR_GREEN, -1)
            curses.init_pair(config.COLOR_MEDIUM, curses.COLOR_GREEN, -1)
            curses.init_pair(config.COLOR_DIM, curses.COLOR_GREEN, -1)
        return mode

    def _resize(self) -> None:
        self.height, self.width = self.stdscr.getmaxyx()
        self._check_size()
        self.stdscr.clear()
        self.display.resize(self.height, self.width)
        self.cloud.resize(self.height, self.width)
        log.info("resized to %dx%d", self.width, self.height)

    def handle_key(self, key: int) -> None:
        if key == ord("q"):
            self.running = False
        elif key == curses.KEY_RESIZE:
            self._resize()

    def run(self) -> None:
        """Main loop with frame pacing."""
        self.setup()
        frame_time = self.config.frame_time

        while self.running:
            frame_start = time.monotonic()

            try:
                key = self.stdscr.getch()
            except curses.error:
                key = -1
            if key != -1:
                self.handle_key(key)

            self.cloud.tick(now_ms())
            self.display.refresh()

            # Frame pacing
            sleep_time = frame_time - (time.monotonic() - frame_start)
            if sleep_time > 0:
                time.sleep(sleep_time)


def signal_handler(signum, frame) -> None:
    """Handle Ctrl+C for clean exit."""
    sys.exit(0)


def main(argv=None) -> None:
    rain_config = parse_args(argv)
    configure_logging(rain_config.debug_log)

    # Register signal handlers before curses init
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        # Check TTY requirement
        if not sys.stdout.isatty():
            print("Error: Requires TTY.", file=sys.stderr)
            sys.exit(1)

        # Run with curses wrapper (handles init/cleanup)
        curses.wrapper(lambda stdscr: MatrixRain(stdscr, rain_config).run())
    except curses.error as e:
        print(
            f"Error: Cannot initialize terminal. "
            f"Ensure TERM is set and you're running in a supported terminal.\n"
            f"Details: {e}",
            file=sys.stderr,
        )
        sys.exit(1)
    except RuntimeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
