"""Tunable constants and command line options."""

import argparse
from dataclasses import dataclass
from typing import Optional

from digirain.attrs import ColorMode, ShadingMode

# Character sets
KATAKANA = "アイウエオカキクケコサシスセソタチツテトナニヌネノハヒフヘホマミムメモヤユヨラリルレロワヲン"
ASCII_CHARS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz!@#$%^&*()_+-=[]{}|;:',.<>?/"
BINARY_CHARS = "01"
CHARSETS = {
    "katakana": KATAKANA,
    "ascii": ASCII_CHARS,
    "binary": BINARY_CHARS,
    "mixed": KATAKANA + ASCII_CHARS,
}

# Speed tiers (cells per second) - 1x/2x/3x for depth perception
SPEED_TIERS = (8.0, 16.0, 24.0)

# Visual parameters
TRAIL_LENGTH_RANGE = (8, 25)
SPAWN_CHANCE = 0.05  # per eligible column per tick
SHORT_DROPLET_CHANCE = 0.1
LINGER_MS_RANGE = (0, 1000)
POOL_COUNT = 16

# How long the head stays bright after it stops
HEAD_FLASH_MS = 100

# Timing
TARGET_FPS = 30

# Terminal requirements
MIN_WIDTH = 20
MIN_HEIGHT = 10

# Color pair indices
COLOR_HEAD = 1
COLOR_BRIGHT = 2
COLOR_MEDIUM = 3
COLOR_DIM = 4
GRADIENT = (COLOR_BRIGHT, COLOR_MEDIUM, COLOR_DIM)

DEFAULT_DEBUG_LOG = "./debug.log"

SHADING_NAMES = {
    "random": ShadingMode.RANDOM,
    "distance": ShadingMode.DISTANCE_FROM_HEAD,
}
COLOR_NAMES = {
    "mono": ColorMode.MONO,
    "16": ColorMode.COLOR16,
    "256": ColorMode.COLOR256,
}


@dataclass
class RainConfig:
    """Runtime settings for one rain session."""

    speed: float = 1.0
    density: float = SPAWN_CHANCE
    fps: int = TARGET_FPS
    shading: ShadingMode = ShadingMode.RANDOM
    color: Optional[ColorMode] = None  # None: detect from the terminal
    charset: str = "mixed"
    max_linger_ms: int = LINGER_MS_RANGE[1]
    seed: Optional[int] = None
    debug_log: Optional[str] = None

    @property
    def chars(self) -> str:
        return CHARSETS[self.charset]

    @property
    def speed_tiers(self) -> tuple:
        return tuple(tier * self.speed for tier in SPEED_TIERS)

    @property
    def frame_time(self) -> float:
        return 1.0 / self.fps


def _positive_float(text: str) -> float:
    value = float(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {text}")
    return value


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {text}")
    return value


def _non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {text}")
    return value


def _density(text: str) -> float:
    value = float(text)
    if not 0 < value <= 1:
        raise argparse.ArgumentTypeError(f"must be in (0, 1]: {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="digirain",
        description="Digital rain in the terminal. Press q to quit.",
    )
    parser.add_argument("--speed", type=_positive_float, default=1.0,
                        help="speed multiplier applied to every droplet")
    parser.add_argument("--density", type=_density, default=SPAWN_CHANCE,
                        help="chance per tick that a free column spawns a droplet")
    parser.add_argument("--fps", type=_positive_int, default=TARGET_FPS,
                        help="target frame rate")
    parser.add_argument("--shading", choices=sorted(SHADING_NAMES), default="random",
                        help="how droplet bodies are shaded")
    parser.add_argument("--color", choices=sorted(COLOR_NAMES), default=None,
                        help="color mode (default: detect)")
    parser.add_argument("--charset", choices=sorted(CHARSETS), default="mixed",
                        help="glyphs to rain")
    parser.add_argument("--linger-ms", type=_non_negative_int, default=LINGER_MS_RANGE[1],
                        help="longest pause before a stopped droplet collapses")
    parser.add_argument("--seed", type=int, default=None,
                        help="random seed for reproducible rain")
    parser.add_argument("--debug", nargs="?", const=DEFAULT_DEBUG_LOG, default=None,
                        metavar="PATH", help="append a debug log to PATH")
    return parser


def parse_args(argv=None) -> RainConfig:
    """Parse command line options into a RainConfig."""
    args = build_parser().parse_args(argv)
    return RainConfig(
        speed=args.speed,
        density=args.density,
        fps=args.fps,
        shading=SHADING_NAMES[args.shading],
        color=COLOR_NAMES[args.color] if args.color else None,
        charset=args.charset,
        max_linger_ms=args.linger_ms,
        seed=args.seed,
        debug_log=args.debug,
    )
