"""Shading, color and cell attribute types shared by droplets and the cloud."""

from dataclasses import dataclass
from enum import Enum


class ShadingMode(Enum):
    RANDOM = "random"
    DISTANCE_FROM_HEAD = "distance"


class ColorMode(Enum):
    MONO = "mono"
    COLOR16 = "16"
    COLOR256 = "256"


class CharLoc(Enum):
    """Where a cell sits within a droplet."""

    MIDDLE = "middle"
    TAIL = "tail"
    HEAD = "head"


@dataclass(frozen=True)
class CharAttr:
    is_bold: bool = False
    color_pair: int = 0
