"""Digital rain for the terminal."""

from digirain.attrs import CharAttr, CharLoc, ColorMode, ShadingMode
from digirain.cloud import Cloud
from digirain.droplet import Droplet

__all__ = ["CharAttr", "CharLoc", "Cloud", "ColorMode", "Droplet", "ShadingMode"]
__version__ = "0.1.0"
