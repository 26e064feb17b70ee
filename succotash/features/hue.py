"""
Hue of an image, in degrees, normalized to [0, 360).

The hue is taken from the image's mean color: the R, G and B channels are
averaged over all pixels and the single averaged color is converted to HSV.
For multi-colored images this differs from the mean of per-pixel hues, and
that is intended: the value is a cheap sort key, not a color analysis.
"""

from __future__ import annotations

import colorsys
import math
from dataclasses import dataclass

import numpy as np

from .raster import InvalidInputError, RasterImage, as_raster

FULL_TURN = 360.0


def normalize_degrees(degrees: float) -> float:
    """Wrap an angle into [0, 360)."""
    if not math.isfinite(degrees):
        raise InvalidInputError(f"Hue angle must be finite, got {degrees}")
    wrapped = math.fmod(degrees, FULL_TURN)
    if wrapped < 0.0:
        wrapped += FULL_TURN
    # -1e-20 + 360 rounds to 360.0
    if wrapped >= FULL_TURN:
        wrapped = 0.0
    return wrapped + 0.0


@dataclass(frozen=True, order=True)
class Hue:
    """
    Hue angle in degrees, always within [0, 360).

    Totally ordered like the float it wraps. The angle is normalized on
    creation, so Hue(-90) == Hue(270).
    """
    degrees: float

    def __post_init__(self):
        object.__setattr__(self, 'degrees', normalize_degrees(float(self.degrees)))

    def __float__(self) -> float:
        return self.degrees

    def __str__(self) -> str:
        return f"{self.degrees:.2f}"


def mean_color(raster: RasterImage) -> tuple[float, float, float]:
    """Arithmetic mean of the R, G and B channels, in 0..255 floats."""
    raster = as_raster(raster)
    channels = raster.pixels.reshape(-1, 3)
    # float64 accumulation, no uint8 overflow
    means = channels.mean(axis=0, dtype=np.float64)
    r, g, b = (float(m) for m in means)
    return r, g, b


def hue_of_color(r: float, g: float, b: float) -> Hue:
    """HSV hue of one RGB color given in 0..255."""
    h, _, _ = colorsys.rgb_to_hsv(r / 255.0, g / 255.0, b / 255.0)
    return Hue(h * FULL_TURN)


def hue(raster: RasterImage) -> Hue:
    """
    Find the hue of a raster's mean color.

    Raises:
        InvalidInputError: If the raster has no pixels
    """
    return hue_of_color(*mean_color(raster))


__all__ = ['Hue', 'normalize_degrees', 'mean_color', 'hue_of_color', 'hue']
