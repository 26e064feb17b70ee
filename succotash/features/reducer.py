"""
Grayscale reduction feeding the fingerprint.

The reduction is part of the fingerprint's contract:

1) Convert to grayscale with Pillow's "L" mode (ITU-R 601-2 luma:
   L = R * 299/1000 + G * 587/1000 + B * 114/1000)
2) Resize to 8x8 with Pillow's BILINEAR filter (a triangle filter whose
   support grows with the downscale factor)
3) Read the 64 samples back in row-major order

Fingerprints are only comparable when produced by the same reduction.
"""

from __future__ import annotations

import numpy as np
from PIL import Image

from ..config import REDUCED_SIZE
from .raster import RasterImage

GRAYSCALE_MODE = 'L'
RESAMPLE_FILTER = Image.Resampling.BILINEAR


def to_grayscale(raster: RasterImage) -> Image.Image:
    """Return the single-channel luma image of a raster."""
    return raster.to_pil().convert(GRAYSCALE_MODE)


def reduce(raster: RasterImage, size: int = REDUCED_SIZE) -> tuple[int, ...]:
    """
    Reduce a raster to size * size grayscale samples.

    Args:
        raster: Decoded RGB raster (at least 1x1)
        size: Edge length of the reduction (default 8)

    Returns:
        Tuple of size * size ints in 0..255, row-major
    """
    small = to_grayscale(raster).resize((size, size), resample=RESAMPLE_FILTER)
    return tuple(np.asarray(small, dtype=np.uint8).ravel().tolist())


__all__ = ['GRAYSCALE_MODE', 'RESAMPLE_FILTER', 'to_grayscale', 'reduce']
