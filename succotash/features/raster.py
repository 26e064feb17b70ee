"""
Raster input for the feature extractors.

A RasterImage is a decoded, row-major grid of RGB byte triples. It is built by
the caller (usually the scanner's decoder) and only read by the extractors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from PIL import Image


class InvalidInputError(ValueError):
    """Raised when a raster (or derived data) cannot yield a feature."""


@dataclass(frozen=True, eq=False)
class RasterImage:
    """
    Decoded RGB pixel grid.

    Attributes:
        pixels: Read-only uint8 array of shape (height, width, 3)
    """
    pixels: np.ndarray

    def __post_init__(self):
        pixels = self.pixels
        if not isinstance(pixels, np.ndarray):
            raise InvalidInputError(f"Expected a numpy array, got {type(pixels).__name__}")
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise InvalidInputError(f"Expected shape (height, width, 3), got {pixels.shape}")
        if pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise InvalidInputError("Raster has no pixels")
        if pixels.dtype != np.uint8:
            raise InvalidInputError(f"Expected uint8 samples, got {pixels.dtype}")

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def to_pil(self) -> Image.Image:
        """Return an RGB Pillow image sharing nothing with this raster."""
        return Image.fromarray(np.ascontiguousarray(self.pixels))

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes) -> 'RasterImage':
        """
        Build a raster from row-major RGB bytes.

        Args:
            width: Width in pixels (>= 1)
            height: Height in pixels (>= 1)
            data: width * height * 3 bytes

        Raises:
            InvalidInputError: If the dimensions are empty or the buffer size is wrong
        """
        if width < 1 or height < 1:
            raise InvalidInputError(f"Raster has no pixels ({width}x{height})")
        expected = width * height * 3
        if len(data) != expected:
            raise InvalidInputError(
                f"Expected {expected} bytes for {width}x{height} RGB, got {len(data)}"
            )
        pixels = np.frombuffer(bytes(data), dtype=np.uint8).reshape(height, width, 3)
        return cls(pixels)

    @classmethod
    def from_array(cls, array: Any) -> 'RasterImage':
        """Build a raster from anything numpy can turn into (height, width, 3) uint8."""
        try:
            source = np.asarray(array)
        except (OverflowError, TypeError, ValueError) as e:
            raise InvalidInputError(f"Not an RGB byte grid: {e}") from e
        if source.size == 0:
            raise InvalidInputError("Raster has no pixels")
        if source.dtype != np.uint8:
            # Casting would wrap out-of-range values modulo 256
            if not np.issubdtype(source.dtype, np.integer):
                raise InvalidInputError(f"Expected integer samples, got {source.dtype}")
            if source.min() < 0 or source.max() > 255:
                raise InvalidInputError(
                    f"Samples out of byte range: {source.min()}..{source.max()}"
                )
        pixels = np.array(source, dtype=np.uint8, copy=True)
        pixels.setflags(write=False)
        return cls(pixels)

    @classmethod
    def from_pil(cls, img: Image.Image) -> 'RasterImage':
        """Build a raster from a Pillow image, converting to RGB if necessary."""
        if img.width == 0 or img.height == 0:
            raise InvalidInputError("Raster has no pixels")
        if img.mode != 'RGB':
            img = img.convert('RGB')
        pixels = np.array(img, dtype=np.uint8)
        pixels.setflags(write=False)
        return cls(pixels)


def as_raster(source: Any) -> RasterImage:
    """Coerce a RasterImage, Pillow image or array-like into a RasterImage."""
    if isinstance(source, RasterImage):
        return source
    if isinstance(source, Image.Image):
        return RasterImage.from_pil(source)
    return RasterImage.from_array(source)


__all__ = ['InvalidInputError', 'RasterImage', 'as_raster']
