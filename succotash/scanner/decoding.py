"""
Image decoding for the scanner package.

Turns image files into RasterImages. All container handling lives here: the
feature extractors only ever see decoded RGB pixels. Every failure to read
or decode a file is reported as DecodeError, never as InvalidInputError.
"""

from __future__ import annotations

import os
from pathlib import Path

from ..config import HEIF_EXTENSIONS
from ..features import InvalidInputError, RasterImage
from .dependencies import Image, HAS_HEIF_SUPPORT


class DecodeError(OSError):
    """Raised when a file can not be read or decoded into an image."""


def decode_file(filepath: str | Path) -> tuple[RasterImage, str]:
    """
    Decode an image file into an RGB raster.

    Args:
        filepath: Path to the image file

    Returns:
        Tuple of (RasterImage, format name reported by Pillow)

    Raises:
        DecodeError: If the file is missing, unreadable, unsupported or corrupt
    """
    filepath = str(filepath)

    if not os.path.exists(filepath):
        raise DecodeError(f"File not found: {filepath}")

    ext = os.path.splitext(filepath)[1].lower()
    if ext in HEIF_EXTENSIONS and not HAS_HEIF_SUPPORT:
        raise DecodeError("HEIC/HEIF support not installed (pip install pillow-heif)")

    try:
        with Image.open(filepath) as img:
            # Force load to detect truncated images early
            img.load()
            fmt = img.format or ""
            raster = RasterImage.from_pil(img)
    except Image.UnidentifiedImageError as e:
        raise DecodeError(f"Not a valid image file: {e}") from e
    except Image.DecompressionBombError as e:
        raise DecodeError(f"Image too large: {e}") from e
    except InvalidInputError as e:
        raise DecodeError(f"Decoded image is empty: {e}") from e
    except (OSError, ValueError, SyntaxError) as e:
        # Pillow raises SyntaxError for some malformed headers
        raise DecodeError(f"Failed to decode image: {e}") from e

    return raster, fmt


def load_raster(filepath: str | Path) -> RasterImage:
    """Decode an image file into an RGB raster (see decode_file)."""
    raster, _ = decode_file(filepath)
    return raster


__all__ = ['DecodeError', 'decode_file', 'load_raster']
