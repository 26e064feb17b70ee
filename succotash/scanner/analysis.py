"""
Image analysis module for the scanner package.

Analyzes a single image file: decodes it and extracts its features, recording
any failure on the result instead of raising.
"""

from __future__ import annotations

import os
from pathlib import Path

from ..features import InvalidInputError, features
from ..models import ImageRecord
from .decoding import DecodeError, decode_file
from .dependencies import _logger


def analyze_image(filepath: str | Path) -> ImageRecord:
    """
    Analyze an image file and extract its features.

    Args:
        filepath: Path to the image file

    Returns:
        ImageRecord with features set, or with error set if the file could
        not be decoded
    """
    filepath = str(filepath)
    record = ImageRecord(path=filepath)

    try:
        record.file_size = os.path.getsize(filepath)
    except OSError as e:
        record.error = f"File not accessible: {e}"
        _logger.debug(f"Skipping {filepath}: {record.error}")
        return record

    try:
        raster, fmt = decode_file(filepath)
    except DecodeError as e:
        record.error = str(e)
        _logger.debug(f"Decode failed for {filepath}: {e}")
        return record

    record.width = raster.width
    record.height = raster.height
    record.format = fmt

    try:
        record.features = features(raster)
    except InvalidInputError as e:
        record.error = f"Invalid image data: {e}"
        _logger.debug(f"Feature extraction failed for {filepath}: {e}")
        return record

    _logger.debug(f"{record.filename}: fingerprint {record.features.fingerprint}, hue {record.features.hue}")
    return record


__all__ = ['analyze_image']
