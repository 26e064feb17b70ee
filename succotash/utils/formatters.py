"""
Formatting utilities for succotash.

Human-readable formatting for numbers, file sizes and features.
"""

from __future__ import annotations

# Re-export format_size from models for convenience
from ..models import format_size, ImageRecord


def format_number(n: int) -> str:
    """
    Format large numbers with commas for readability.

    Examples:
        >>> format_number(1234567)
        '1,234,567'
    """
    return f"{n:,}"


def format_record(record: ImageRecord, width: int = 0) -> str:
    """
    One report line for an analyzed image: identifier, fingerprint, hue.

    Args:
        record: Analyzed image
        width: Pad the identifier to this many characters

    Examples:
        'cat.png  ffff0000ffff0000  hue 12.50'
        'bad.png  error: Not a valid image file'
    """
    name = record.path.ljust(width)
    if record.features is None:
        return f"{name}  error: {record.error}"
    return f"{name}  {record.features.fingerprint}  hue {record.features.hue}"


__all__ = ['format_number', 'format_size', 'format_record']
