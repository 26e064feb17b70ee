"""
Input validation for succotash.

Validators return (is_valid, error_message) tuples so callers can report
every problem the same way.
"""

from __future__ import annotations

import os
from typing import Optional


def validate_directory(directory: str) -> tuple[bool, str]:
    """
    Validate that a directory exists and is readable.

    Args:
        directory: Directory path to validate

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_directory('/nonexistent/directory')
        (False, 'Directory not found: /nonexistent/directory')
    """
    if not directory:
        return False, "Directory path is required"

    if not os.path.exists(directory):
        return False, f"Directory not found: {directory}"

    if not os.path.isdir(directory):
        return False, f"Path is not a directory: {directory}"

    if not os.access(directory, os.R_OK):
        return False, f"Cannot read directory (permission denied): {directory}"

    return True, ""


def validate_threshold(threshold: int) -> tuple[bool, str]:
    """
    Validate a Hamming distance threshold.

    Examples:
        >>> validate_threshold(5)
        (True, '')
        >>> validate_threshold(100)
        (False, 'Threshold must be between 0 and 64')
    """
    try:
        threshold = int(threshold)
    except (ValueError, TypeError):
        return False, "Threshold must be an integer"
    if not 0 <= threshold <= 64:
        return False, "Threshold must be between 0 and 64"
    return True, ""


def validate_workers(workers: int) -> tuple[bool, str]:
    """Validate a worker count (1-32)."""
    try:
        workers = int(workers)
    except (ValueError, TypeError):
        return False, "Workers must be an integer"
    if not 1 <= workers <= 32:
        return False, "Workers must be between 1 and 32"
    return True, ""


def validate_scan_params(
    directory: str,
    threshold: Optional[int] = None,
    workers: Optional[int] = None,
) -> tuple[bool, str]:
    """
    Validate all scan parameters.

    Examples:
        >>> validate_scan_params('/nonexistent', threshold=5)
        (False, 'Directory not found: /nonexistent')
    """
    is_valid, error = validate_directory(directory)
    if not is_valid:
        return False, error

    if threshold is not None:
        is_valid, error = validate_threshold(threshold)
        if not is_valid:
            return False, error

    if workers is not None:
        is_valid, error = validate_workers(workers)
        if not is_valid:
            return False, error

    return True, ""


__all__ = [
    'validate_directory',
    'validate_threshold',
    'validate_workers',
    'validate_scan_params',
]
