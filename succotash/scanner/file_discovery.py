"""
File discovery module for the scanner package.

Finds and enumerates image files in directories, with support for recursive
scanning and HEIC/HEIF format detection.
"""

from __future__ import annotations

from pathlib import Path

from ..config import HEIF_EXTENSIONS, IMAGE_EXTENSIONS
from .dependencies import HAS_HEIF_SUPPORT


def find_image_files(root_path: str | Path, recursive: bool = True) -> list[str]:
    """
    Find all image files in the given directory.

    Args:
        root_path: Directory path to search for images
        recursive: If True, search subdirectories recursively

    Returns:
        Sorted list of absolute file paths as strings

    Notes:
        - Filters out HEIC/HEIF files if pillow-heif is not installed
        - Resolves symlinks and skips files reached through more than one path
    """
    root = Path(root_path)

    extensions_to_scan = IMAGE_EXTENSIONS
    if not HAS_HEIF_SUPPORT:
        extensions_to_scan = IMAGE_EXTENSIONS - HEIF_EXTENSIONS

    images = []
    seen = set()

    iterator = root.rglob('*') if recursive else root.glob('*')

    for filepath in iterator:
        if filepath.is_file() and filepath.suffix.lower() in extensions_to_scan:
            resolved = str(filepath.resolve())
            if resolved not in seen:
                seen.add(resolved)
                images.append(resolved)

    # Directory order is filesystem dependent
    images.sort()
    return images


__all__ = ['find_image_files']
