"""
Scanner package for succotash.

Everything around the feature extractors: finding image files, decoding
them, analyzing them in parallel and grouping near-duplicates.

Public API:
- find_image_files: Discover image files in directories
- decode_file / load_raster: Decode an image file into a RasterImage
- DecodeError: Raised for unreadable or undecodable files
- analyze_image: Analyze a single image into an ImageRecord
- analyze_images_parallel: Analyze many images on a thread pool
- find_identical_groups: Group images with equal fingerprints
- find_similar_groups: Group images within a Hamming distance
- has_heif_support: Check if HEIC/HEIF support is available
"""

from __future__ import annotations

from .file_discovery import find_image_files
from .decoding import DecodeError, decode_file, load_raster
from .analysis import analyze_image
from .parallel import analyze_images_parallel
from .grouping import find_identical_groups, find_similar_groups
from .dependencies import HAS_HEIF_SUPPORT


def has_heif_support() -> bool:
    """Check if HEIC/HEIF support is available."""
    return HAS_HEIF_SUPPORT


__all__ = [
    # File discovery
    'find_image_files',
    # Decoding
    'DecodeError',
    'decode_file',
    'load_raster',
    # Image analysis
    'analyze_image',
    'analyze_images_parallel',
    # Grouping
    'find_identical_groups',
    'find_similar_groups',
    # Feature detection
    'has_heif_support',
]
