"""
Configuration constants for succotash.

This module contains all configurable settings including:
- Supported image extensions
- The fixed reduction used by the fingerprint
- Defaults for parallel analysis and near-duplicate grouping
"""

import os

# Image extensions Pillow can decode (HEIC/HEIF only with pillow-heif)
IMAGE_EXTENSIONS = {
    # Common formats
    '.jpg', '.jpeg', '.png', '.gif', '.bmp', '.webp', '.tiff', '.tif',
    # Other formats
    '.ico', '.icns', '.psd',
    '.heic', '.heif', '.avif',
    '.pbm', '.pgm', '.ppm', '.pnm',
    '.tga', '.dds',
    '.jp2', '.j2k', '.jpf', '.jpx',
    '.pcx', '.sgi', '.rgb', '.rgba', '.bw',
}

HEIF_EXTENSIONS = {'.heic', '.heif'}

# Fingerprint reduction: REDUCED_SIZE x REDUCED_SIZE grayscale samples.
# Changing this (or the filter in features/reducer.py) changes every fingerprint.
REDUCED_SIZE = 8
FINGERPRINT_BITS = REDUCED_SIZE * REDUCED_SIZE

# Default Hamming distance for near-duplicate grouping
# Lower = stricter matching (0-64 range)
DEFAULT_THRESHOLD = 5

# Default number of parallel workers for image analysis
DEFAULT_WORKERS = 4

# LSH (Locality-Sensitive Hashing) configuration
LSH_AUTO_THRESHOLD = 5000  # Auto-enable LSH when >= this many images
LSH_DEFAULT_TABLES = 12    # Number of hash tables (more = better recall)
LSH_DEFAULT_BITS = 10      # Bits per table (fewer = more candidates)

# Decompression bomb limit handed to Pillow
MAX_IMAGE_PIXELS = 500_000_000

# User configuration directory
CONFIG_DIR = os.path.join(os.path.expanduser('~'), '.succotash')
