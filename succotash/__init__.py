"""
succotash
=========
Find similar images in a directory by cheap, comparable image features.

Every image gets a FeatureVector:
- a 64-bit structural fingerprint of its 8x8 luma reduction
- the hue of its mean color, in degrees

Fingerprints are compared for equality or by Hamming distance; they are only
partially ordered (by popcount). Sorting a collection by popcount bucket and
then by hue puts likely near-duplicates next to each other.
"""

__version__ = "0.2.0"

from .features import (
    RasterImage,
    InvalidInputError,
    Fingerprint,
    Hue,
    FeatureVector,
    Ordering,
    fingerprint,
    hue,
    features,
    hamming_distance,
    compare,
    order_features,
)
from .models import ImageRecord, SimilarGroup
from .config import IMAGE_EXTENSIONS, LSH_AUTO_THRESHOLD
from .scanner import (
    DecodeError,
    load_raster,
    analyze_image,
    analyze_images_parallel,
    find_image_files,
    find_identical_groups,
    find_similar_groups,
)
from .lsh import HammingLSH, calculate_optimal_params, estimate_comparison_reduction

__all__ = [
    "RasterImage",
    "InvalidInputError",
    "Fingerprint",
    "Hue",
    "FeatureVector",
    "Ordering",
    "fingerprint",
    "hue",
    "features",
    "hamming_distance",
    "compare",
    "order_features",
    "ImageRecord",
    "SimilarGroup",
    "IMAGE_EXTENSIONS",
    "LSH_AUTO_THRESHOLD",
    "DecodeError",
    "load_raster",
    "analyze_image",
    "analyze_images_parallel",
    "find_image_files",
    "find_identical_groups",
    "find_similar_groups",
    "HammingLSH",
    "calculate_optimal_params",
    "estimate_comparison_reduction",
]
