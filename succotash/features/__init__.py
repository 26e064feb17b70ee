"""
Feature extraction for succotash.

Turns a decoded RGB raster into a FeatureVector (fingerprint + hue) and
defines how features compare. Everything here is pure: no I/O, no logging,
no configuration lookups.

Public API:
- RasterImage: decoded RGB pixel grid (input)
- fingerprint: 64-bit structural fingerprint of a raster
- hue: mean-color hue of a raster, in degrees
- features: both of the above as a FeatureVector
- hamming_distance: bit difference between two fingerprints
- compare: four-state partial-order comparison of FeatureVectors
- order_features: two-phase (popcount bucket, then hue) ordering
"""

from __future__ import annotations

from .raster import InvalidInputError, RasterImage, as_raster
from .ordering import Ordering
from .reducer import reduce, to_grayscale
from .fingerprint import (
    Fingerprint,
    fingerprint,
    fingerprint_from_samples,
    hamming_distance,
    compare_fingerprints,
)
from .hue import Hue, hue, hue_of_color, mean_color, normalize_degrees
from .vector import (
    FeatureVector,
    features,
    compare,
    bucket_by_popcount,
    order_features,
)

__all__ = [
    # Input
    'InvalidInputError',
    'RasterImage',
    'as_raster',
    # Reduction
    'reduce',
    'to_grayscale',
    # Fingerprint
    'Fingerprint',
    'fingerprint',
    'fingerprint_from_samples',
    'hamming_distance',
    'compare_fingerprints',
    # Hue
    'Hue',
    'hue',
    'hue_of_color',
    'mean_color',
    'normalize_degrees',
    # Aggregate
    'Ordering',
    'FeatureVector',
    'features',
    'compare',
    'bucket_by_popcount',
    'order_features',
]
