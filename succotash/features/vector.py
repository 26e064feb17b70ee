"""
Features of an image and their comparison.

A FeatureVector is the (fingerprint, hue) pair of one image. Comparison is
lexicographic, fingerprint first, but the fingerprint only has a partial
order: if two fingerprints are incomparable the vectors are incomparable
too, and the hue is never used to break that tie. Hue only decides between
vectors whose fingerprints are bit-exact equal.

Because of that, a plain sorted() over FeatureVectors is meaningless. Use
order_features(), which sorts in two phases: bucket by fingerprint popcount,
then sort each bucket by hue. Neighbors in the result are good candidates
for near-duplicate checks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, TypeVar

from .fingerprint import Fingerprint, fingerprint
from .hue import Hue, hue
from .ordering import Ordering
from .raster import RasterImage, as_raster

T = TypeVar('T')


@dataclass(frozen=True)
class FeatureVector:
    """
    Fingerprint and hue of one image.

    Attributes:
        fingerprint: Structural fingerprint (compared first)
        hue: Mean-color hue (tiebreaker for equal fingerprints only)
    """
    fingerprint: Fingerprint
    hue: Hue

    def partial_cmp(self, other: 'FeatureVector') -> Ordering:
        return compare(self, other)

    def __lt__(self, other):
        if not isinstance(other, FeatureVector):
            return NotImplemented
        return compare(self, other) is Ordering.LESS

    def __gt__(self, other):
        if not isinstance(other, FeatureVector):
            return NotImplemented
        return compare(self, other) is Ordering.GREATER

    def __le__(self, other):
        if not isinstance(other, FeatureVector):
            return NotImplemented
        return compare(self, other) in (Ordering.LESS, Ordering.EQUAL)

    def __ge__(self, other):
        if not isinstance(other, FeatureVector):
            return NotImplemented
        return compare(self, other) in (Ordering.GREATER, Ordering.EQUAL)

    def __str__(self) -> str:
        return f"{self.fingerprint} {self.hue}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'fingerprint': str(self.fingerprint),
            'popcount': self.fingerprint.popcount,
            'hue': self.hue.degrees,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'FeatureVector':
        """Create FeatureVector from dictionary."""
        return cls(
            fingerprint=Fingerprint.from_hex(data['fingerprint']),
            hue=Hue(data['hue']),
        )


def features(raster: RasterImage) -> FeatureVector:
    """
    Find the features of a raster.

    Raises:
        InvalidInputError: If the raster has no pixels
    """
    raster = as_raster(raster)
    return FeatureVector(fingerprint=fingerprint(raster), hue=hue(raster))


def compare(a: FeatureVector, b: FeatureVector) -> Ordering:
    """
    Compare two feature vectors.

    Returns:
        LESS or GREATER when the fingerprints' popcounts differ,
        INCOMPARABLE when the fingerprints differ with equal popcount,
        otherwise the hue ordering (EQUAL only if the hues are equal too)
    """
    ordering = a.fingerprint.partial_cmp(b.fingerprint)
    if ordering is not Ordering.EQUAL:
        return ordering
    return Ordering.from_values(a.hue.degrees, b.hue.degrees)


def bucket_by_popcount(
    items: Iterable[T],
    key: Optional[Callable[[T], FeatureVector]] = None,
) -> dict[int, list[T]]:
    """
    Group items by fingerprint popcount, then sort each group by hue.

    Args:
        items: FeatureVectors, or objects that key() maps to one
        key: Optional accessor returning the FeatureVector of an item

    Returns:
        Dict of popcount -> items, in ascending popcount order. Items with
        the same hue keep their input order.
    """
    get = key or _identity
    buckets: dict[int, list[T]] = {}
    for item in items:
        buckets.setdefault(get(item).fingerprint.popcount, []).append(item)

    ordered: dict[int, list[T]] = {}
    for popcount in sorted(buckets):
        ordered[popcount] = sorted(buckets[popcount], key=lambda item: get(item).hue.degrees)
    return ordered


def order_features(
    items: Iterable[T],
    key: Optional[Callable[[T], FeatureVector]] = None,
) -> list[T]:
    """Flatten bucket_by_popcount() into one ordered list."""
    ordered: list[T] = []
    for bucket in bucket_by_popcount(items, key).values():
        ordered.extend(bucket)
    return ordered


def _identity(item: Any) -> FeatureVector:
    return item


__all__ = [
    'FeatureVector',
    'features',
    'compare',
    'bucket_by_popcount',
    'order_features',
]
