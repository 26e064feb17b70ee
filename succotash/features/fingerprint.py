"""
Structural fingerprint of an image.

A fingerprint is a 64-bit locality-sensitive hash of the image's 8x8 luma
reduction (see reducer.py):

1) mean = sum(samples) // 64
2) bit i = 1 if samples[i] >= mean else 0, i = 0..63 in row-major order
3) bit i is stored at position i (bit 0 is the least significant)

A fully uniform image therefore has every bit set.

Fingerprints can not be sorted in a regular way: every bit has the same
weight, so 0b01001111 vs 0b00001111 is as different as 0b10000001 vs
0b10000000. They are ordered only by popcount, which forms "buckets" of
fingerprints with the same number of set bits. Two different fingerprints
in the same bucket are incomparable. Similarity is measured separately
with the Hamming distance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import imagehash
import numpy as np

from ..config import FINGERPRINT_BITS, REDUCED_SIZE
from .ordering import Ordering
from .raster import InvalidInputError, RasterImage, as_raster
from .reducer import reduce

_MAX_VALUE = (1 << FINGERPRINT_BITS) - 1


@dataclass(frozen=True)
class Fingerprint:
    """
    64-bit structural fingerprint.

    Equality is bit-exact. <, >, <= and >= compare popcounts and are all
    False for different fingerprints with the same popcount.

    Examples:
        >>> Fingerprint(0b00100000) < Fingerprint(0b00000011)
        True
        >>> a, b = Fingerprint(0b00100000), Fingerprint(0b00000001)
        >>> a < b, a > b, a == b
        (False, False, False)
    """
    value: int

    def __post_init__(self):
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise InvalidInputError(f"Fingerprint value must be an int, got {type(self.value).__name__}")
        if not 0 <= self.value <= _MAX_VALUE:
            raise InvalidInputError(f"Fingerprint value out of 64-bit range: {self.value}")

    @property
    def popcount(self) -> int:
        """Number of set bits."""
        return self.value.bit_count()

    @property
    def bits(self) -> np.ndarray:
        """Bits as an 8x8 bool matrix in sample order."""
        flat = [(self.value >> i) & 1 for i in range(FINGERPRINT_BITS)]
        return np.array(flat, dtype=bool).reshape(REDUCED_SIZE, REDUCED_SIZE)

    def partial_cmp(self, other: 'Fingerprint') -> Ordering:
        """Compare popcounts; equal popcount with different bits is INCOMPARABLE."""
        if self.value == other.value:
            return Ordering.EQUAL
        ordering = Ordering.from_values(self.popcount, other.popcount)
        if ordering is Ordering.EQUAL:
            return Ordering.INCOMPARABLE
        return ordering

    def __lt__(self, other):
        if not isinstance(other, Fingerprint):
            return NotImplemented
        return self.partial_cmp(other) is Ordering.LESS

    def __gt__(self, other):
        if not isinstance(other, Fingerprint):
            return NotImplemented
        return self.partial_cmp(other) is Ordering.GREATER

    def __le__(self, other):
        if not isinstance(other, Fingerprint):
            return NotImplemented
        return self.partial_cmp(other) in (Ordering.LESS, Ordering.EQUAL)

    def __ge__(self, other):
        if not isinstance(other, Fingerprint):
            return NotImplemented
        return self.partial_cmp(other) in (Ordering.GREATER, Ordering.EQUAL)

    def __str__(self) -> str:
        return f"{self.value:016x}"

    def __int__(self) -> int:
        return self.value

    @classmethod
    def from_hex(cls, text: str) -> 'Fingerprint':
        """Parse the 16 hex digit form produced by str()."""
        try:
            return cls(int(text.strip().lower().removeprefix('0x'), 16))
        except ValueError as e:
            raise InvalidInputError(f"Not a hex fingerprint: {text!r}") from e

    def to_imagehash(self) -> imagehash.ImageHash:
        """Wrap the bit matrix in an imagehash.ImageHash (same sample order)."""
        return imagehash.ImageHash(self.bits)

    @classmethod
    def from_imagehash(cls, image_hash: imagehash.ImageHash) -> 'Fingerprint':
        """Build a fingerprint from a 64-bit imagehash.ImageHash."""
        flat = np.asarray(image_hash.hash, dtype=bool).flatten()
        if flat.size != FINGERPRINT_BITS:
            raise InvalidInputError(f"Expected a {FINGERPRINT_BITS}-bit hash, got {flat.size} bits")
        value = 0
        for i, bit in enumerate(flat.tolist()):
            if bit:
                value |= 1 << i
        return cls(value)


def fingerprint_from_samples(samples: Sequence[int]) -> Fingerprint:
    """
    Build a fingerprint from 64 reduced grayscale samples.

    Args:
        samples: 64 ints in row-major order

    Raises:
        InvalidInputError: If there are not exactly 64 samples
    """
    if len(samples) != FINGERPRINT_BITS:
        raise InvalidInputError(f"Expected {FINGERPRINT_BITS} samples, got {len(samples)}")

    # Python ints do not overflow, 64 * 255 fits anyway
    mean = sum(int(s) for s in samples) // FINGERPRINT_BITS

    value = 0
    for i, sample in enumerate(samples):
        if sample >= mean:
            value |= 1 << i
    return Fingerprint(value)


def fingerprint(raster: RasterImage) -> Fingerprint:
    """
    Find the fingerprint of a raster.

    Raises:
        InvalidInputError: If the raster has no pixels
    """
    return fingerprint_from_samples(reduce(as_raster(raster)))


def hamming_distance(a: Fingerprint, b: Fingerprint) -> int:
    """
    Number of differing bits between two fingerprints.

    This is a similarity metric, not an ordering.
    """
    return (int(a) ^ int(b)).bit_count()


def compare_fingerprints(a: Fingerprint, b: Fingerprint) -> Ordering:
    """Partial-order comparison of two fingerprints."""
    return a.partial_cmp(b)


__all__ = [
    'Fingerprint',
    'fingerprint_from_samples',
    'fingerprint',
    'hamming_distance',
    'compare_fingerprints',
]
