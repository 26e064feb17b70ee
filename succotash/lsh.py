"""
Locality-Sensitive Hashing (LSH) for fast fingerprint matching.

This module implements LSH using bit sampling, which is optimal for the
Hamming distance used to compare fingerprints.

The key insight: if two fingerprints are similar (low Hamming distance),
they share most of their bits. By sampling random subsets of bits and using
them as bucket keys, similar fingerprints will collide in at least one
bucket with high probability.

Performance:
- Brute force: O(n²) comparisons
- LSH: O(n * k) where k is average candidates per image (typically small)
"""

from __future__ import annotations

import math
import random
from collections import defaultdict
from typing import Iterator, Optional

from .config import FINGERPRINT_BITS, LSH_DEFAULT_BITS, LSH_DEFAULT_TABLES
from .features import Fingerprint


class HammingLSH:
    """
    Locality-Sensitive Hashing index over 64-bit fingerprints.

    Each table samples a random subset of bit positions; the sampled bits,
    masked out of the fingerprint, are the bucket key. Fingerprints within a
    small Hamming distance match on at least one table with high probability.

    Usage:
        lsh = HammingLSH(num_tables=12, bits_per_table=10)

        for idx, fp in enumerate(fingerprints):
            lsh.add(idx, fp)

        for i, j in lsh.iter_candidate_pairs():
            if hamming_distance(fingerprints[i], fingerprints[j]) <= threshold:
                ...
    """

    def __init__(
        self,
        num_tables: int = LSH_DEFAULT_TABLES,
        bits_per_table: int = LSH_DEFAULT_BITS,
        hash_bits: int = FINGERPRINT_BITS,
        seed: int = 42,
    ):
        """
        Initialize LSH index.

        Args:
            num_tables: Number of hash tables. More tables = better recall
                        but more memory.
            bits_per_table: Bits sampled per table. Fewer bits = more
                            candidates (better recall, more comparisons).
            hash_bits: Total bits in a fingerprint.
            seed: Random seed for reproducibility.
        """
        if not 0 < bits_per_table <= hash_bits:
            raise ValueError(f"bits_per_table must be in 1..{hash_bits}, got {bits_per_table}")
        if num_tables < 1:
            raise ValueError(f"num_tables must be positive, got {num_tables}")

        self.num_tables = num_tables
        self.bits_per_table = bits_per_table
        self.hash_bits = hash_bits
        self.seed = seed

        rng = random.Random(seed)
        self.bit_positions: list[list[int]] = [
            sorted(rng.sample(range(hash_bits), bits_per_table))
            for _ in range(num_tables)
        ]
        self._masks: list[int] = [
            sum(1 << p for p in positions) for positions in self.bit_positions
        ]

        # Hash tables: table_idx -> bucket_key -> list of indices
        self.tables: list[dict[int, list[int]]] = [
            defaultdict(list) for _ in range(num_tables)
        ]

        self._count = 0

    def _get_bucket_key(self, value: int, table_idx: int) -> int:
        """Sampled bits of a fingerprint for one table."""
        return value & self._masks[table_idx]

    def add(self, idx: int, fp: Optional[Fingerprint]) -> None:
        """
        Add a fingerprint to the index.

        Args:
            idx: Unique identifier for this fingerprint (typically array index)
            fp: Fingerprint, or None to skip
        """
        if fp is None:
            return

        value = int(fp)
        for table_idx, table in enumerate(self.tables):
            table[self._get_bucket_key(value, table_idx)].append(idx)

        self._count += 1

    def get_candidates(self, idx: int, fp: Optional[Fingerprint]) -> set[int]:
        """
        Get candidate indices that might be similar to the given fingerprint.

        Args:
            idx: Index of the query fingerprint (excluded from results)
            fp: Fingerprint to query

        Returns:
            Set of candidate indices that collided in at least one table
        """
        if fp is None:
            return set()

        value = int(fp)
        candidates = set()
        for table_idx, table in enumerate(self.tables):
            for candidate_idx in table.get(self._get_bucket_key(value, table_idx), ()):
                if candidate_idx != idx:
                    candidates.add(candidate_idx)
        return candidates

    def iter_candidate_pairs(self) -> Iterator[tuple[int, int]]:
        """
        Yield (i, j) pairs, i < j, that share a bucket in some table.

        Pairs colliding in several tables are yielded once per table.
        """
        for table in self.tables:
            for bucket in table.values():
                if len(bucket) < 2:
                    continue
                for a in range(len(bucket)):
                    for b in range(a + 1, len(bucket)):
                        i, j = bucket[a], bucket[b]
                        yield (i, j) if i < j else (j, i)

    def get_all_candidate_pairs(self) -> set[tuple[int, int]]:
        """Unique pairs from iter_candidate_pairs()."""
        return set(self.iter_candidate_pairs())

    def estimate_candidate_pairs(self) -> int:
        """Count of pairs iter_candidate_pairs() will yield, without iterating."""
        total = 0
        for table in self.tables:
            for bucket in table.values():
                n = len(bucket)
                total += n * (n - 1) // 2
        return total

    def clear(self) -> None:
        """Clear all data from the index."""
        for table in self.tables:
            table.clear()
        self._count = 0

    @property
    def size(self) -> int:
        """Number of fingerprints in the index."""
        return self._count

    def get_stats(self) -> dict:
        """Get statistics about the index."""
        non_empty_buckets = sum(
            1 for table in self.tables
            for bucket in table.values()
            if bucket
        )
        items_in_buckets = sum(
            len(bucket) for table in self.tables
            for bucket in table.values()
        )

        return {
            'num_tables': self.num_tables,
            'bits_per_table': self.bits_per_table,
            'total_items': self._count,
            'non_empty_buckets': non_empty_buckets,
            'avg_bucket_size': items_in_buckets / max(1, non_empty_buckets),
        }


def recall_probability(
    distance: int,
    num_tables: int,
    bits_per_table: int,
    hash_bits: int = FINGERPRINT_BITS,
) -> float:
    """
    Probability that two fingerprints at `distance` share at least one bucket.

    A table matches when none of its sampled positions is among the
    differing bits: C(hash_bits - d, k) / C(hash_bits, k).
    """
    if distance > hash_bits - bits_per_table:
        p_table = 0.0
    else:
        p_table = math.comb(hash_bits - distance, bits_per_table) / math.comb(hash_bits, bits_per_table)
    return 1.0 - (1.0 - p_table) ** num_tables


def calculate_optimal_params(
    num_images: int,
    threshold: int = 5,
    hash_bits: int = FINGERPRINT_BITS,
    target_recall: float = 0.99,
) -> tuple[int, int]:
    """
    Pick LSH parameters for a collection size and Hamming threshold.

    Larger collections get more bits per table (fewer random collisions);
    tables are then added until a pair at exactly `threshold` is found with
    `target_recall` probability.

    Returns:
        Tuple of (num_tables, bits_per_table)
    """
    if num_images < 10000:
        bits = 8
    elif num_images < 100000:
        bits = 10
    else:
        bits = 12
    bits = max(1, min(bits, hash_bits - threshold))

    tables = 1
    while tables < 64 and recall_probability(threshold, tables, bits, hash_bits) < target_recall:
        tables += 1
    return tables, bits


def estimate_comparison_reduction(
    num_images: int,
    num_tables: int = LSH_DEFAULT_TABLES,
    bits_per_table: int = LSH_DEFAULT_BITS,
) -> dict:
    """
    Estimate how much LSH will reduce comparisons on random fingerprints.

    Returns:
        Dict with comparison estimates
    """
    brute_force = (num_images * (num_images - 1)) // 2

    # Random pairs collide in one table with probability 2^-k
    p_collide = 1.0 - (1.0 - 2.0 ** -bits_per_table) ** num_tables
    expected_comparisons = int(brute_force * p_collide)

    return {
        'brute_force_comparisons': brute_force,
        'estimated_lsh_comparisons': expected_comparisons,
        'estimated_reduction': 1 - (expected_comparisons / max(1, brute_force)),
        'speedup_factor': brute_force / max(1, expected_comparisons),
    }
