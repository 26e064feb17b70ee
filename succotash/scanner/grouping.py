"""
Near-duplicate grouping for the scanner package.

Groups analyzed images whose fingerprints are equal or within a Hamming
distance, using Union-Find and optional LSH acceleration.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Optional, Callable, Any

from ..features import hamming_distance, order_features
from ..lsh import HammingLSH, calculate_optimal_params, estimate_comparison_reduction
from ..models import ImageRecord, SimilarGroup
from ..user_config import get_user_config
from .dependencies import HAS_TQDM, _tqdm_class


def find_identical_groups(
    images: list[ImageRecord],
    start_id: int = 1,
) -> list[SimilarGroup]:
    """
    Find images whose fingerprints are bit-exact equal.

    Args:
        images: Analyzed images (records without features are skipped)
        start_id: Starting ID for groups

    Returns:
        List of SimilarGroup objects with match_type 'identical'
    """
    by_value: dict[int, list[ImageRecord]] = defaultdict(list)
    for img in images:
        if img.ok:
            by_value[int(img.features.fingerprint)].append(img)

    groups = []
    group_id = start_id
    for members in by_value.values():
        if len(members) > 1:
            groups.append(SimilarGroup(
                id=group_id,
                images=order_features(members, key=lambda r: r.features),
                match_type="identical",
            ))
            group_id += 1

    return groups


def find_similar_groups(
    images: list[ImageRecord],
    threshold: int = 5,
    exclude_paths: Optional[set[str]] = None,
    start_id: int = 1,
    progress_callback: Optional[Callable[[int, int], None]] = None,
    show_progress: bool = True,
    use_lsh: Optional[bool] = None,
    logger: Optional[logging.Logger] = None,
) -> list[SimilarGroup]:
    """
    Find images whose fingerprints are within `threshold` bits of each other.

    Grouping is transitive: A~B and B~C put A, B and C in one group.

    Args:
        images: Analyzed images (records without features are skipped)
        threshold: Maximum Hamming distance for similarity (0-64)
        exclude_paths: Paths to leave out (e.g., already grouped as identical)
        start_id: Starting ID for groups
        progress_callback: Optional callback(current, total) for progress
        show_progress: Whether to show tqdm progress bar
        use_lsh: Force LSH on/off, or None for auto-select based on collection size
        logger: Optional logger for status messages

    Returns:
        List of SimilarGroup objects with match_type 'similar'
    """
    if not 0 <= threshold <= 64:
        raise ValueError(f"threshold must be in 0..64, got {threshold}")

    exclude_paths = exclude_paths or set()
    candidates = [
        img for img in images
        if img.ok and img.path not in exclude_paths
    ]

    if len(candidates) < 2:
        return []

    if use_lsh is None:
        use_lsh = len(candidates) >= get_user_config().lsh_auto_threshold
        if use_lsh and logger:
            logger.info(f"Using LSH optimization for {len(candidates):,} images")

    if use_lsh:
        parent = _union_lsh(candidates, threshold, progress_callback, show_progress, logger)
    else:
        parent = _union_bruteforce(candidates, threshold, progress_callback, show_progress)

    return _collect_groups(candidates, parent, start_id)


def _union_bruteforce(
    candidates: list[ImageRecord],
    threshold: int,
    progress_callback: Optional[Callable[[int, int], None]],
    show_progress: bool,
) -> list[int]:
    """
    Brute-force O(n^2) pairing. Best for small collections.

    Returns:
        Union-Find parent array
    """
    prints = [img.features.fingerprint for img in candidates]
    parent = list(range(len(candidates)))

    def find(x: int) -> int:
        while parent[x] != x:
            parent[x] = parent[parent[x]]
            x = parent[x]
        return x

    total_comparisons = (len(candidates) * (len(candidates) - 1)) // 2

    pbar: Optional[Any] = None
    if HAS_TQDM and show_progress and total_comparisons > 1000 and _tqdm_class is not None:
        pbar = _tqdm_class(total=total_comparisons, desc="Comparing images", unit="cmp", ncols=80)

    comparison_count = 0
    for i in range(len(prints)):
        for j in range(i + 1, len(prints)):
            if hamming_distance(prints[i], prints[j]) <= threshold:
                pi, pj = find(i), find(j)
                if pi != pj:
                    parent[pi] = pj

            comparison_count += 1
            if pbar is not None and comparison_count % 1000 == 0:
                pbar.update(1000)
            if progress_callback and comparison_count % 10000 == 0:
                progress_callback(comparison_count, total_comparisons)

    if pbar is not None:
        pbar.update(comparison_count % 1000)
        pbar.close()

    return parent


def _union_lsh(
    candidates: list[ImageRecord],
    threshold: int,
    progress_callback: Optional[Callable[[int, int], None]],
    show_progress: bool,
    logger: Optional[logging.Logger],
) -> list[int]:
    """
    LSH-accelerated pairing. Best for large collections.

    Returns:
        Union-Find parent array
    """
    n = len(candidates)
    prints = [img.features.fingerprint for img in candidates]

    num_tables, bits_per_table = calculate_optimal_params(n, threshold)
    if logger:
        estimate = estimate_comparison_reduction(n, num_tables, bits_per_table)
        logger.info(
            f"LSH params: {num_tables} tables, {bits_per_table} bits/table "
            f"(~{estimate['speedup_factor']:.0f}x speedup expected)"
        )

    lsh = HammingLSH(num_tables=num_tables, bits_per_table=bits_per_table)
    for idx, fp in enumerate(prints):
        lsh.add(idx, fp)

    parent = list(range(n))
    rank = [0] * n

    def find(x: int) -> int:
        while parent[x] != x:
            parent[x] = parent[parent[x]]
            x = parent[x]
        return x

    def union(x: int, y: int) -> None:
        px, py = find(x), find(y)
        if px == py:
            return
        if rank[px] < rank[py]:
            parent[px] = py
        elif rank[px] > rank[py]:
            parent[py] = px
        else:
            parent[py] = px
            rank[px] += 1

    estimated_candidates = lsh.estimate_candidate_pairs()

    pbar: Optional[Any] = None
    if HAS_TQDM and show_progress and estimated_candidates > 1000 and _tqdm_class is not None:
        pbar = _tqdm_class(total=estimated_candidates, desc="Comparing candidates", unit="cmp", ncols=80)

    comparison_count = 0
    actual_comparisons = 0
    matches_found = 0

    # Pairs repeat across tables; skip those already joined
    for i, j in lsh.iter_candidate_pairs():
        comparison_count += 1

        if find(i) != find(j):
            actual_comparisons += 1
            if hamming_distance(prints[i], prints[j]) <= threshold:
                union(i, j)
                matches_found += 1

        if pbar is not None and comparison_count % 1000 == 0:
            pbar.update(1000)
        if progress_callback and comparison_count % 10000 == 0:
            progress_callback(comparison_count, estimated_candidates)

    if pbar is not None:
        pbar.update(comparison_count % 1000)
        pbar.close()

    if logger:
        logger.info(
            f"Found {matches_found:,} matching pairs "
            f"({actual_comparisons:,} comparisons, "
            f"{comparison_count - actual_comparisons:,} skipped as already grouped)"
        )

    return parent


def _collect_groups(
    candidates: list[ImageRecord],
    parent: list[int],
    start_id: int,
) -> list[SimilarGroup]:
    """Turn a Union-Find parent array into SimilarGroups of two or more images."""
    def find(x: int) -> int:
        while parent[x] != x:
            x = parent[x]
        return x

    members: dict[int, list[ImageRecord]] = defaultdict(list)
    for i, img in enumerate(candidates):
        members[find(i)].append(img)

    groups: list[SimilarGroup] = []
    group_id = start_id
    for group_images in members.values():
        if len(group_images) > 1:
            groups.append(SimilarGroup(
                id=group_id,
                images=order_features(group_images, key=lambda r: r.features),
                match_type="similar",
            ))
            group_id += 1

    return groups


__all__ = [
    'find_identical_groups',
    'find_similar_groups',
]
