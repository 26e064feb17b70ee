"""
Report formatting and display for the CLI interface.

Prints one line per analyzed image (identifier, fingerprint, hue) and,
optionally, the near-duplicate groups.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..features import bucket_by_popcount
from ..models import ImageRecord, SimilarGroup
from ..utils.formatters import format_number, format_record


def _print_section_header(title: str) -> None:
    """Print a section header with divider lines."""
    print("\n" + "-" * 70)
    print(title)
    print("-" * 70)


def print_features(records: list[ImageRecord], sort: bool = False) -> None:
    """
    Print the features of every analyzed image.

    Args:
        records: Analyzed images (failed ones included, printed last)
        sort: Print in feature order, one block per popcount bucket
    """
    width = max((len(r.path) for r in records), default=0)
    analyzed = [r for r in records if r.ok]
    failed = [r for r in records if not r.ok]

    if sort:
        buckets = bucket_by_popcount(analyzed, key=lambda r: r.features)
        for popcount, bucket in buckets.items():
            print(f"\n# popcount {popcount} ({len(bucket)} images)")
            for record in bucket:
                print(format_record(record, width))
    else:
        for record in analyzed:
            print(format_record(record, width))

    if failed:
        print()
        for record in failed:
            print(format_record(record, width))


def print_group_report(
    groups: list[SimilarGroup],
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Print near-duplicate groups with a summary.

    Args:
        groups: Groups to print
        logger: Optional logger for the summary line
    """
    if not groups:
        print("\nNo near-duplicate images found.")
        return

    _print_section_header("NEAR-DUPLICATE GROUPS")
    for group in groups:
        print(f"\nGroup {group.id} ({group.image_count} files, {group.match_type}, "
              f"max distance {group.max_distance}):")
        for img in group.ordered_images:
            print(f"  {img.path}")
            print(f"      {img.features.fingerprint} | hue {img.features.hue} | "
                  f"{img.resolution} | {img.file_size_formatted}")

    total_images = sum(g.image_count for g in groups)
    summary = (f"{format_number(len(groups))} groups, "
               f"{format_number(total_images)} images in groups")
    if logger:
        logger.info(summary)
    else:
        print(f"\n{summary}")


__all__ = ['print_features', 'print_group_report']
