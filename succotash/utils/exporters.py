"""
Export functionality for succotash.

Exports analysis results (per-image features and near-duplicate groups) to
TXT, CSV or JSON files.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import TextIO

from ..models import ImageRecord, SimilarGroup
from .formatters import format_record

EXPORT_FORMATS = ('txt', 'csv', 'json')

CSV_FIELDS = [
    'path', 'width', 'height', 'file_size', 'format',
    'fingerprint', 'popcount', 'hue', 'group_id', 'match_type', 'error',
]


def _export_txt(
    records: list[ImageRecord],
    groups: list[SimilarGroup],
    file_handle: TextIO
) -> None:
    """Export results to TXT format."""
    file_handle.write("IMAGE FEATURES\n")
    file_handle.write("=" * 70 + "\n\n")

    width = max((len(r.path) for r in records), default=0)
    for record in records:
        file_handle.write(format_record(record, width) + "\n")

    if groups:
        file_handle.write("\n\nNEAR-DUPLICATE GROUPS\n")
        file_handle.write("-" * 70 + "\n")
        for group in groups:
            file_handle.write(
                f"\nGroup {group.id} ({group.match_type}, "
                f"max distance {group.max_distance}):\n"
            )
            for img in group.ordered_images:
                file_handle.write(f"  {img.path}\n")


def _export_csv(
    records: list[ImageRecord],
    groups: list[SimilarGroup],
    file_handle: TextIO
) -> None:
    """
    Export results to CSV format, one row per image.

    Images outside any group have empty group_id and match_type.
    """
    membership = {}
    for group in groups:
        for img in group.images:
            membership[img.path] = group

    writer = csv.DictWriter(file_handle, fieldnames=CSV_FIELDS, extrasaction='ignore')
    writer.writeheader()
    for record in records:
        row = record.to_dict()
        group = membership.get(record.path)
        row['group_id'] = group.id if group else ''
        row['match_type'] = group.match_type if group else ''
        writer.writerow({k: ('' if row.get(k) is None else row.get(k)) for k in CSV_FIELDS})


def _export_json(
    records: list[ImageRecord],
    groups: list[SimilarGroup],
    file_handle: TextIO
) -> None:
    """Export results to JSON format."""
    json.dump(
        {
            'images': [r.to_dict() for r in records],
            'groups': [g.to_dict() for g in groups],
        },
        file_handle,
        indent=2,
    )
    file_handle.write("\n")


def export_results(
    records: list[ImageRecord],
    groups: list[SimilarGroup],
    output_path: Path,
    export_format: str = 'txt'
) -> None:
    """
    Export analysis results to a file.

    Args:
        records: Analyzed images, in the order to write them
        groups: Near-duplicate groups (may be empty)
        output_path: Path to output file
        export_format: 'txt', 'csv' or 'json'. Default: 'txt'

    Raises:
        ValueError: If export_format is not supported
        OSError: If file cannot be written
    """
    if export_format not in EXPORT_FORMATS:
        raise ValueError(
            f"Unsupported export format: {export_format}. Use one of {', '.join(EXPORT_FORMATS)}."
        )

    with open(output_path, 'w', encoding='utf-8', newline='') as f:
        if export_format == 'txt':
            _export_txt(records, groups, f)
        elif export_format == 'csv':
            _export_csv(records, groups, f)
        else:
            _export_json(records, groups, f)


__all__ = ['EXPORT_FORMATS', 'export_results']
