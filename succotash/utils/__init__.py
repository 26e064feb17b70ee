"""
Utilities package for succotash.

Provides:
- formatters: Human-readable formatting for numbers, sizes and features
- validators: Input validation for scan parameters
- exporters: Export analysis results to files
"""

from __future__ import annotations

from . import formatters
from . import validators
from . import exporters

from .formatters import format_number, format_size, format_record
from .validators import (
    validate_directory,
    validate_threshold,
    validate_workers,
    validate_scan_params,
)
from .exporters import EXPORT_FORMATS, export_results

__all__ = [
    # Submodules
    'formatters',
    'validators',
    'exporters',
    # Formatters
    'format_number',
    'format_size',
    'format_record',
    # Validators
    'validate_directory',
    'validate_threshold',
    'validate_workers',
    'validate_scan_params',
    # Exporters
    'EXPORT_FORMATS',
    'export_results',
]
