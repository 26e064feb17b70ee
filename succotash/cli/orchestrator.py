"""
CLI workflow orchestration for succotash.

Provides the CLIOrchestrator class that coordinates the `analyze` workflow
from argument parsing through final reporting, and the `config` command.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..features import order_features
from ..scanner import (
    find_image_files,
    has_heif_support,
    analyze_images_parallel,
    find_identical_groups,
    find_similar_groups,
)
from ..user_config import get_user_config
from ..utils.exporters import export_results
from ..utils.validators import validate_scan_params
from .arg_parser import create_parser
from .reporting import print_features, print_group_report

SHORT_FORMAT = '[%(levelname)s] %(message)s'
LONG_FORMAT = '%(asctime)s %(name)s [%(levelname)s] %(message)s'


def setup_logging(verbosity: int = 0) -> logging.Logger:
    """
    Configure logging for the CLI.

    Args:
        verbosity: 0 = INFO, 1 = DEBUG, 2+ = DEBUG with timestamps and logger names

    Returns:
        Configured logger instance
    """
    logging.basicConfig(
        level=logging.INFO,
        format=SHORT_FORMAT if verbosity < 2 else LONG_FORMAT,
        force=True,
    )
    # Only our own loggers get more verbose
    logging.getLogger('succotash').setLevel(logging.DEBUG if verbosity > 0 else logging.INFO)
    return logging.getLogger(__name__)


class CLIOrchestrator:
    """
    Orchestrates the CLI workflow.

    Manages the lifecycle from argument parsing through image analysis,
    optional near-duplicate grouping, reporting and export.
    """

    def __init__(self, argv: Optional[Sequence[str]] = None):
        """
        Initialize the orchestrator.

        Args:
            argv: Argument list (default: sys.argv)
        """
        self.argv = argv
        self.logger = None
        self.args = None
        self.image_files = []
        self.records = []
        self.groups = []

    def run(self) -> int:
        """
        Execute the CLI workflow.

        Returns:
            Exit code (0 for success, 1 for error)
        """
        parser = create_parser()
        self.args = parser.parse_args(self.argv)
        self.logger = setup_logging(self.args.verbose)
        self.logger.debug(f"Log level DEBUG (verbosity {self.args.verbose})")

        if self.args.command == 'config':
            return self._config_command()
        if self.args.command != 'analyze':
            parser.print_help()
            self.logger.error("You haven't specified a command")
            return 1

        for phase in (self._validate_phase, self._scan_phase, self._analyze_phase):
            exit_code = phase()
            if exit_code != 0:
                return exit_code

        if self.args.group:
            self._group_phase()
        self._report_phase()
        return self._export_phase()

    def _config_command(self) -> int:
        """Show the effective configuration, or create an example file with --init."""
        config = get_user_config()

        if self.args.init:
            if not config.create_example_config():
                return 1
            print(f"Created example configuration file at:\n  {config.config_file_path}")
            return 0

        print(f"Configuration file: {config.config_file_path}")
        if config.config_file_path.exists():
            print("Status: found")
        else:
            print("Status: not found (using defaults)")
            print("\nRun 'succotash config --init' to create one.")

        print("\nCurrent settings:")
        for key, value in config.as_dict().items():
            print(f"  {key}: {value:,}")
        return 0

    def _validate_phase(self) -> int:
        """
        Validate arguments.

        Returns:
            0 for success, 1 for validation error
        """
        is_valid, error = validate_scan_params(
            str(self.args.directory),
            threshold=self.args.threshold,
            workers=self.args.workers,
        )
        if not is_valid:
            self.logger.error(error)
            return 1
        return 0

    def _scan_phase(self) -> int:
        """
        Scan for image files.

        Returns:
            0 for success, 1 if no images found
        """
        recursive = not self.args.no_recursive
        self.logger.debug(f"Loading '{self.args.directory}' entries (recursive={recursive})")
        self.logger.debug(f"HEIC/HEIF support: {'enabled' if has_heif_support() else 'disabled'}")
        self.image_files = find_image_files(self.args.directory, recursive=recursive)
        self.logger.info(f"Found {len(self.image_files):,} image files in {self.args.directory}")

        if not self.image_files:
            self.logger.error("No images found")
            return 1
        return 0

    def _analyze_phase(self) -> int:
        """Analyze images in parallel."""
        self.records = analyze_images_parallel(
            self.image_files,
            max_workers=self.args.workers,
            show_progress=not self.args.no_progress,
            logger=self.logger,
        )

        failed = [r for r in self.records if not r.ok]
        for record in failed:
            self.logger.warning(f"Could not analyze {record.path}: {record.error}")
        if failed:
            self.logger.warning(f"Could not analyze {len(failed):,} of {len(self.records):,} files")

        if self.args.sort:
            analyzed = [r for r in self.records if r.ok]
            self.records = order_features(analyzed, key=lambda r: r.features) + failed
        return 0

    def _group_phase(self) -> None:
        """Group identical and similar images."""
        use_lsh = None
        if self.args.force_lsh:
            use_lsh = True
        elif self.args.no_lsh:
            use_lsh = False

        identical = find_identical_groups(self.records)
        grouped = {img.path for g in identical for img in g.images}
        similar = find_similar_groups(
            self.records,
            threshold=self.args.threshold,
            exclude_paths=grouped,
            start_id=len(identical) + 1,
            show_progress=not self.args.no_progress,
            use_lsh=use_lsh,
            logger=self.logger,
        )
        self.groups = identical + similar
        self.logger.debug(f"{len(identical):,} identical and {len(similar):,} similar groups")

    def _report_phase(self) -> None:
        """Print features and groups."""
        print_features(self.records, sort=self.args.sort)
        if self.args.group:
            print_group_report(self.groups, self.logger)

    def _export_phase(self) -> int:
        """Write the export file if requested."""
        if not self.args.export:
            return 0
        try:
            export_results(self.records, self.groups, self.args.export, self.args.export_format)
        except OSError as e:
            self.logger.error(f"Cannot write export file {self.args.export}: {e}")
            return 1
        self.logger.info(f"Results exported to: {self.args.export}")
        return 0


__all__ = ['CLIOrchestrator', 'setup_logging']
