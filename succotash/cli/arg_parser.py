"""
Argument parsing for the CLI interface.

Builds the `succotash` argument parser with its `analyze` and `config`
subcommands.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from .. import __version__
from ..user_config import get_user_config
from ..utils.exporters import EXPORT_FORMATS


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Defaults for threshold and workers come from the user configuration.

    Returns:
        Configured ArgumentParser instance
    """
    config = get_user_config()

    parser = argparse.ArgumentParser(
        prog='succotash',
        description='Find similar images by fingerprint and hue',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s analyze /path/to/photos
      Print fingerprint and hue of every image

  %(prog)s analyze /path/to/photos --sort --group -t 3
      Print in feature order and list near-duplicate groups

  %(prog)s -vv analyze /path/to/photos --export features.csv --export-format csv
      Debug logging, export results to CSV

  %(prog)s config --init
      Create an example configuration file
        """
    )

    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Increase verbosity (-v: debug, -vv: debug with timestamps)'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')

    analyze = subparsers.add_parser(
        'analyze',
        help='Analyze the images in a directory'
    )

    analyze.add_argument(
        'directory',
        type=Path,
        help='Directory to analyze'
    )

    analyze.add_argument(
        '-r', '--no-recursive',
        action='store_true',
        help='Do not scan subdirectories'
    )

    analyze.add_argument(
        '-w', '--workers',
        type=int,
        default=config.default_workers,
        help=f'Number of parallel workers. Default: {config.default_workers}'
    )

    analyze.add_argument(
        '-s', '--sort',
        action='store_true',
        help='Print images in feature order (popcount bucket, then hue)'
    )

    analyze.add_argument(
        '-g', '--group',
        action='store_true',
        help='Also list groups of near-duplicate images'
    )

    analyze.add_argument(
        '-t', '--threshold',
        type=int,
        default=config.default_threshold,
        help=f'Hamming distance for --group (0-64, lower=stricter). Default: {config.default_threshold}'
    )

    # LSH control (mutually exclusive)
    lsh_group = analyze.add_mutually_exclusive_group()
    lsh_group.add_argument(
        '--lsh',
        action='store_true',
        dest='force_lsh',
        help='Force LSH acceleration on for --group'
    )
    lsh_group.add_argument(
        '--no-lsh',
        action='store_true',
        dest='no_lsh',
        help='Force brute-force comparison for --group'
    )

    analyze.add_argument(
        '-e', '--export',
        type=Path,
        help='Export results to file'
    )

    analyze.add_argument(
        '--export-format',
        choices=list(EXPORT_FORMATS),
        default='txt',
        help='Export format. Default: txt'
    )

    analyze.add_argument(
        '--no-progress',
        action='store_true',
        help='Disable progress bars (useful for piping output)'
    )

    config_cmd = subparsers.add_parser(
        'config',
        help='Show or create the user configuration'
    )

    config_cmd.add_argument(
        '-i', '--init',
        action='store_true',
        help='Create an example configuration file'
    )

    return parser


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        argv: List of argument strings (default: sys.argv)

    Examples:
        >>> args = parse_arguments(['analyze', '/path/to/photos', '-t', '3'])
        >>> args.threshold
        3
    """
    parser = create_parser()
    return parser.parse_args(argv)


__all__ = [
    'create_parser',
    'parse_arguments',
]
