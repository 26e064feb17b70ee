"""
Allow running the package with: python -m succotash

Examples:
    python -m succotash analyze /path/to/photos
    python -m succotash -v analyze /path/to/photos --group
    python -m succotash config --init
"""

import sys

from .cli import main


if __name__ == '__main__':
    sys.exit(main())
