"""
Pytest configuration and shared fixtures for test suite.
"""

import pytest
import tempfile
import shutil
from pathlib import Path

import numpy as np
from PIL import Image

from succotash.features import RasterImage


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path, monkeypatch):
    """Point the user configuration at an empty directory."""
    from succotash.user_config import get_user_config

    for var in ('SUCCOTASH_THRESHOLD', 'SUCCOTASH_WORKERS',
                'SUCCOTASH_LSH_THRESHOLD', 'SUCCOTASH_MAX_PIXELS'):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv('SUCCOTASH_CONFIG_DIR', str(tmp_path / 'config'))
    config = get_user_config()
    config.reload()
    yield config
    config.reload()


def _solid(width, height, color):
    """RasterImage of one color."""
    pixels = np.empty((height, width, 3), dtype=np.uint8)
    pixels[:, :] = color
    return RasterImage(pixels)


def _halves(width, height, top, bottom):
    """RasterImage with a top half of one gray level and a bottom half of another."""
    pixels = np.empty((height, width, 3), dtype=np.uint8)
    pixels[: height // 2] = top
    pixels[height // 2:] = bottom
    return RasterImage(pixels)


def _gradient(width, height):
    """RasterImage with a horizontal gray ramp (not uniform, deterministic)."""
    ramp = np.linspace(0, 255, width, dtype=np.float64).astype(np.uint8)
    gray = np.tile(ramp, (height, 1))
    return RasterImage(np.stack([gray, gray, gray], axis=-1))


@pytest.fixture
def solid():
    """Factory: solid(width, height, color) -> RasterImage."""
    return _solid


@pytest.fixture
def halves():
    """Factory: halves(width, height, top, bottom) -> RasterImage."""
    return _halves


@pytest.fixture
def gradient():
    """Factory: gradient(width, height) -> RasterImage."""
    return _gradient


@pytest.fixture
def sample_images(temp_dir):
    """
    Create a set of sample images for testing.

    Returns:
        dict with paths to:
        - red.png, red_copy.png (same pixels)
        - red_large.png (same color, bigger)
        - blue.png (unique color)
        - halves.png (black top, white bottom)
        - halves.jpg (same picture, lossy)
        - corrupted.png (not an image, image extension)
        - notes.txt (not an image extension)
    """
    images = {}

    red = Image.new('RGB', (100, 100), color='red')
    for name in ('red', 'red_copy'):
        path = temp_dir / f"{name}.png"
        red.save(path, 'PNG')
        images[name] = str(path)

    path = temp_dir / "red_large.png"
    Image.new('RGB', (200, 200), color='red').save(path, 'PNG')
    images['red_large'] = str(path)

    path = temp_dir / "blue.png"
    Image.new('RGB', (100, 100), color='blue').save(path, 'PNG')
    images['blue'] = str(path)

    split = Image.new('RGB', (64, 64), color='black')
    split.paste((255, 255, 255), (0, 32, 64, 64))
    path = temp_dir / "halves.png"
    split.save(path, 'PNG')
    images['halves'] = str(path)

    path = temp_dir / "halves.jpg"
    split.save(path, 'JPEG', quality=85)
    images['halves_jpg'] = str(path)

    path = temp_dir / "corrupted.png"
    path.write_text("not an image")
    images['corrupted'] = str(path)

    path = temp_dir / "notes.txt"
    path.write_text("not an image either")
    images['notes'] = str(path)

    return images
