"""
Unit tests for RasterImage construction and validation.
"""

import numpy as np
import pytest
from PIL import Image

from succotash.features import InvalidInputError, RasterImage, as_raster


class TestRasterImage:
    """Test RasterImage validation."""

    def test_valid(self):
        raster = RasterImage(np.zeros((3, 5, 3), dtype=np.uint8))
        assert raster.width == 5
        assert raster.height == 3
        assert raster.pixel_count == 15

    @pytest.mark.parametrize("shape", [(0, 0, 3), (0, 4, 3), (4, 0, 3)])
    def test_empty_rejected(self, shape):
        with pytest.raises(InvalidInputError):
            RasterImage(np.zeros(shape, dtype=np.uint8))

    def test_wrong_channel_count(self):
        with pytest.raises(InvalidInputError):
            RasterImage(np.zeros((4, 4, 4), dtype=np.uint8))
        with pytest.raises(InvalidInputError):
            RasterImage(np.zeros((4, 4), dtype=np.uint8))

    def test_wrong_dtype(self):
        with pytest.raises(InvalidInputError):
            RasterImage(np.zeros((4, 4, 3), dtype=np.float32))

    def test_not_an_array(self):
        with pytest.raises(InvalidInputError):
            RasterImage([[[0, 0, 0]]])

    def test_invalid_input_is_value_error(self):
        assert issubclass(InvalidInputError, ValueError)

    def test_to_pil(self):
        pixels = np.zeros((2, 3, 3), dtype=np.uint8)
        pixels[1, 2] = (10, 20, 30)
        img = RasterImage(pixels).to_pil()
        assert img.mode == 'RGB'
        assert img.size == (3, 2)
        assert img.getpixel((2, 1)) == (10, 20, 30)


class TestFromBytes:
    """Test RasterImage.from_bytes."""

    def test_row_major_layout(self):
        data = bytes([1, 2, 3, 4, 5, 6])
        raster = RasterImage.from_bytes(2, 1, data)
        assert raster.pixels[0, 0].tolist() == [1, 2, 3]
        assert raster.pixels[0, 1].tolist() == [4, 5, 6]

    def test_zero_dimensions(self):
        with pytest.raises(InvalidInputError):
            RasterImage.from_bytes(0, 0, b"")
        with pytest.raises(InvalidInputError):
            RasterImage.from_bytes(0, 5, b"")

    def test_buffer_size_mismatch(self):
        with pytest.raises(InvalidInputError):
            RasterImage.from_bytes(2, 2, bytes(11))
        with pytest.raises(InvalidInputError):
            RasterImage.from_bytes(2, 2, bytes(13))


class TestFromArray:
    """Test RasterImage.from_array and as_raster."""

    def test_nested_lists(self):
        raster = RasterImage.from_array([[[255, 0, 0], [0, 255, 0]]])
        assert (raster.width, raster.height) == (2, 1)

    def test_read_only_copy(self):
        source = np.zeros((2, 2, 3), dtype=np.uint8)
        raster = RasterImage.from_array(source)
        source[0, 0] = 255
        assert raster.pixels[0, 0].tolist() == [0, 0, 0]
        with pytest.raises(ValueError):
            raster.pixels[0, 0] = 1

    def test_empty(self):
        with pytest.raises(InvalidInputError):
            RasterImage.from_array([])

    def test_ragged(self):
        with pytest.raises(InvalidInputError):
            RasterImage.from_array([[[0, 0, 0]], [[0, 0]]])

    def test_wider_integer_types_in_range(self):
        source = np.full((2, 2, 3), 255, dtype=np.int32)
        raster = RasterImage.from_array(source)
        assert raster.pixels.dtype == np.uint8
        assert raster.pixels[0, 0].tolist() == [255, 255, 255]

    def test_out_of_range_rejected(self):
        """A channel of 256 must not wrap around to 0."""
        source = np.zeros((2, 2, 3), dtype=np.int32)
        source[..., 0] = 256
        with pytest.raises(InvalidInputError):
            RasterImage.from_array(source)

    def test_negative_rejected(self):
        """A channel of -1 must not wrap around to 255."""
        with pytest.raises(InvalidInputError):
            RasterImage.from_array(np.full((2, 2, 3), -1, dtype=np.int16))

    def test_float_and_bool_rejected(self):
        with pytest.raises(InvalidInputError):
            RasterImage.from_array(np.full((2, 2, 3), 0.5))
        with pytest.raises(InvalidInputError):
            RasterImage.from_array(np.ones((2, 2, 3), dtype=bool))

    def test_core_rejects_out_of_range(self):
        from succotash.features import fingerprint, hue
        source = np.full((4, 4, 3), 300, dtype=np.int32)
        with pytest.raises(InvalidInputError):
            fingerprint(source)
        with pytest.raises(InvalidInputError):
            hue(source)

    def test_as_raster_passthrough(self):
        raster = RasterImage(np.zeros((1, 1, 3), dtype=np.uint8))
        assert as_raster(raster) is raster

    def test_as_raster_converts_pil_modes(self):
        gray = Image.new('L', (4, 2), color=128)
        raster = as_raster(gray)
        assert raster.pixels.shape == (2, 4, 3)
        assert raster.pixels[0, 0].tolist() == [128, 128, 128]

    def test_from_pil_rgba_drops_alpha(self):
        img = Image.new('RGBA', (2, 2), color=(10, 20, 30, 0))
        raster = RasterImage.from_pil(img)
        assert raster.pixels[1, 1].tolist() == [10, 20, 30]
