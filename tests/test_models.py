"""
Unit tests for data models (ImageRecord and SimilarGroup).
"""

import pytest

from succotash.features import FeatureVector, Fingerprint, Hue
from succotash.models import ImageRecord, SimilarGroup, format_size


def make_record(path, value=None, degrees=0.0, file_size=0):
    vector = None
    if value is not None:
        vector = FeatureVector(Fingerprint(value), Hue(degrees))
    return ImageRecord(path=path, file_size=file_size, features=vector)


class TestFormatSize:
    """Test the format_size utility function."""

    def test_bytes(self):
        assert format_size(500) == "500.0 B"

    def test_kilobytes(self):
        assert format_size(2048) == "2.0 KB"

    def test_megabytes(self):
        assert format_size(5242880) == "5.0 MB"

    def test_gigabytes(self):
        assert format_size(3221225472) == "3.0 GB"

    def test_zero(self):
        assert format_size(0) == "0.0 B"


class TestImageRecord:
    """Test ImageRecord data class."""

    def test_creation(self):
        record = ImageRecord(
            path="/test/image.jpg",
            file_size=1024,
            width=800,
            height=600
        )
        assert record.path == "/test/image.jpg"
        assert record.file_size == 1024
        assert record.width == 800
        assert record.height == 600
        assert record.features is None

    def test_filename_property(self):
        record = ImageRecord(path="/path/to/image.jpg")
        assert record.filename == "image.jpg"

    def test_directory_property(self):
        record = ImageRecord(path="/path/to/image.jpg")
        assert record.directory == "/path/to"

    def test_resolution_property(self):
        record = ImageRecord(path="/test.jpg", width=1920, height=1080)
        assert record.resolution == "1920x1080"

    def test_file_size_formatted(self):
        record = ImageRecord(path="/test.jpg", file_size=1048576)
        assert record.file_size_formatted == "1.0 MB"

    def test_ok(self):
        """A record is ok only with features and no error."""
        assert make_record("/a.png", 0xFF).ok
        assert not make_record("/a.png").ok
        failed = make_record("/a.png", 0xFF)
        failed.error = "boom"
        assert not failed.ok

    def test_to_dict_with_features(self):
        record = ImageRecord(
            path="/test/image.jpg",
            file_size=1024,
            width=800,
            height=600,
            format="JPEG",
            features=FeatureVector(Fingerprint(0xF), Hue(120.0)),
        )
        data = record.to_dict()
        assert data['path'] == "/test/image.jpg"
        assert data['filename'] == "image.jpg"
        assert data['file_size'] == 1024
        assert data['format'] == "JPEG"
        assert data['fingerprint'] == "000000000000000f"
        assert data['popcount'] == 4
        assert data['hue'] == 120.0
        assert data['error'] is None

    def test_to_dict_without_features(self):
        data = ImageRecord(path="/bad.png", error="Not a valid image file").to_dict()
        assert data['fingerprint'] is None
        assert data['popcount'] is None
        assert data['hue'] is None
        assert data['error'] == "Not a valid image file"

    def test_from_dict(self):
        """Test dict round trip keeps features."""
        original = make_record("/test/image.png", 0xABCDEF, 33.5, file_size=99)
        restored = ImageRecord.from_dict(original.to_dict())
        assert restored.path == original.path
        assert restored.file_size == 99
        assert restored.features == original.features

    def test_from_dict_without_features(self):
        restored = ImageRecord.from_dict({'path': '/x.png', 'error': 'gone'})
        assert restored.features is None
        assert restored.error == 'gone'

    def test_hash_and_equality(self):
        """Records are identified by path."""
        record1 = make_record("/test/image.jpg", 1)
        record2 = make_record("/test/image.jpg", 2)
        record3 = make_record("/test/other.jpg", 1)

        assert record1 == record2
        assert record1 != record3
        assert hash(record1) == hash(record2)
        assert len({record1, record2, record3}) == 2

    def test_not_equal_to_other_types(self):
        assert ImageRecord(path="/a.png") != "/a.png"


class TestSimilarGroup:
    """Test SimilarGroup data class."""

    def test_creation(self):
        group = SimilarGroup(id=1)
        assert group.id == 1
        assert group.images == []
        assert group.match_type == "similar"
        assert group.image_count == 0

    def test_ordered_images(self):
        """Members come out by popcount bucket, then hue."""
        a = make_record("/a.png", 0b111, 10.0)
        b = make_record("/b.png", 0b1, 200.0)
        c = make_record("/c.png", 0b10, 100.0)
        group = SimilarGroup(id=1, images=[a, b, c])
        assert [img.path for img in group.ordered_images] == ["/c.png", "/b.png", "/a.png"]

    def test_max_distance(self):
        group = SimilarGroup(id=1, images=[
            make_record("/a.png", 0b0000),
            make_record("/b.png", 0b0001),
            make_record("/c.png", 0b0111),
        ])
        assert group.max_distance == 3

    def test_max_distance_identical(self):
        group = SimilarGroup(id=1, match_type="identical", images=[
            make_record("/a.png", 0xFF),
            make_record("/b.png", 0xFF),
        ])
        assert group.max_distance == 0

    def test_total_size(self):
        group = SimilarGroup(id=1, images=[
            make_record("/a.png", 1, file_size=100),
            make_record("/b.png", 1, file_size=250),
        ])
        assert group.total_size == 350

    def test_to_dict(self):
        group = SimilarGroup(id=7, match_type="identical", images=[
            make_record("/b.png", 0xFF, 240.0),
            make_record("/a.png", 0xFF, 0.0),
        ])
        data = group.to_dict()
        assert data['id'] == 7
        assert data['match_type'] == "identical"
        assert data['image_count'] == 2
        assert data['max_distance'] == 0
        assert [img['path'] for img in data['images']] == ["/a.png", "/b.png"]

    def test_from_dict(self):
        group = SimilarGroup(id=3, images=[
            make_record("/a.png", 0b11, 1.0),
            make_record("/b.png", 0b111, 2.0),
        ])
        restored = SimilarGroup.from_dict(group.to_dict())
        assert restored.id == 3
        assert restored.match_type == "similar"
        assert [img.path for img in restored.images] == ["/a.png", "/b.png"]
        assert restored.images[1].features.fingerprint == Fingerprint(0b111)

    @pytest.mark.parametrize("match_type", ["identical", "similar"])
    def test_match_types(self, match_type):
        assert SimilarGroup(id=1, match_type=match_type).to_dict()['match_type'] == match_type
