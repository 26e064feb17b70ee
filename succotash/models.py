"""
Data models for succotash.

Contains dataclasses for representing analyzed images and groups of
near-duplicates.
"""

from dataclasses import dataclass, field
from typing import Optional
import os

from .features import FeatureVector, hamming_distance, order_features


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable form."""
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"


@dataclass
class ImageRecord:
    """
    Stores an image file and the features extracted from it.

    Attributes:
        path: Full path to the image file
        file_size: Size in bytes
        width: Image width in pixels
        height: Image height in pixels
        format: Image format reported by the decoder (PNG, JPEG, etc.)
        features: Extracted fingerprint and hue, None if analysis failed
        error: Error message if analysis failed
    """
    path: str
    file_size: int = 0
    width: int = 0
    height: int = 0
    format: str = ""
    features: Optional[FeatureVector] = None
    error: Optional[str] = None

    def __hash__(self):
        return hash(str(self.path))

    def __eq__(self, other):
        if not isinstance(other, ImageRecord):
            return False
        return str(self.path) == str(other.path)

    @property
    def filename(self) -> str:
        """Return just the filename portion of the path."""
        return os.path.basename(self.path)

    @property
    def directory(self) -> str:
        """Return the directory containing this image."""
        return os.path.dirname(self.path)

    @property
    def resolution(self) -> str:
        """Return resolution as 'WxH' string."""
        return f"{self.width}x{self.height}"

    @property
    def file_size_formatted(self) -> str:
        """Return human-readable file size."""
        return format_size(self.file_size)

    @property
    def ok(self) -> bool:
        """True if features were extracted."""
        return self.features is not None and not self.error

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        data = {
            'path': self.path,
            'filename': self.filename,
            'file_size': self.file_size,
            'width': self.width,
            'height': self.height,
            'format': self.format,
            'fingerprint': None,
            'popcount': None,
            'hue': None,
            'error': self.error,
        }
        if self.features is not None:
            data.update(self.features.to_dict())
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'ImageRecord':
        """Create ImageRecord from dictionary."""
        vector = None
        if data.get('fingerprint') is not None and data.get('hue') is not None:
            vector = FeatureVector.from_dict(data)
        return cls(
            path=data['path'],
            file_size=data.get('file_size', 0),
            width=data.get('width', 0),
            height=data.get('height', 0),
            format=data.get('format', ''),
            features=vector,
            error=data.get('error'),
        )


@dataclass
class SimilarGroup:
    """
    A group of near-duplicate images.

    Attributes:
        id: Unique identifier for this group
        images: ImageRecords in this group
        match_type: 'identical' (equal fingerprints) or 'similar'
    """
    id: int
    images: list = field(default_factory=list)
    match_type: str = "similar"

    @property
    def image_count(self) -> int:
        """Number of images in this group."""
        return len(self.images)

    @property
    def ordered_images(self) -> list:
        """Images in feature order (popcount bucket, then hue)."""
        return order_features(self.images, key=lambda img: img.features)

    @property
    def max_distance(self) -> int:
        """Largest Hamming distance between any two members."""
        prints = [img.features.fingerprint for img in self.images]
        best = 0
        for i in range(len(prints)):
            for j in range(i + 1, len(prints)):
                best = max(best, hamming_distance(prints[i], prints[j]))
        return best

    @property
    def total_size(self) -> int:
        """Bytes taken by all members."""
        return sum(img.file_size for img in self.images)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'match_type': self.match_type,
            'image_count': self.image_count,
            'max_distance': self.max_distance,
            'images': [img.to_dict() for img in self.ordered_images],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'SimilarGroup':
        """Create SimilarGroup from dictionary."""
        images = [ImageRecord.from_dict(img_data) for img_data in data.get('images', [])]
        return cls(
            id=data['id'],
            images=images,
            match_type=data.get('match_type', 'similar'),
        )
