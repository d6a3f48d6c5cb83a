"""Abstract interface (port) for image normalization."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class TransformConstraints:
    """Bounding box and encoding parameters applied to every upload.

    ``max_pixels`` caps the decoded size of the *input*, checked from the
    image header before any pixel data is read.
    """

    max_width: int = 1920
    max_height: int = 1080
    quality: int = 85
    max_pixels: int = 50_000_000


@dataclass
class TransformedImage:
    """Normalized image bytes plus the metadata of the *output* image."""

    content: bytes
    width: int
    height: int
    mime_type: str
    extension: str


class ImageTransformer(ABC):
    """Port for the resize/re-encode primitive.

    Implementations fit the image inside the bounding box preserving the
    aspect ratio and never upscale. Undecodable input raises
    ProcessingFailedError.
    """

    @abstractmethod
    async def transform(
        self, content: bytes, constraints: TransformConstraints
    ) -> TransformedImage:
        ...
