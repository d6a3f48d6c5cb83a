"""Pillow-backed implementation of the ImageTransformer port."""

import asyncio
import io
import logging

from PIL import Image, UnidentifiedImageError

from app.application.interfaces import (
    ImageTransformer,
    TransformConstraints,
    TransformedImage,
)
from app.domain.exceptions import ProcessingFailedError

logger = logging.getLogger(__name__)


class PillowImageTransformer(ImageTransformer):
    """Fit into the bounding box, then re-encode as progressive JPEG.

    Decoding and encoding are CPU-bound, so they run in a worker thread to
    keep the event loop responsive.
    """

    async def transform(
        self, content: bytes, constraints: TransformConstraints
    ) -> TransformedImage:
        return await asyncio.to_thread(self._transform_sync, content, constraints)

    @staticmethod
    def _transform_sync(content: bytes, constraints: TransformConstraints) -> TransformedImage:
        try:
            with Image.open(io.BytesIO(content)) as img:
                if img.width * img.height > constraints.max_pixels:
                    logger.warning("Rejected %sx%s image above the pixel cap", *img.size)
                    raise ProcessingFailedError(
                        "Image dimensions are too large",
                        details={"width": img.width, "height": img.height},
                    )
                img.load()
                source_size = img.size
                # thumbnail() preserves aspect ratio and never enlarges
                img.thumbnail((constraints.max_width, constraints.max_height))
                if img.mode != "RGB":
                    img = img.convert("RGB")

                buffer = io.BytesIO()
                img.save(buffer, format="JPEG", quality=constraints.quality, progressive=True)
                width, height = img.size
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
            logger.warning("Failed to decode image: %s", exc)
            raise ProcessingFailedError("Failed to process image") from exc

        logger.debug("Transformed image %sx%s → %sx%s", *source_size, width, height)
        return TransformedImage(
            content=buffer.getvalue(),
            width=width,
            height=height,
            mime_type="image/jpeg",
            extension=".jpg",
        )
