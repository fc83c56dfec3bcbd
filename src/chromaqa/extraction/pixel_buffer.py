"""
Pixel buffer access for raster extraction.

A PixelBuffer is a read-only width x height grid of 8-bit RGBA samples in
row-major order. Decoding image bytes is the only step that may suspend;
``decode_image_async`` runs the decoder in a worker thread so callers can
await it before any pixel-level function runs.
"""

import asyncio
import io
import logging
from dataclasses import dataclass

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from .exceptions import ImageDecodeError
from .models import round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PixelBuffer:
    """Immutable RGBA pixel grid backed by a ``(height, width, 4)`` uint8 array."""

    data: np.ndarray

    def __post_init__(self):
        if self.data.ndim != 3 or self.data.shape[2] != 4 or self.data.dtype != np.uint8:
            raise ValueError(
                f"PixelBuffer expects a (height, width, 4) uint8 array, got "
                f"{self.data.shape} {self.data.dtype}"
            )
        if self.data.flags.writeable:
            frozen = self.data.copy()
            frozen.flags.writeable = False
            object.__setattr__(self, "data", frozen)

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def total_pixels(self) -> int:
        return self.width * self.height

    @property
    def rgb(self) -> np.ndarray:
        """View of the color channels, shape ``(height, width, 3)``."""
        return self.data[:, :, :3]

    @property
    def alpha(self) -> np.ndarray:
        """View of the alpha channel, shape ``(height, width)``."""
        return self.data[:, :, 3]

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Build a buffer from an RGB or RGBA array.

        RGB input is treated as fully opaque.
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ValueError(f"Expected an RGB or RGBA image array, got shape {array.shape}")

        array = array.astype(np.uint8, copy=False)
        if array.shape[2] == 3:
            opaque = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
            array = np.concatenate([array, opaque], axis=2)

        return cls(np.ascontiguousarray(array))

    def downscaled(self, max_dimension: int) -> tuple["PixelBuffer", float]:
        """Shrink the buffer so its longer side is at most ``max_dimension``.

        Returns:
            (buffer, scale) where scale <= 1 is the applied ratio. The
            original buffer is returned unchanged when it already fits.
        """
        if max_dimension < 1:
            raise ValueError(f"max_dimension must be >= 1, got {max_dimension}")

        longer = max(self.width, self.height)
        if longer == 0:
            return self, 1.0

        scale = min(1.0, max_dimension / longer)
        if scale >= 1.0:
            return self, 1.0

        new_width = max(1, round_half_up(self.width * scale))
        new_height = max(1, round_half_up(self.height * scale))
        # OpenCV wants a writable source array
        resized = cv2.resize(
            self.data.copy(), (new_width, new_height), interpolation=cv2.INTER_AREA
        )

        logger.debug(
            f"Downscaled {self.width}x{self.height} -> {new_width}x{new_height} "
            f"(scale {scale:.4f})"
        )
        return PixelBuffer(resized), scale


def decode_image(image_bytes: bytes) -> PixelBuffer:
    """Decode encoded image bytes (PNG, JPEG, WebP, ...) into RGBA.

    Raises:
        ImageDecodeError: If the bytes cannot be rasterized at all
    """
    if not image_bytes:
        raise ImageDecodeError("No image data to decode", size=0)

    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            img.load()
            rgba = img.convert("RGBA")
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageDecodeError(f"Failed to decode image: {e}", size=len(image_bytes)) from e

    return PixelBuffer(np.asarray(rgba, dtype=np.uint8))


async def decode_image_async(image_bytes: bytes) -> PixelBuffer:
    """Decode image bytes off the event loop."""
    return await asyncio.to_thread(decode_image, image_bytes)
