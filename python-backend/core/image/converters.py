"""
Image format conversion utilities.

Handles conversions between the core PixelBuffer and transport formats:
- PIL Images (RGBA)
- Base64 encoded PNG/JPEG strings
- OpenCV grayscale arrays
"""

import base64
import binascii
import io
import logging

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from core.constants import ImageConstants
from core.image.buffers import PixelBuffer

logger = logging.getLogger(__name__)


class ImageDecodeError(ValueError):
    """Payload could not be decoded into an image."""


class ImageConverters:
    """Utilities for converting between PixelBuffer and other image formats."""

    @staticmethod
    def pixel_buffer_to_pil(buf: PixelBuffer) -> Image.Image:
        """
        Convert PixelBuffer to PIL Image.

        Args:
            buf: RGBA pixel buffer

        Returns:
            PIL Image in RGBA mode
        """
        return Image.fromarray(np.array(buf.as_array()))

    @staticmethod
    def pil_to_pixel_buffer(image: Image.Image) -> PixelBuffer:
        """
        Convert PIL Image (any mode) to PixelBuffer.

        Args:
            image: PIL Image

        Returns:
            RGBA PixelBuffer
        """
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return PixelBuffer.from_array(np.asarray(image, dtype=np.uint8))

    @staticmethod
    def to_base64(
        buf: PixelBuffer, format: str = ImageConstants.DEFAULT_ENCODE_FORMAT, quality: int = 85
    ) -> str:
        """
        Encode PixelBuffer to base64 string.

        Args:
            buf: Input buffer
            format: Image format (PNG, JPEG, etc.)
            quality: JPEG quality (1-100, ignored for PNG)

        Returns:
            Base64 encoded string
        """
        try:
            image = ImageConverters.pixel_buffer_to_pil(buf)

            buffer = io.BytesIO()
            save_kwargs = {"format": format}

            if format.upper() == "JPEG":
                # JPEG has no alpha channel
                image = image.convert("RGB")
                save_kwargs["quality"] = quality
                save_kwargs["optimize"] = True

            image.save(buffer, **save_kwargs)
            return base64.b64encode(buffer.getvalue()).decode("utf-8")

        except Exception as e:
            logger.error(f"Failed to convert image to base64: {e}")
            raise

    @staticmethod
    def from_base64(
        base64_string: str, max_dimension: int = ImageConstants.MAX_IMAGE_DIMENSION
    ) -> PixelBuffer:
        """
        Decode base64 string to PixelBuffer.

        Accepts bare base64 or a ``data:image/...;base64,`` URL.

        Args:
            base64_string: Base64 encoded image
            max_dimension: Largest accepted width or height

        Returns:
            RGBA PixelBuffer

        Raises:
            ImageDecodeError: If the payload is not a decodable image
        """
        if "," in base64_string and base64_string.lstrip().startswith("data:"):
            base64_string = base64_string.split(",", 1)[1]

        try:
            image_bytes = base64.b64decode(base64_string, validate=True)
            # Only the header is read here; pixel data is decoded by load()
            image = Image.open(io.BytesIO(image_bytes))

            width, height = image.size
            if max(width, height) > max_dimension:
                raise ImageDecodeError(
                    f"Image {width}x{height} exceeds maximum dimension {max_dimension}"
                )

            image.load()
        except (
            binascii.Error,
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
        ) as e:
            logger.error(f"Failed to decode base64 image: {e}")
            raise ImageDecodeError(f"Invalid image payload: {e}") from e

        return ImageConverters.pil_to_pixel_buffer(image)

    @staticmethod
    def pixel_buffer_to_gray(buf: PixelBuffer) -> np.ndarray:
        """Convert PixelBuffer to an OpenCV grayscale array."""
        return cv2.cvtColor(np.array(buf.as_array()), cv2.COLOR_RGBA2GRAY)
