"""
Image data model and conversions.

This package provides:
- buffers: PixelBuffer, GrayscaleBuffer, GradientField and luminance conversion
- converters: Transport conversions (PIL, base64, OpenCV arrays)
"""

from core.image.buffers import (
    GradientField,
    GrayscaleBuffer,
    PixelBuffer,
    from_grayscale,
    to_grayscale,
)
from core.image.converters import ImageConverters, ImageDecodeError

__all__ = [
    "PixelBuffer",
    "GrayscaleBuffer",
    "GradientField",
    "to_grayscale",
    "from_grayscale",
    "ImageConverters",
    "ImageDecodeError",
]
