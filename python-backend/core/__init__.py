"""
Core modules for Edge Vision Flow
"""

from .enums import EdgeBackend, EdgeMethod
from .exceptions import (
    DimensionError,
    EdgeDetectionError,
    InvalidThresholdError,
    KernelTooLargeError,
)
from .image import GradientField, GrayscaleBuffer, PixelBuffer, from_grayscale, to_grayscale

__all__ = [
    "EdgeMethod",
    "EdgeBackend",
    "EdgeDetectionError",
    "DimensionError",
    "KernelTooLargeError",
    "InvalidThresholdError",
    "PixelBuffer",
    "GrayscaleBuffer",
    "GradientField",
    "to_grayscale",
    "from_grayscale",
]
