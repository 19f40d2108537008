"""
Separable Gaussian blur on RGBA frames.

The blur runs on the colour channels before any luminance conversion, so
smoothing stays colour-faithful. Alpha is carried over unchanged.
"""

import logging
from functools import lru_cache

import numpy as np

from core.constants import EdgeConstants, ImageConstants
from core.exceptions import KernelTooLargeError
from core.image.buffers import PixelBuffer
from vision.convolution import convolve_plane

logger = logging.getLogger(__name__)


def blur_radius(amount: int) -> int:
    """Kernel radius for a blur amount (radius = amount, at least 1)."""
    return max(int(amount), 1)


@lru_cache(maxsize=32)
def _gaussian_weights(radius: int) -> tuple:
    sigma = max(radius / 2.0, EdgeConstants.MIN_GAUSSIAN_SIGMA)
    offsets = np.arange(-radius, radius + 1, dtype=np.float64)
    weights = np.exp(-(offsets**2) / (2.0 * sigma**2))
    weights /= weights.sum()
    return tuple(weights.tolist())


def gaussian_kernel(radius: int) -> np.ndarray:
    """
    1D Gaussian weights of length ``2 * radius + 1`` summing to 1.

    ``sigma = max(radius / 2, 0.8)``.
    """
    if radius < 1:
        raise ValueError(f"Gaussian radius must be >= 1, got {radius}")
    return np.array(_gaussian_weights(radius), dtype=np.float32)


def gaussian_blur(image: PixelBuffer, amount: int) -> PixelBuffer:
    """
    Blur a frame with a separable Gaussian.

    Callers skip the call entirely for ``amount == 0``; if it is invoked
    anyway the minimum radius of 1 applies.

    Args:
        image: Input RGBA frame (not modified)
        amount: Blur amount, used directly as the kernel radius

    Returns:
        New blurred PixelBuffer with the same dimensions

    Raises:
        KernelTooLargeError: If ``2 * radius + 1`` exceeds width or height
        ValueError: If amount is negative
    """
    if amount < 0:
        raise ValueError(f"Blur amount must be >= 0, got {amount}")

    radius = blur_radius(amount)
    size = 2 * radius + 1
    rgba = image.as_array()
    if size > image.width or size > image.height:
        raise KernelTooLargeError((size, size), image.width, image.height)

    weights = gaussian_kernel(radius)
    horizontal = weights.reshape(1, -1)
    vertical = weights.reshape(-1, 1)

    result = np.empty_like(rgba)
    for channel in range(3):
        smoothed = convolve_plane(rgba[:, :, channel], horizontal)
        smoothed = convolve_plane(smoothed, vertical)
        result[:, :, channel] = np.clip(
            np.floor(smoothed + 0.5), ImageConstants.MIN_INTENSITY, ImageConstants.MAX_INTENSITY
        ).astype(np.uint8)
    result[:, :, 3] = rgba[:, :, 3]

    logger.debug(f"Gaussian blur radius {radius} on {image.width}x{image.height}")
    return PixelBuffer(width=image.width, height=image.height, pixels=result.reshape(-1))
