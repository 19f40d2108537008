"""
Laplacian (second-derivative) edge operator.
"""

import logging

import numpy as np

from core.image.buffers import PixelBuffer, to_grayscale
from vision.convolution import convolve
from vision.thresholding import to_binary_edge_map, validate_threshold

logger = logging.getLogger(__name__)

# 4-neighbour kernel. Output depends on the exact kernel, so it is fixed.
LAPLACIAN_KERNEL = np.array([[0, 1, 0], [1, -4, 1], [0, 1, 0]], dtype=np.float32)


def laplacian_response(image: PixelBuffer) -> np.ndarray:
    """Absolute Laplacian of the frame's luminance as a float32 grid."""
    return np.abs(convolve(to_grayscale(image), LAPLACIAN_KERNEL))


def laplacian(image: PixelBuffer, threshold: int) -> PixelBuffer:
    """
    Laplacian edge detection.

    The second derivative amplifies noise; callers normally blur first
    when a blur amount is configured.

    Args:
        image: Input RGBA frame (not modified)
        threshold: Threshold on ``|response|`` in [0, 255]

    Returns:
        Binary edge map with the same dimensions
    """
    threshold = validate_threshold(threshold)
    response = laplacian_response(image)
    logger.debug(f"laplacian: {image.width}x{image.height}, max {float(response.max()):.1f}")
    return to_binary_edge_map(response, threshold)
