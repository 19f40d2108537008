"""
First-derivative edge operators: Sobel, Prewitt and Roberts Cross.

Each operator is a pair of directional kernels (Gx, Gy). Magnitude is
``sqrt(Gx^2 + Gy^2)`` and direction ``atan2(Gy, Gx)``. The public filters
threshold the magnitude into a binary edge map.
"""

import logging
from dataclasses import dataclass

import numpy as np

from core.image.buffers import GradientField, GrayscaleBuffer, PixelBuffer, to_grayscale
from vision.convolution import convolve
from vision.thresholding import to_binary_edge_map, validate_threshold

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GradientOperator:
    """Named pair of directional kernels."""

    name: str
    kernel_x: np.ndarray
    kernel_y: np.ndarray


SOBEL = GradientOperator(
    name="sobel",
    kernel_x=np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype=np.float32),
    kernel_y=np.array([[-1, -2, -1], [0, 0, 0], [1, 2, 1]], dtype=np.float32),
)

PREWITT = GradientOperator(
    name="prewitt",
    kernel_x=np.array([[-1, 0, 1], [-1, 0, 1], [-1, 0, 1]], dtype=np.float32),
    kernel_y=np.array([[-1, -1, -1], [0, 0, 0], [1, 1, 1]], dtype=np.float32),
)

# Diagonal 2x2 kernels, anchored on the top-left tap
ROBERTS = GradientOperator(
    name="roberts",
    kernel_x=np.array([[1, 0], [0, -1]], dtype=np.float32),
    kernel_y=np.array([[0, 1], [-1, 0]], dtype=np.float32),
)


def compute_gradient(gray: GrayscaleBuffer, operator: GradientOperator = SOBEL) -> GradientField:
    """
    Compute gradient magnitude and direction of a grayscale image.

    Args:
        gray: Input luminance
        operator: Kernel pair to apply

    Returns:
        GradientField with float32 magnitude and direction (radians)
    """
    grad_x = convolve(gray, operator.kernel_x)
    grad_y = convolve(gray, operator.kernel_y)

    magnitude = np.sqrt(grad_x**2 + grad_y**2).astype(np.float32)
    direction = np.arctan2(grad_y, grad_x).astype(np.float32)

    return GradientField(
        width=gray.width, height=gray.height, magnitude=magnitude, direction=direction
    )


def apply_gradient_operator(
    image: PixelBuffer, threshold: int, operator: GradientOperator
) -> PixelBuffer:
    """Grayscale, gradient, threshold."""
    threshold = validate_threshold(threshold)
    gradient = compute_gradient(to_grayscale(image), operator)
    logger.debug(
        f"{operator.name}: {image.width}x{image.height}, "
        f"max magnitude {float(gradient.magnitude.max()):.1f}"
    )
    return to_binary_edge_map(gradient.magnitude, threshold)


def sobel(image: PixelBuffer, threshold: int) -> PixelBuffer:
    """
    Sobel edge detection.

    Args:
        image: Input RGBA frame (not modified)
        threshold: Magnitude threshold in [0, 255]

    Returns:
        Binary edge map with the same dimensions
    """
    return apply_gradient_operator(image, threshold, SOBEL)


def prewitt(image: PixelBuffer, threshold: int) -> PixelBuffer:
    """Prewitt edge detection."""
    return apply_gradient_operator(image, threshold, PREWITT)


def roberts(image: PixelBuffer, threshold: int) -> PixelBuffer:
    """Roberts Cross edge detection."""
    return apply_gradient_operator(image, threshold, ROBERTS)
