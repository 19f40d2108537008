"""
OpenCV implementation of the filter entry points.

Same contract as the native filters (PixelBuffer in, new PixelBuffer of
the same size out, binary edge maps, replicated borders). Results are
close to the native path but not guaranteed bit-identical: OpenCV uses
its own fixed-point blur and Canny internals.
"""

import logging

import cv2
import numpy as np

from core.constants import EdgeConstants
from core.exceptions import KernelTooLargeError
from core.image.buffers import PixelBuffer
from core.image.converters import ImageConverters
from vision.blur import blur_radius, gaussian_kernel
from vision.canny import thresholds_for
from vision.edge_detection import FilterSet
from vision.gradients import PREWITT, ROBERTS
from vision.thresholding import mask_to_pixel_buffer, to_binary_edge_map, validate_threshold

logger = logging.getLogger(__name__)


def _check_kernel(size: int, width: int, height: int) -> None:
    if size > width or size > height:
        raise KernelTooLargeError((size, size), width, height)


def gaussian_blur(image: PixelBuffer, amount: int) -> PixelBuffer:
    """Separable Gaussian blur via cv2.sepFilter2D."""
    if amount < 0:
        raise ValueError(f"Blur amount must be >= 0, got {amount}")

    radius = blur_radius(amount)
    _check_kernel(2 * radius + 1, image.width, image.height)

    rgba = np.array(image.as_array())
    weights = gaussian_kernel(radius)
    rgb = rgba[:, :, :3].astype(np.float32)
    blurred = cv2.sepFilter2D(rgb, cv2.CV_32F, weights, weights, borderType=cv2.BORDER_REPLICATE)

    rgba[:, :, :3] = np.clip(np.floor(blurred + 0.5), 0, 255).astype(np.uint8)
    return PixelBuffer.from_array(rgba)


def _gradient_magnitude(gray: np.ndarray, kernel_x: np.ndarray, kernel_y: np.ndarray) -> np.ndarray:
    """Gradient magnitude via cv2.filter2D with replicated borders."""
    height, width = gray.shape
    _check_kernel(2 * (max(kernel_x.shape) // 2) + 1, width, height)
    anchor = ((kernel_x.shape[1] - 1) // 2, (kernel_x.shape[0] - 1) // 2)
    grad_x = cv2.filter2D(
        gray, cv2.CV_32F, kernel_x, anchor=anchor, borderType=cv2.BORDER_REPLICATE
    )
    grad_y = cv2.filter2D(
        gray, cv2.CV_32F, kernel_y, anchor=anchor, borderType=cv2.BORDER_REPLICATE
    )
    return np.sqrt(grad_x**2 + grad_y**2)


def sobel(image: PixelBuffer, threshold: int) -> PixelBuffer:
    """Sobel edge detection via cv2.Sobel."""
    threshold = validate_threshold(threshold)
    gray = ImageConverters.pixel_buffer_to_gray(image)
    _check_kernel(3, image.width, image.height)

    grad_x = cv2.Sobel(gray, cv2.CV_32F, 1, 0, ksize=3, borderType=cv2.BORDER_REPLICATE)
    grad_y = cv2.Sobel(gray, cv2.CV_32F, 0, 1, ksize=3, borderType=cv2.BORDER_REPLICATE)
    magnitude = np.sqrt(grad_x**2 + grad_y**2)

    return to_binary_edge_map(magnitude, threshold)


def prewitt(image: PixelBuffer, threshold: int) -> PixelBuffer:
    """Prewitt edge detection via cv2.filter2D."""
    threshold = validate_threshold(threshold)
    gray = ImageConverters.pixel_buffer_to_gray(image)
    magnitude = _gradient_magnitude(gray, PREWITT.kernel_x, PREWITT.kernel_y)
    return to_binary_edge_map(magnitude, threshold)


def roberts(image: PixelBuffer, threshold: int) -> PixelBuffer:
    """Roberts Cross edge detection via cv2.filter2D."""
    threshold = validate_threshold(threshold)
    gray = ImageConverters.pixel_buffer_to_gray(image)
    magnitude = _gradient_magnitude(gray, ROBERTS.kernel_x, ROBERTS.kernel_y)
    return to_binary_edge_map(magnitude, threshold)


def laplacian(image: PixelBuffer, threshold: int) -> PixelBuffer:
    """Laplacian edge detection via cv2.Laplacian (ksize=1, 4-neighbour)."""
    threshold = validate_threshold(threshold)
    gray = ImageConverters.pixel_buffer_to_gray(image)
    _check_kernel(3, image.width, image.height)

    response = cv2.Laplacian(gray, cv2.CV_32F, ksize=1, borderType=cv2.BORDER_REPLICATE)
    return to_binary_edge_map(np.abs(response), threshold)


def canny(image: PixelBuffer, low_threshold: int, blur_amount: int = 1) -> PixelBuffer:
    """Canny edge detection via cv2.Canny with the same threshold policy."""
    low, high = thresholds_for(low_threshold)
    radius = max(int(blur_amount), EdgeConstants.CANNY_MIN_BLUR_RADIUS)

    smoothed = gaussian_blur(image, radius)
    gray = ImageConverters.pixel_buffer_to_gray(smoothed)
    edges = cv2.Canny(gray, low, high, apertureSize=3, L2gradient=True)

    logger.debug(f"opencv canny: low={low}, high={high}, edges={int(np.count_nonzero(edges))}")
    return mask_to_pixel_buffer(edges > 0)


OPENCV_FILTERS = FilterSet(
    gaussian_blur=gaussian_blur,
    sobel=sobel,
    prewitt=prewitt,
    roberts=roberts,
    laplacian=laplacian,
    canny=canny,
)
