"""
Canny edge detector.

Five fixed stages, always run in order:

1. Smooth      - Gaussian blur of the RGBA frame (radius >= 1)
2. Gradient    - Sobel magnitude and direction of the luminance
3. Suppress    - non-maximum suppression along 4 quantised directions
4. Classify    - double threshold (high = 2 x low, capped at 255)
5. Track       - hysteresis: weak pixels survive only when 8-connected
                 to a strong pixel
"""

import logging
from typing import Tuple

import cv2
import numpy as np

from core.constants import EdgeConstants
from core.enums import EdgeClass
from core.exceptions import InvalidThresholdError
from core.image.buffers import GradientField, PixelBuffer, to_grayscale
from vision.blur import gaussian_blur
from vision.gradients import SOBEL, compute_gradient
from vision.thresholding import mask_to_pixel_buffer, validate_threshold

logger = logging.getLogger(__name__)

# Neighbour offsets (dy, dx) along the gradient for each quantised angle.
# Image rows grow downwards, so 45 degrees points down-right.
_SUPPRESSION_OFFSETS = {
    0: ((0, -1), (0, 1)),
    45: ((-1, -1), (1, 1)),
    90: ((-1, 0), (1, 0)),
    135: ((-1, 1), (1, -1)),
}


def thresholds_for(low: int) -> Tuple[int, int]:
    """
    Derive the (low, high) threshold pair from the configured value.

    Raises:
        InvalidThresholdError: If low is out of range or the pair is inverted
    """
    low = validate_threshold(low)
    high = min(low * EdgeConstants.CANNY_HIGH_RATIO, EdgeConstants.MAX_THRESHOLD)
    if low > high:
        raise InvalidThresholdError(
            low, high=high, reason=f"Low threshold {low} exceeds high threshold {high}"
        )
    return low, high


def quantize_direction(direction: np.ndarray) -> np.ndarray:
    """
    Bucket gradient angles (radians) into 0, 45, 90 or 135 degrees.

    Angles are folded into [0, 180); each bucket spans +/- 22.5 degrees.
    """
    degrees = np.mod(np.degrees(direction), 180.0)
    half = EdgeConstants.NMS_BIN_HALF_WIDTH

    buckets = np.zeros(direction.shape, dtype=np.int32)
    buckets[(degrees >= 45 - half) & (degrees < 45 + half)] = 45
    buckets[(degrees >= 90 - half) & (degrees < 90 + half)] = 90
    buckets[(degrees >= 135 - half) & (degrees < 135 + half)] = 135
    return buckets


def non_maximum_suppression(gradient: GradientField) -> np.ndarray:
    """
    Thin gradient ridges to single-pixel width.

    A pixel keeps its magnitude only if it is >= both neighbours along its
    quantised gradient direction. The outermost rows and columns are
    always zero.

    Returns:
        (H, W) float32 suppressed magnitude
    """
    magnitude = gradient.magnitude
    height, width = magnitude.shape
    suppressed = np.zeros_like(magnitude, dtype=np.float32)
    if height < 3 or width < 3:
        return suppressed

    buckets = quantize_direction(gradient.direction)[1:-1, 1:-1]
    centre = magnitude[1:-1, 1:-1]

    keep = np.zeros(centre.shape, dtype=bool)
    for angle, ((dy1, dx1), (dy2, dx2)) in _SUPPRESSION_OFFSETS.items():
        first = magnitude[1 + dy1 : height - 1 + dy1, 1 + dx1 : width - 1 + dx1]
        second = magnitude[1 + dy2 : height - 1 + dy2, 1 + dx2 : width - 1 + dx2]
        keep |= (buckets == angle) & (centre >= first) & (centre >= second)

    suppressed[1:-1, 1:-1] = np.where(keep, centre, 0.0)
    return suppressed


def double_threshold(suppressed: np.ndarray, low: int, high: int) -> np.ndarray:
    """
    Classify pixels as strong, weak or non-edge.

    strong: ``value >= high``; weak: ``low <= value < high``. Zero-valued
    pixels are never edges, which keeps ``low == 0`` meaningful.

    Returns:
        (H, W) int8 array of EdgeClass values
    """
    responding = suppressed > 0
    strong = responding & (suppressed >= high)
    weak = responding & (suppressed >= low) & ~strong

    classes = np.full(suppressed.shape, EdgeClass.NON_EDGE.value, dtype=np.int8)
    classes[weak] = EdgeClass.WEAK.value
    classes[strong] = EdgeClass.STRONG.value
    return classes


def hysteresis(classes: np.ndarray) -> np.ndarray:
    """
    Link weak pixels to strong ones.

    Strong and weak pixels are grouped into 8-connected components; a
    component survives only if it contains at least one strong pixel.

    Returns:
        (H, W) boolean edge mask
    """
    candidates = (classes != EdgeClass.NON_EDGE.value).astype(np.uint8)
    count, labels = cv2.connectedComponents(candidates, connectivity=8)

    keep = np.zeros(count, dtype=bool)
    keep[labels[classes == EdgeClass.STRONG.value]] = True
    keep[0] = False
    return keep[labels]


def canny(image: PixelBuffer, low_threshold: int, blur_amount: int = 1) -> PixelBuffer:
    """
    Canny edge detection.

    Args:
        image: Input RGBA frame (not modified)
        low_threshold: Low hysteresis threshold in [0, 255]; the high
            threshold is twice this value, capped at 255
        blur_amount: Smoothing radius; 0 still gets a radius-1 blur

    Returns:
        Binary edge map with the same dimensions

    Raises:
        InvalidThresholdError: If the threshold is outside [0, 255]
        KernelTooLargeError: If the smoothing kernel does not fit the image
    """
    low, high = thresholds_for(low_threshold)
    radius = max(int(blur_amount), EdgeConstants.CANNY_MIN_BLUR_RADIUS)

    smoothed = gaussian_blur(image, radius)
    gradient = compute_gradient(to_grayscale(smoothed), SOBEL)
    suppressed = non_maximum_suppression(gradient)
    classes = double_threshold(suppressed, low, high)
    edges = hysteresis(classes)

    logger.debug(
        f"canny: {image.width}x{image.height}, low={low}, high={high}, "
        f"strong={int((classes == EdgeClass.STRONG.value).sum())}, "
        f"edges={int(edges.sum())}"
    )
    return mask_to_pixel_buffer(edges)
