"""
Output stage: turn scalar response fields into displayable edge maps.
"""

import logging

import numpy as np

from core.constants import EDGE_VALUE, NON_EDGE_VALUE, EdgeConstants, ImageConstants
from core.exceptions import InvalidThresholdError
from core.image.buffers import PixelBuffer

logger = logging.getLogger(__name__)


def validate_threshold(threshold: int) -> int:
    """
    Check that a threshold lies in [0, 255].

    Raises:
        InvalidThresholdError: If the value is out of range or not an integer
    """
    if isinstance(threshold, bool) or not isinstance(threshold, (int, np.integer)):
        raise InvalidThresholdError(threshold, reason=f"Threshold must be an integer, got {threshold!r}")
    if not EdgeConstants.MIN_THRESHOLD <= threshold <= EdgeConstants.MAX_THRESHOLD:
        raise InvalidThresholdError(int(threshold))
    return int(threshold)


def mask_to_pixel_buffer(mask: np.ndarray) -> PixelBuffer:
    """
    Pack a boolean (H, W) edge mask into an opaque RGBA buffer.

    Edge pixels become 255 in R, G and B; everything else 0.
    """
    height, width = mask.shape
    rgba = np.empty((height, width, ImageConstants.CHANNELS), dtype=np.uint8)
    intensity = np.where(mask, EDGE_VALUE, NON_EDGE_VALUE).astype(np.uint8)
    rgba[:, :, 0] = intensity
    rgba[:, :, 1] = intensity
    rgba[:, :, 2] = intensity
    rgba[:, :, 3] = ImageConstants.OPAQUE_ALPHA
    return PixelBuffer(width=width, height=height, pixels=rgba.reshape(-1))


def to_binary_edge_map(values: np.ndarray, threshold: int) -> PixelBuffer:
    """
    Map each value to 255 when ``value >= threshold``, else 0.

    Args:
        values: (H, W) response grid (e.g. gradient magnitude)
        threshold: Edge threshold in [0, 255]

    Returns:
        Binary EdgeMap as an opaque RGBA PixelBuffer
    """
    threshold = validate_threshold(threshold)
    mask = np.asarray(values) >= threshold
    logger.debug(f"Thresholded at {threshold}: {int(mask.sum())} edge pixels")
    return mask_to_pixel_buffer(mask)


def count_edge_pixels(edge_map: PixelBuffer) -> int:
    """Number of pixels whose red channel is set."""
    return int(np.count_nonzero(edge_map.as_array()[:, :, 0]))
