"""
2D convolution engine shared by every spatial filter.

Kernels are applied as written (correlation, the same convention as
``cv2.filter2D``) with clamp-to-edge borders: taps that fall outside the
image read the nearest edge pixel. The sum is accumulated over shifted
views of an edge-padded plane, one kernel tap at a time, so every output
row is computed independently of every other row.
"""

import logging
from typing import Sequence, Union

import numpy as np

from core.constants import ImageConstants
from core.exceptions import KernelTooLargeError
from core.image.buffers import GrayscaleBuffer

logger = logging.getLogger(__name__)

KernelLike = Union[np.ndarray, Sequence[Sequence[float]]]


def as_kernel(kernel: KernelLike) -> np.ndarray:
    """Coerce a nested sequence to a 2D float32 kernel."""
    kernel = np.asarray(kernel, dtype=np.float32)
    if kernel.ndim == 1:
        kernel = kernel.reshape(1, -1)
    if kernel.ndim != 2 or kernel.size == 0:
        raise ValueError(f"Kernel must be a non-empty 2D array, got shape {kernel.shape}")
    return kernel


def kernel_anchor(kernel: np.ndarray) -> tuple:
    """
    Anchor (row, col) of a kernel.

    Odd kernels anchor on their centre; even kernels on the tap just
    above-left of centre, so a 2x2 kernel reads (x, y) .. (x+1, y+1).
    """
    kh, kw = kernel.shape
    return ((kh - 1) // 2, (kw - 1) // 2)


def check_kernel_fits(kernel: np.ndarray, width: int, height: int) -> None:
    """
    Require ``2 * radius + 1`` to fit the image along each axis.

    Raises:
        KernelTooLargeError: If the kernel footprint exceeds the image
    """
    kh, kw = kernel.shape
    if 2 * (kh // 2) + 1 > height or 2 * (kw // 2) + 1 > width:
        raise KernelTooLargeError(kernel.shape, width, height)


def convolve_plane(plane: np.ndarray, kernel: KernelLike) -> np.ndarray:
    """
    Apply a kernel to a single 2D plane with clamp-to-edge borders.

    Args:
        plane: (H, W) array of any numeric dtype
        kernel: 2D weight matrix

    Returns:
        (H, W) float32 array of raw, unclamped sums

    Raises:
        KernelTooLargeError: If the kernel does not fit the plane
    """
    kernel = as_kernel(kernel)
    height, width = plane.shape
    check_kernel_fits(kernel, width, height)

    kh, kw = kernel.shape
    top, left = kernel_anchor(kernel)
    bottom, right = kh - 1 - top, kw - 1 - left

    padded = np.pad(
        plane.astype(np.float32, copy=False),
        ((top, bottom), (left, right)),
        mode="edge",
    )

    result = np.zeros((height, width), dtype=np.float32)
    for ky in range(kh):
        for kx in range(kw):
            weight = kernel[ky, kx]
            if weight == 0:
                continue
            result += weight * padded[ky : ky + height, kx : kx + width]
    return result


def convolve(gray: GrayscaleBuffer, kernel: KernelLike, normalize: bool = False) -> np.ndarray:
    """
    Convolve a grayscale image with a kernel.

    Args:
        gray: Input luminance buffer
        kernel: 2D weight matrix
        normalize: Smoothing mode. The kernel is scaled to sum to 1 and the
            result is clipped to [0, 255]. Edge kernels leave this off and
            get raw signed sums; display clamping happens in the output stage.

    Returns:
        (height, width) float32 grid

    Raises:
        KernelTooLargeError: If ``radius * 2 + 1`` exceeds either dimension
    """
    kernel = as_kernel(kernel)
    if normalize:
        total = float(kernel.sum())
        if total != 0.0:
            kernel = kernel / total

    result = convolve_plane(gray.as_array(), kernel)

    if normalize:
        np.clip(result, ImageConstants.MIN_INTENSITY, ImageConstants.MAX_INTENSITY, out=result)

    logger.debug(
        f"Convolved {gray.width}x{gray.height} with {kernel.shape[1]}x{kernel.shape[0]} kernel"
    )
    return result
