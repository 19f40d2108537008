"""
In-memory image representations for the edge detection core.

- PixelBuffer: RGBA frame handed over by the capture side
- GrayscaleBuffer: single-channel luminance derived from a PixelBuffer
- GradientField: per-pixel gradient magnitude and direction

Buffers hold flat row-major numpy arrays. Filters never write into an
input buffer; every operation allocates a fresh output.
"""

import logging
from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

from core.constants import ImageConstants
from core.exceptions import DimensionError, EdgeDetectionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PixelBuffer:
    """RGBA frame: ``width * height * 4`` bytes in row-major order."""

    width: int
    height: int
    pixels: np.ndarray

    def validate(self) -> "PixelBuffer":
        """
        Check that the sample count matches the declared dimensions.

        Returns:
            self, for chaining

        Raises:
            DimensionError: If ``len(pixels) != width * height * 4``
        """
        expected = self.width * self.height * ImageConstants.CHANNELS
        if self.width <= 0 or self.height <= 0 or np.size(self.pixels) != expected:
            raise DimensionError(self.width, self.height, int(np.size(self.pixels)))
        return self

    def as_array(self) -> np.ndarray:
        """Return a read-only (height, width, 4) uint8 view."""
        self.validate()
        view = np.asarray(self.pixels, dtype=np.uint8).reshape(
            self.height, self.width, ImageConstants.CHANNELS
        )
        view.flags.writeable = False
        return view

    @property
    def shape(self) -> tuple:
        return (self.height, self.width)

    @classmethod
    def from_array(cls, rgba: np.ndarray) -> "PixelBuffer":
        """
        Build a PixelBuffer from an (H, W, 4) array.

        The data is copied, so later changes to ``rgba`` do not leak in.
        """
        if rgba.ndim != 3 or rgba.shape[2] != ImageConstants.CHANNELS:
            raise DimensionError(
                rgba.shape[1] if rgba.ndim > 1 else 0,
                rgba.shape[0] if rgba.ndim > 0 else 0,
                int(rgba.size),
            )
        height, width = rgba.shape[:2]
        pixels = np.ascontiguousarray(rgba, dtype=np.uint8).reshape(-1).copy()
        return cls(width=width, height=height, pixels=pixels)

    @classmethod
    def from_bytes(cls, width: int, height: int, data: Union[bytes, Sequence[int]]) -> "PixelBuffer":
        """Wrap raw RGBA bytes (or a flat int sequence) without reshaping."""
        if isinstance(data, (bytes, bytearray)):
            pixels = np.frombuffer(bytes(data), dtype=np.uint8).copy()
        else:
            pixels = np.asarray(data, dtype=np.uint8)
        return cls(width=width, height=height, pixels=pixels)

    @classmethod
    def filled(cls, width: int, height: int, rgba: Sequence[int]) -> "PixelBuffer":
        """Constant-colour buffer."""
        pixels = np.tile(np.asarray(rgba, dtype=np.uint8), width * height)
        return cls(width=width, height=height, pixels=pixels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.pixels, other.pixels)
        )


@dataclass(frozen=True)
class GrayscaleBuffer:
    """Single-channel luminance: ``width * height`` bytes."""

    width: int
    height: int
    samples: np.ndarray

    def as_array(self) -> np.ndarray:
        """Return a read-only (height, width) uint8 view."""
        if np.size(self.samples) != self.width * self.height:
            raise DimensionError(self.width, self.height, int(np.size(self.samples)), channels=1)
        view = np.asarray(self.samples, dtype=np.uint8).reshape(self.height, self.width)
        view.flags.writeable = False
        return view

    @classmethod
    def from_array(cls, gray: np.ndarray) -> "GrayscaleBuffer":
        """Build from a 2D array, rounding half-up and clamping to [0, 255]."""
        gray = np.asarray(gray)
        if gray.ndim != 2:
            raise DimensionError(0, 0, int(gray.size), channels=1)
        if gray.dtype != np.uint8:
            gray = np.clip(np.floor(gray.astype(np.float64) + 0.5), 0, 255).astype(np.uint8)
        height, width = gray.shape
        return cls(width=width, height=height, samples=gray.reshape(-1).copy())


@dataclass(frozen=True)
class GradientField:
    """Gradient magnitude and direction (radians in [-pi, pi]) per pixel."""

    width: int
    height: int
    magnitude: np.ndarray
    direction: np.ndarray


def to_grayscale(buf: PixelBuffer) -> GrayscaleBuffer:
    """
    Convert an RGBA frame to luminance.

    ``Y = 0.299 R + 0.587 G + 0.114 B``, rounded to the nearest integer and
    clamped to [0, 255]. Alpha is ignored.

    Args:
        buf: Input frame

    Returns:
        GrayscaleBuffer with the same dimensions

    Raises:
        DimensionError: If the buffer length does not match width*height*4
    """
    rgba = buf.as_array().astype(np.float64)
    luma = (
        ImageConstants.LUMA_RED * rgba[:, :, 0]
        + ImageConstants.LUMA_GREEN * rgba[:, :, 1]
        + ImageConstants.LUMA_BLUE * rgba[:, :, 2]
    )
    return GrayscaleBuffer.from_array(luma)


def from_grayscale(gray: GrayscaleBuffer, fill_alpha: int = ImageConstants.OPAQUE_ALPHA) -> PixelBuffer:
    """
    Replicate a single channel into R, G and B with a constant alpha.

    Args:
        gray: Single-channel image
        fill_alpha: Alpha value for every pixel, in [0, 255]

    Returns:
        Displayable RGBA PixelBuffer

    Raises:
        EdgeDetectionError: If fill_alpha is outside [0, 255]
    """
    if not ImageConstants.MIN_INTENSITY <= fill_alpha <= ImageConstants.MAX_INTENSITY:
        raise EdgeDetectionError(f"Alpha {fill_alpha} outside [0, 255]")

    samples = gray.as_array()
    rgba = np.empty((gray.height, gray.width, ImageConstants.CHANNELS), dtype=np.uint8)
    rgba[:, :, 0] = samples
    rgba[:, :, 1] = samples
    rgba[:, :, 2] = samples
    rgba[:, :, 3] = fill_alpha
    return PixelBuffer(width=gray.width, height=gray.height, pixels=rgba.reshape(-1))
