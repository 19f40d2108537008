"""
Domain exceptions raised by the edge detection core.

All of them are per-call input-validation failures. The core holds no
state between calls, so a caller can drop the offending frame and keep
going.
"""

from typing import Optional


class EdgeDetectionError(ValueError):
    """Base class for edge detection failures."""

    kind = "edge_detection_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DimensionError(EdgeDetectionError):
    """Buffer length does not match the declared width and height."""

    kind = "dimension_error"

    def __init__(self, width: int, height: int, actual: int, channels: int = 4):
        self.width = width
        self.height = height
        self.actual = actual
        self.expected = width * height * channels
        super().__init__(
            f"Buffer of {width}x{height}x{channels} needs {self.expected} samples, got {actual}"
        )


class KernelTooLargeError(EdgeDetectionError):
    """Kernel footprint exceeds the image in at least one dimension."""

    kind = "kernel_too_large"

    def __init__(self, kernel_shape: tuple, width: int, height: int):
        self.kernel_shape = tuple(kernel_shape)
        self.width = width
        self.height = height
        super().__init__(
            f"Kernel {self.kernel_shape[1]}x{self.kernel_shape[0]} does not fit "
            f"image {width}x{height}"
        )


class InvalidThresholdError(EdgeDetectionError):
    """Threshold outside [0, 255] or inverted low/high ordering."""

    kind = "invalid_threshold"

    def __init__(self, threshold: int, high: Optional[int] = None, reason: Optional[str] = None):
        self.threshold = threshold
        self.high = high
        if reason is None:
            reason = f"Threshold {threshold} outside [0, 255]"
        super().__init__(reason)
