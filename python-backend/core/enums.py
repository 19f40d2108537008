"""
Centralized enums for Edge Vision Flow.

The algorithm and backend sets are closed and fixed,
so dispatch is a plain mapping rather than a plugin registry.
"""

from enum import Enum


class EdgeMethod(str, Enum):
    """Edge detection algorithms selectable per frame."""

    SOBEL = "sobel"
    CANNY = "canny"
    ROBERTS = "roberts"
    PREWITT = "prewitt"
    LAPLACIAN = "laplacian"


class EdgeBackend(str, Enum):
    """Interchangeable implementations of the filter contract."""

    NATIVE = "native"
    OPENCV = "opencv"


class EdgeClass(int, Enum):
    """Double-threshold classification used by the Canny pipeline."""

    NON_EDGE = 0
    WEAK = 1
    STRONG = 2
