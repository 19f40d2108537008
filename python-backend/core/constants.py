"""
Constants and configuration values for Edge Vision Flow.
Centralizes all magic numbers used by the edge detection pipeline.
"""


# Pixel buffer constants
class ImageConstants:
    """Constants related to pixel buffers and image transport."""

    CHANNELS = 4  # RGBA
    OPAQUE_ALPHA = 255

    # Display range
    MIN_INTENSITY = 0
    MAX_INTENSITY = 255

    # ITU-R BT.601 luma weights
    LUMA_RED = 0.299
    LUMA_GREEN = 0.587
    LUMA_BLUE = 0.114

    # Transport limits
    MAX_IMAGE_DIMENSION = 4096
    DEFAULT_ENCODE_FORMAT = "PNG"


# Edge detection constants
class EdgeConstants:
    """Constants for the edge detection filters."""

    # Driver defaults
    DEFAULT_THRESHOLD = 40
    DEFAULT_BLUR_AMOUNT = 1

    # Threshold range
    MIN_THRESHOLD = 0
    MAX_THRESHOLD = 255

    # Blur
    MIN_BLUR_AMOUNT = 0
    MAX_BLUR_RADIUS = 10
    MIN_GAUSSIAN_SIGMA = 0.8

    # Canny
    CANNY_HIGH_RATIO = 2
    CANNY_MIN_BLUR_RADIUS = 1

    # Non-maximum suppression bins (degrees, folded into [0, 180))
    NMS_BIN_HALF_WIDTH = 22.5


# Edge map output
EDGE_VALUE = 255
NON_EDGE_VALUE = 0
