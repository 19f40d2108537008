"""
Edge detection front door: per-frame configuration and method dispatch.
"""

import logging
from typing import Callable, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field

from core.constants import EdgeConstants
from core.enums import EdgeBackend, EdgeMethod
from core.image.buffers import PixelBuffer
from core.utils.decorators import timed
from vision.blur import gaussian_blur
from vision.canny import canny
from vision.gradients import prewitt, roberts, sobel
from vision.laplacian import laplacian

logger = logging.getLogger(__name__)


class FilterConfig(BaseModel):
    """
    Per-frame edge detection configuration.

    Supplied fresh by the caller for every frame; immutable once built.
    For Canny, ``threshold`` is the low threshold.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", use_enum_values=False)

    method: EdgeMethod = Field(
        default=EdgeMethod.SOBEL,
        description="Edge detection method (sobel, canny, roberts, prewitt, laplacian)",
    )
    threshold: int = Field(
        default=EdgeConstants.DEFAULT_THRESHOLD,
        ge=EdgeConstants.MIN_THRESHOLD,
        le=EdgeConstants.MAX_THRESHOLD,
        description="Edge threshold (Canny: low threshold, high = 2x)",
    )
    blur_amount: int = Field(
        default=EdgeConstants.DEFAULT_BLUR_AMOUNT,
        ge=EdgeConstants.MIN_BLUR_AMOUNT,
        le=EdgeConstants.MAX_BLUR_RADIUS,
        description="Gaussian blur radius applied before detection (0 disables)",
    )


class FilterSet(NamedTuple):
    """One implementation of the six filter entry points."""

    gaussian_blur: Callable[[PixelBuffer, int], PixelBuffer]
    sobel: Callable[[PixelBuffer, int], PixelBuffer]
    prewitt: Callable[[PixelBuffer, int], PixelBuffer]
    roberts: Callable[[PixelBuffer, int], PixelBuffer]
    laplacian: Callable[[PixelBuffer, int], PixelBuffer]
    canny: Callable[..., PixelBuffer]

    def operator(self, method: EdgeMethod) -> Callable[[PixelBuffer, int], PixelBuffer]:
        """Single-threshold operator for a non-Canny method."""
        return {
            EdgeMethod.SOBEL: self.sobel,
            EdgeMethod.PREWITT: self.prewitt,
            EdgeMethod.ROBERTS: self.roberts,
            EdgeMethod.LAPLACIAN: self.laplacian,
        }[method]


NATIVE_FILTERS = FilterSet(
    gaussian_blur=gaussian_blur,
    sobel=sobel,
    prewitt=prewitt,
    roberts=roberts,
    laplacian=laplacian,
    canny=canny,
)


def get_filters(backend: EdgeBackend = EdgeBackend.NATIVE) -> FilterSet:
    """Resolve the filter implementation for a backend."""
    backend = EdgeBackend(backend)
    if backend == EdgeBackend.OPENCV:
        from vision.opencv_backend import OPENCV_FILTERS

        return OPENCV_FILTERS
    return NATIVE_FILTERS


class EdgeDetector:
    """Stateless edge detection processor bound to one backend."""

    def __init__(self, backend: EdgeBackend = EdgeBackend.NATIVE):
        self.backend = EdgeBackend(backend)
        self.filters = get_filters(self.backend)

    @timed
    def detect(self, image: PixelBuffer, config: Optional[FilterConfig] = None) -> PixelBuffer:
        """
        Run the configured detector on one frame.

        Non-Canny methods get an optional Gaussian pre-blur when
        ``blur_amount > 0``. Canny performs its own smoothing stage with
        ``blur_amount``, so the frame is never blurred twice.

        Args:
            image: Input RGBA frame (not modified)
            config: Per-frame configuration; defaults when omitted

        Returns:
            Edge map with the same dimensions as ``image``
        """
        if config is None:
            config = FilterConfig()
        image.validate()

        method = EdgeMethod(config.method)
        if method == EdgeMethod.CANNY:
            result = self.filters.canny(image, config.threshold, config.blur_amount)
        else:
            source = image
            if config.blur_amount > 0:
                source = self.filters.gaussian_blur(image, config.blur_amount)
            result = self.filters.operator(method)(source, config.threshold)

        logger.debug(
            f"Detected edges with {method.value} ({self.backend.value}) "
            f"on {image.width}x{image.height}"
        )
        return result


def detect_edges(
    image: PixelBuffer,
    config: Optional[FilterConfig] = None,
    backend: EdgeBackend = EdgeBackend.NATIVE,
) -> PixelBuffer:
    """Dispatch one frame to the configured method on the given backend."""
    return EdgeDetector(backend).detect(image, config)
