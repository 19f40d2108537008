"""
Vision Service - Business logic for edge detection requests.

This service sits between the HTTP layer and the stateless filter core:
it decodes frames, applies per-request configuration, runs the selected
backend, encodes the result and keeps frame statistics.
"""

import logging
from threading import RLock
from typing import Any, Callable, Dict, Optional, Tuple

from core.constants import ImageConstants
from core.enums import EdgeBackend
from core.image.buffers import PixelBuffer
from core.image.converters import ImageConverters
from core.utils.decorators import timer
from vision.edge_detection import EdgeDetector, FilterConfig, get_filters
from vision.thresholding import count_edge_pixels

logger = logging.getLogger(__name__)


class VisionService:
    """
    Service for edge detection operations.

    Filters are pure; the only mutable state here is the frame counters,
    which never feed back into processing.
    """

    def __init__(
        self,
        defaults: Optional[FilterConfig] = None,
        default_backend: EdgeBackend = EdgeBackend.NATIVE,
        max_image_dimension: int = ImageConstants.MAX_IMAGE_DIMENSION,
    ):
        """
        Initialize vision service.

        Args:
            defaults: Configuration used for fields a request leaves out
            default_backend: Backend used when a request does not choose one
            max_image_dimension: Largest accepted frame width or height
        """
        self.defaults = defaults or FilterConfig()
        self.default_backend = EdgeBackend(default_backend)
        self.max_image_dimension = max_image_dimension

        # Statistics
        self.frames_processed = 0
        self.frames_failed = 0
        self.total_processing_time = 0
        self.lock = RLock()

        logger.info(
            f"Vision service initialized (method={self.defaults.method.value}, "
            f"threshold={self.defaults.threshold}, blur={self.defaults.blur_amount}, "
            f"backend={self.default_backend.value})"
        )

    def _execute(
        self, label: str, operation: Callable[[], PixelBuffer]
    ) -> Tuple[PixelBuffer, str, int]:
        """
        Run one frame operation with timing, encoding and bookkeeping.

        Returns:
            Tuple of (result buffer, result as base64 PNG, processing_time_ms)
        """
        try:
            with timer() as t:
                result = operation()
                result_base64 = ImageConverters.to_base64(result)
        except Exception as e:
            with self.lock:
                self.frames_failed += 1
            logger.error(f"{label} failed: {e}")
            raise

        processing_time_ms = t["ms"]
        with self.lock:
            self.frames_processed += 1
            self.total_processing_time += processing_time_ms

        return result, result_base64, processing_time_ms

    def decode(self, image_base64: str) -> PixelBuffer:
        """Decode a base64 frame, enforcing the size limit."""
        return ImageConverters.from_base64(image_base64, max_dimension=self.max_image_dimension)

    def resolve_backend(self, backend: Optional[EdgeBackend]) -> EdgeBackend:
        return EdgeBackend(backend) if backend is not None else self.default_backend

    def detect_edges(
        self,
        image_base64: str,
        config: FilterConfig,
        backend: Optional[EdgeBackend] = None,
    ) -> Tuple[PixelBuffer, str, int]:
        """
        Run edge detection on one encoded frame.

        Args:
            image_base64: Base64 encoded PNG/JPEG frame
            config: Fully resolved filter configuration
            backend: Filter implementation (service default when None)

        Returns:
            Tuple of (edge map, edge map as base64 PNG, processing_time_ms)
        """
        backend = self.resolve_backend(backend)
        detector = EdgeDetector(backend)

        def operation() -> PixelBuffer:
            frame = self.decode(image_base64)
            return detector.detect(frame, config)

        edge_map, result_base64, processing_time_ms = self._execute("Edge detection", operation)

        logger.info(
            f"Edge detection ({config.method.value}, {backend.value}) on "
            f"{edge_map.width}x{edge_map.height}: {count_edge_pixels(edge_map)} edge pixels "
            f"in {processing_time_ms} ms"
        )
        return edge_map, result_base64, processing_time_ms

    def blur(
        self, image_base64: str, blur_amount: int, backend: Optional[EdgeBackend] = None
    ) -> Tuple[PixelBuffer, str, int]:
        """
        Gaussian-blur one encoded frame.

        Returns:
            Tuple of (blurred frame, blurred frame as base64 PNG, processing_time_ms)
        """
        filters = get_filters(self.resolve_backend(backend))

        def operation() -> PixelBuffer:
            return filters.gaussian_blur(self.decode(image_base64), blur_amount)

        return self._execute("Gaussian blur", operation)

    def get_statistics(self) -> Dict[str, Any]:
        """Frame counters for the status endpoint."""
        with self.lock:
            avg = (
                self.total_processing_time / self.frames_processed
                if self.frames_processed
                else 0.0
            )
            return {
                "frames_processed": self.frames_processed,
                "frames_failed": self.frames_failed,
                "total_processing_time_ms": self.total_processing_time,
                "avg_processing_time_ms": round(avg, 2),
            }

    def reset_statistics(self) -> None:
        with self.lock:
            self.frames_processed = 0
            self.frames_failed = 0
            self.total_processing_time = 0
