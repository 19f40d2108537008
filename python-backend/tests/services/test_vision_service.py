"""
Tests for VisionService
"""

import numpy as np
import pytest

from core.enums import EdgeBackend, EdgeMethod
from core.exceptions import KernelTooLargeError
from core.image.buffers import PixelBuffer
from core.image.converters import ImageConverters, ImageDecodeError
from services.vision_service import VisionService
from vision.edge_detection import FilterConfig, detect_edges


class TestVisionService:
    """Test VisionService functionality"""

    @pytest.fixture
    def encoded_image(self, test_image):
        return ImageConverters.to_base64(test_image)

    def test_initialization(self, vision_service):
        assert vision_service.defaults == FilterConfig()
        assert vision_service.default_backend == EdgeBackend.NATIVE
        assert vision_service.get_statistics() == {
            "frames_processed": 0,
            "frames_failed": 0,
            "total_processing_time_ms": 0,
            "avg_processing_time_ms": 0.0,
        }

    def test_detect_edges(self, vision_service, test_image, encoded_image):
        """Service output matches the core and round-trips through PNG"""
        config = FilterConfig(method=EdgeMethod.PREWITT, threshold=35, blur_amount=0)
        edge_map, result_base64, processing_time = vision_service.detect_edges(
            encoded_image, config
        )

        assert edge_map == detect_edges(test_image, config)
        assert ImageConverters.from_base64(result_base64) == edge_map
        assert processing_time >= 1

    def test_statistics_updated(self, vision_service, encoded_image):
        vision_service.detect_edges(encoded_image, FilterConfig())
        vision_service.blur(encoded_image, 2)

        stats = vision_service.get_statistics()
        assert stats["frames_processed"] == 2
        assert stats["frames_failed"] == 0
        assert stats["total_processing_time_ms"] >= 2

    def test_failure_counted_and_raised(self, vision_service):
        tiny = ImageConverters.to_base64(PixelBuffer.filled(2, 2, (1, 2, 3, 255)))
        with pytest.raises(KernelTooLargeError):
            vision_service.detect_edges(tiny, FilterConfig(method=EdgeMethod.SOBEL, blur_amount=0))

        assert vision_service.get_statistics()["frames_failed"] == 1
        assert vision_service.get_statistics()["frames_processed"] == 0

    def test_invalid_payload(self, vision_service):
        with pytest.raises(ImageDecodeError):
            vision_service.detect_edges("not-an-image!", FilterConfig())
        assert vision_service.get_statistics()["frames_failed"] == 1

    def test_max_dimension_enforced(self, encoded_image):
        service = VisionService(max_image_dimension=16)
        with pytest.raises(ImageDecodeError):
            service.blur(encoded_image, 1)

    def test_blur(self, vision_service, test_image, encoded_image):
        blurred, _, _ = vision_service.blur(encoded_image, 2)
        assert (blurred.width, blurred.height) == (test_image.width, test_image.height)
        assert not np.array_equal(blurred.pixels, test_image.pixels)

    def test_backend_resolution(self):
        service = VisionService(default_backend=EdgeBackend.OPENCV)
        assert service.resolve_backend(None) == EdgeBackend.OPENCV
        assert service.resolve_backend(EdgeBackend.NATIVE) == EdgeBackend.NATIVE

    def test_reset_statistics(self, vision_service, encoded_image):
        vision_service.detect_edges(encoded_image, FilterConfig())
        vision_service.reset_statistics()
        assert vision_service.get_statistics()["frames_processed"] == 0


class TestImageConverters:
    """Test base64 transport encoding"""

    def test_png_round_trip_keeps_alpha(self):
        rgba = np.zeros((3, 5, 4), dtype=np.uint8)
        rgba[:, :, 0] = 17
        rgba[:, :, 3] = 128
        buf = PixelBuffer.from_array(rgba)

        assert ImageConverters.from_base64(ImageConverters.to_base64(buf)) == buf

    def test_data_url_prefix_accepted(self, black_image):
        encoded = "data:image/png;base64," + ImageConverters.to_base64(black_image)
        assert ImageConverters.from_base64(encoded) == black_image

    def test_rgb_jpeg_becomes_opaque_rgba(self, uniform_image):
        decoded = ImageConverters.from_base64(ImageConverters.to_base64(uniform_image, "JPEG"))
        assert (decoded.width, decoded.height) == (16, 12)
        assert np.all(decoded.as_array()[:, :, 3] == 255)

    @pytest.mark.parametrize("payload", ["%%%", "aGVsbG8gd29ybGQ="])
    def test_undecodable_payload(self, payload):
        with pytest.raises(ImageDecodeError):
            ImageConverters.from_base64(payload)

    def test_bilevel_png_decodes_to_opaque_black(self, bilevel_png):
        decoded = ImageConverters.from_base64(bilevel_png(8, 4))
        assert (decoded.width, decoded.height) == (8, 4)
        assert decoded == PixelBuffer.filled(8, 4, (0, 0, 0, 255))

    def test_size_checked_before_pixel_data(self, bilevel_png):
        """Declared dimensions are rejected without decoding the truncated body"""
        with pytest.raises(ImageDecodeError, match="exceeds maximum dimension"):
            ImageConverters.from_base64(bilevel_png(5000, 2, rows=1))

    def test_decompression_bomb_is_decode_error(self, bilevel_png):
        with pytest.raises(ImageDecodeError):
            ImageConverters.from_base64(bilevel_png(16000, 16000, rows=1))
