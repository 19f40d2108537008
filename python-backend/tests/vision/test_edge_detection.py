"""
Tests for FilterConfig and method dispatch
"""

import pytest
from pydantic import ValidationError

from core.enums import EdgeBackend, EdgeMethod
from core.exceptions import DimensionError
from core.image.buffers import PixelBuffer
from vision.blur import gaussian_blur
from vision.canny import canny
from vision.edge_detection import (
    NATIVE_FILTERS,
    EdgeDetector,
    FilterConfig,
    detect_edges,
    get_filters,
)
from vision.gradients import prewitt, roberts, sobel
from vision.laplacian import laplacian


class TestFilterConfig:
    """Test per-frame configuration validation"""

    def test_defaults(self):
        config = FilterConfig()
        assert config.method == EdgeMethod.SOBEL
        assert config.threshold == 40
        assert config.blur_amount == 1

    def test_method_from_string(self):
        assert FilterConfig(method="laplacian").method == EdgeMethod.LAPLACIAN

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"threshold": 256},
            {"threshold": -1},
            {"blur_amount": -1},
            {"blur_amount": 11},
            {"method": "scharr"},
            {"colour": "red"},
        ],
    )
    def test_rejects_invalid_values(self, kwargs):
        with pytest.raises(ValidationError):
            FilterConfig(**kwargs)

    def test_immutable(self):
        config = FilterConfig()
        with pytest.raises(ValidationError):
            config.threshold = 10


class TestDispatch:
    """Test routing a frame to the configured operator"""

    @pytest.mark.parametrize(
        "method, operator",
        [
            (EdgeMethod.SOBEL, sobel),
            (EdgeMethod.PREWITT, prewitt),
            (EdgeMethod.ROBERTS, roberts),
            (EdgeMethod.LAPLACIAN, laplacian),
        ],
    )
    def test_no_blur_runs_operator_directly(self, test_image, method, operator):
        config = FilterConfig(method=method, threshold=50, blur_amount=0)
        assert detect_edges(test_image, config) == operator(test_image, 50)

    def test_blur_runs_before_operator(self, test_image):
        """Non-Canny methods are pre-blurred when blur_amount > 0"""
        config = FilterConfig(method=EdgeMethod.SOBEL, threshold=30, blur_amount=2)
        expected = sobel(gaussian_blur(test_image, 2), 30)
        assert detect_edges(test_image, config) == expected

    def test_canny_blurs_once(self, test_image):
        """Canny does its own smoothing with the configured amount"""
        config = FilterConfig(method=EdgeMethod.CANNY, threshold=30, blur_amount=2)
        assert detect_edges(test_image, config) == canny(test_image, 30, blur_amount=2)

    def test_default_config(self, test_image):
        """Sobel, threshold 40, blur 1 when no config is given"""
        expected = sobel(gaussian_blur(test_image, 1), 40)
        assert EdgeDetector().detect(test_image) == expected

    @pytest.mark.parametrize("method", list(EdgeMethod))
    def test_dimensions_preserved(self, test_image, method):
        result = detect_edges(test_image, FilterConfig(method=method))
        assert (result.width, result.height) == (test_image.width, test_image.height)

    def test_rejects_malformed_frame(self):
        frame = PixelBuffer.from_bytes(4, 4, bytes(10))
        with pytest.raises(DimensionError):
            detect_edges(frame)

    def test_native_backend(self):
        assert get_filters(EdgeBackend.NATIVE) is NATIVE_FILTERS
        assert get_filters("native") is NATIVE_FILTERS
        assert EdgeDetector().backend == EdgeBackend.NATIVE

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            get_filters("cuda")
