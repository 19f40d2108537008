"""
API Integration Tests for Vision Endpoints
"""

import numpy as np
import pytest

from core.image.buffers import PixelBuffer
from core.image.converters import ImageConverters


class TestVisionAPI:
    """Integration tests for vision API endpoints"""

    def test_edge_detect_defaults(self, client, encoded_image):
        """Omitted parameters fall back to server defaults"""
        response = client.post("/api/vision/edge-detect", json={"image_base64": encoded_image})

        assert response.status_code == 200
        data = response.json()

        assert data["method"] == "sobel"
        assert data["threshold"] == 40
        assert data["blur_amount"] == 1
        assert data["backend"] == "native"
        assert data["width"] == 48
        assert data["height"] == 32
        assert data["processing_time_ms"] > 0
        assert data["edge_pixel_count"] > 0

    @pytest.mark.parametrize("method", ["sobel", "canny", "roberts", "prewitt", "laplacian"])
    def test_edge_detect_methods(self, client, encoded_image, method):
        """Every method returns a same-size binary edge map"""
        request_data = {"image_base64": encoded_image, "method": method, "threshold": 50}
        response = client.post("/api/vision/edge-detect", json=request_data)

        assert response.status_code == 200
        data = response.json()
        assert data["method"] == method

        edge_map = ImageConverters.from_base64(data["image_base64"])
        assert (edge_map.width, edge_map.height) == (48, 32)
        assert set(np.unique(edge_map.as_array()[:, :, :3]).tolist()) <= {0, 255}

    def test_edge_detect_step(self, client, encoded_step):
        """Canny finds the step in an 8x8 frame"""
        request_data = {
            "image_base64": encoded_step,
            "method": "canny",
            "threshold": 40,
            "blur_amount": 1,
        }
        response = client.post("/api/vision/edge-detect", json=request_data)

        assert response.status_code == 200
        assert response.json()["edge_pixel_count"] == 12

    def test_edge_detect_opencv_backend(self, client, encoded_image):
        request_data = {"image_base64": encoded_image, "method": "sobel", "backend": "opencv"}
        response = client.post("/api/vision/edge-detect", json=request_data)

        assert response.status_code == 200
        assert response.json()["backend"] == "opencv"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"threshold": 300},
            {"threshold": -1},
            {"blur_amount": 11},
            {"method": "scharr"},
            {"backend": "cuda"},
        ],
    )
    def test_edge_detect_validation(self, client, encoded_image, overrides):
        """Out-of-range parameters are rejected before processing"""
        request_data = {"image_base64": encoded_image, **overrides}
        response = client.post("/api/vision/edge-detect", json=request_data)

        assert response.status_code == 422

    def test_edge_detect_invalid_image(self, client):
        response = client.post("/api/vision/edge-detect", json={"image_base64": "%%%"})

        assert response.status_code == 400
        assert "detail" in response.json()

    def test_edge_detect_decompression_bomb(self, client, bilevel_png):
        """Frames past Pillow's pixel limit are rejected as undecodable"""
        request_data = {"image_base64": bilevel_png(16000, 16000)}
        response = client.post("/api/vision/edge-detect", json=request_data)

        assert response.status_code == 400
        assert response.json()["error"] == "image_decode_error"

    def test_edge_detect_oversized_frame(self, client, bilevel_png):
        request_data = {"image_base64": bilevel_png(5000, 8)}
        response = client.post("/api/vision/edge-detect", json=request_data)

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "image_decode_error"
        assert "exceeds maximum dimension" in data["detail"]

    def test_edge_detect_kernel_too_large(self, client):
        """Frames smaller than the kernel map to a 400 with the error kind"""
        tiny = ImageConverters.to_base64(PixelBuffer.filled(2, 2, (0, 0, 0, 255)))
        request_data = {"image_base64": tiny, "method": "sobel", "blur_amount": 0}
        response = client.post("/api/vision/edge-detect", json=request_data)

        assert response.status_code == 400
        assert response.json()["error"] == "kernel_too_large"

    def test_blur(self, client, encoded_image):
        response = client.post(
            "/api/vision/blur", json={"image_base64": encoded_image, "blur_amount": 3}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["blur_amount"] == 3
        assert (data["width"], data["height"]) == (48, 32)

    def test_blur_kernel_too_large(self, client, encoded_step):
        """Radius 4 needs a 9x9 frame"""
        response = client.post(
            "/api/vision/blur", json={"image_base64": encoded_step, "blur_amount": 4}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "kernel_too_large"

    def test_blur_rejects_zero(self, client, encoded_image):
        response = client.post(
            "/api/vision/blur", json={"image_base64": encoded_image, "blur_amount": 0}
        )
        assert response.status_code == 422

    def test_list_methods(self, client):
        response = client.get("/api/vision/methods")

        assert response.status_code == 200
        data = response.json()

        names = [m["name"] for m in data["methods"]]
        assert names == ["sobel", "canny", "roberts", "prewitt", "laplacian"]
        assert data["backends"] == ["native", "opencv"]
        assert data["defaults"] == {"method": "sobel", "threshold": 40, "blur_amount": 1}
        assert data["canny_high_ratio"] == 2
