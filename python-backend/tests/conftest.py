"""
Pytest configuration and fixtures for Edge Vision Flow tests
"""

import base64
import struct
import zlib

import numpy as np
import pytest

from core.image.buffers import PixelBuffer
from services.vision_service import VisionService


def _gray_frame(values) -> PixelBuffer:
    values = np.asarray(values, dtype=np.uint8)
    rgba = np.empty(values.shape + (4,), dtype=np.uint8)
    rgba[:, :, 0] = values
    rgba[:, :, 1] = values
    rgba[:, :, 2] = values
    rgba[:, :, 3] = 255
    return PixelBuffer.from_array(rgba)


def _edge_mask(edge_map: PixelBuffer) -> np.ndarray:
    return edge_map.as_array()[:, :, 0] == 255


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    crc = zlib.crc32(kind + data) & 0xFFFFFFFF
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", crc)


def _bilevel_png(width: int, height: int, rows=None) -> str:
    rows = height if rows is None else rows
    header = struct.pack(">IIBBBBB", width, height, 1, 0, 0, 0, 0)
    scanlines = b"\x00" * ((1 + (width + 7) // 8) * rows)
    png = (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", zlib.compress(scanlines))
        + _png_chunk(b"IEND", b"")
    )
    return base64.b64encode(png).decode("ascii")


@pytest.fixture
def gray_frame():
    """Factory: opaque RGBA frame whose R=G=B equal the given 2D values"""
    return _gray_frame


@pytest.fixture
def edge_mask():
    """Factory: boolean (H, W) mask of white pixels in an edge map"""
    return _edge_mask


@pytest.fixture
def bilevel_png():
    """Factory: base64 1-bit black PNG, optionally carrying fewer rows than declared"""
    return _bilevel_png


@pytest.fixture
def black_image():
    """4x4 all-black frame"""
    return PixelBuffer.filled(4, 4, (0, 0, 0, 255))


@pytest.fixture
def uniform_image():
    """16x12 constant colour frame"""
    return PixelBuffer.filled(16, 12, (90, 140, 200, 255))


@pytest.fixture
def bright_column_image():
    """4x4 dark frame with a bright column at x=2"""
    values = np.zeros((4, 4), dtype=np.uint8)
    values[:, 2] = 255
    return _gray_frame(values)


@pytest.fixture
def step_image():
    """8x8 vertical step: left half black, right half white"""
    values = np.zeros((8, 8), dtype=np.uint8)
    values[:, 4:] = 255
    return _gray_frame(values)


@pytest.fixture
def test_image():
    """Noisy 48x32 frame with a bright rectangle"""
    rng = np.random.default_rng(1234)
    rgba = rng.integers(0, 40, size=(32, 48, 4), dtype=np.uint8)
    rgba[8:24, 12:36, :3] = 220
    rgba[:, :, 3] = 255
    return PixelBuffer.from_array(rgba)


@pytest.fixture
def vision_service():
    """Create VisionService instance for testing"""
    return VisionService()
