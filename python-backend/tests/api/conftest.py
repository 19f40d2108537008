"""
Pytest configuration for API integration tests
"""

import pytest
from fastapi.testclient import TestClient

from core.image.converters import ImageConverters


@pytest.fixture(scope="function")
def client():
    """
    Create a test client with properly initialized app state.
    Each test gets a fresh service so frame counters start at zero.
    """
    from config import get_settings
    from main import app
    from services.vision_service import VisionService

    app.state.vision_service = VisionService()
    app.state.config = get_settings().to_dict()

    # Create test client (no context manager to avoid running the lifespan)
    test_client = TestClient(app, raise_server_exceptions=False)

    yield test_client


@pytest.fixture
def encoded_image(test_image):
    """Noisy test frame as base64 PNG"""
    return ImageConverters.to_base64(test_image)


@pytest.fixture
def encoded_step(step_image):
    """8x8 vertical step as base64 PNG"""
    return ImageConverters.to_base64(step_image)
