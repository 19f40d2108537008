"""
Shared FastAPI dependencies for Edge Vision Flow.
"""

import logging
from typing import Any, Dict

from fastapi import Request

from api.exceptions import ServiceNotInitializedException
from services.vision_service import VisionService

logger = logging.getLogger(__name__)


def get_vision_service(request: Request) -> VisionService:
    """
    Get the VisionService instance from app state.

    Raises:
        ServiceNotInitializedException: If the lifespan handler has not run
    """
    try:
        return request.app.state.vision_service
    except AttributeError as e:
        logger.error(f"Vision service not initialized in app state: {e}")
        raise ServiceNotInitializedException("VisionService")


def get_config(request: Request) -> Dict[str, Any]:
    """
    Get application configuration.

    Returns:
        Configuration dictionary (empty if not set)
    """
    try:
        return request.app.state.config
    except AttributeError:
        logger.warning("Config not found in app state, using defaults")
        return {}
