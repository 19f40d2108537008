"""
Schemas Package

This package contains all Pydantic schemas for data validation and serialization,
organized by domain:
- vision: edge detection and blur requests/responses
- system: status and debug models
"""

# Re-export enums and config from their home modules for convenience
from core.enums import EdgeBackend, EdgeMethod
from vision.edge_detection import FilterConfig

from .system import DebugSettings, ProcessingStats, SystemStatus
from .vision import (
    BlurRequest,
    BlurResponse,
    EdgeDetectRequest,
    EdgeDetectResponse,
    MethodInfo,
    MethodsResponse,
)

__all__ = [
    # Vision models
    "EdgeDetectRequest",
    "EdgeDetectResponse",
    "BlurRequest",
    "BlurResponse",
    "MethodInfo",
    "MethodsResponse",
    # System models
    "SystemStatus",
    "ProcessingStats",
    "DebugSettings",
    # Enums and config
    "EdgeMethod",
    "EdgeBackend",
    "FilterConfig",
]
