"""
Application configuration.

Settings are Pydantic models populated from environment variables with
the ``EDGE_`` prefix, e.g. ``EDGE_LOG_LEVEL=DEBUG`` or ``EDGE_API_PORT=8000``.
"""

import logging
import os
from functools import lru_cache
from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator

from core.constants import EdgeConstants, ImageConstants
from core.enums import EdgeBackend, EdgeMethod

logger = logging.getLogger(__name__)

ENV_PREFIX = "EDGE_"


def _env(name: str, default: Any) -> Any:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(f"{ENV_PREFIX}{name}")
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class SystemSettings(BaseModel):
    """Process-level settings."""

    debug: bool = False
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {value}")
        return value


class APISettings(BaseModel):
    """HTTP server settings."""

    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)
    cors_enabled: bool = True
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class ProcessingSettings(BaseModel):
    """Defaults applied when a request omits filter parameters."""

    default_method: EdgeMethod = EdgeMethod.SOBEL
    default_threshold: int = Field(
        default=EdgeConstants.DEFAULT_THRESHOLD,
        ge=EdgeConstants.MIN_THRESHOLD,
        le=EdgeConstants.MAX_THRESHOLD,
    )
    default_blur_amount: int = Field(
        default=EdgeConstants.DEFAULT_BLUR_AMOUNT,
        ge=EdgeConstants.MIN_BLUR_AMOUNT,
        le=EdgeConstants.MAX_BLUR_RADIUS,
    )
    default_backend: EdgeBackend = EdgeBackend.NATIVE
    max_image_dimension: int = Field(default=ImageConstants.MAX_IMAGE_DIMENSION, ge=1)


class Settings(BaseModel):
    """Top-level settings container."""

    environment: str = "development"
    system: SystemSettings = Field(default_factory=SystemSettings)
    api: APISettings = Field(default_factory=APISettings)
    processing: ProcessingSettings = Field(default_factory=ProcessingSettings)

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-compatible dict of all settings."""
        return self.model_dump(mode="json")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``EDGE_*`` environment variables."""
        origins = _env("CORS_ORIGINS", "*")
        return cls(
            environment=_env("ENVIRONMENT", "development"),
            system=SystemSettings(
                debug=_env_bool("DEBUG", False),
                log_level=_env("LOG_LEVEL", "INFO"),
            ),
            api=APISettings(
                host=_env("API_HOST", "0.0.0.0"),
                port=int(_env("API_PORT", 8000)),
                cors_enabled=_env_bool("CORS_ENABLED", True),
                cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            ),
            processing=ProcessingSettings(
                default_method=_env("DEFAULT_METHOD", EdgeMethod.SOBEL.value),
                default_threshold=int(_env("DEFAULT_THRESHOLD", EdgeConstants.DEFAULT_THRESHOLD)),
                default_blur_amount=int(
                    _env("DEFAULT_BLUR_AMOUNT", EdgeConstants.DEFAULT_BLUR_AMOUNT)
                ),
                default_backend=_env("DEFAULT_BACKEND", EdgeBackend.NATIVE.value),
                max_image_dimension=int(
                    _env("MAX_IMAGE_DIMENSION", ImageConstants.MAX_IMAGE_DIMENSION)
                ),
            ),
        )


@lru_cache()
def get_settings() -> Settings:
    """Cached application settings."""
    settings = Settings.from_env()
    logger.debug(f"Loaded settings for environment '{settings.environment}'")
    return settings
