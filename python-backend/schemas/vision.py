"""
Vision processing API models.

This module contains request and response models for:
- Edge detection on a single frame
- Gaussian blur of a single frame
- Listing the available methods
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from core.constants import EdgeConstants
from core.enums import EdgeBackend, EdgeMethod
from vision.edge_detection import FilterConfig


class EdgeDetectRequest(BaseModel):
    """Request to run edge detection on one frame"""

    model_config = ConfigDict(extra="forbid")

    image_base64: str = Field(..., min_length=1, description="Base64 encoded PNG/JPEG frame")
    method: Optional[EdgeMethod] = Field(
        None, description="Edge detection method (server default when omitted)"
    )
    threshold: Optional[int] = Field(
        None,
        ge=EdgeConstants.MIN_THRESHOLD,
        le=EdgeConstants.MAX_THRESHOLD,
        description="Edge threshold (Canny: low threshold)",
    )
    blur_amount: Optional[int] = Field(
        None,
        ge=EdgeConstants.MIN_BLUR_AMOUNT,
        le=EdgeConstants.MAX_BLUR_RADIUS,
        description="Gaussian blur radius (0 disables)",
    )
    backend: Optional[EdgeBackend] = Field(None, description="Filter implementation")

    def to_filter_config(self, defaults: FilterConfig) -> FilterConfig:
        """Merge the explicit request fields over the defaults."""
        return FilterConfig(
            method=self.method if self.method is not None else defaults.method,
            threshold=self.threshold if self.threshold is not None else defaults.threshold,
            blur_amount=(
                self.blur_amount if self.blur_amount is not None else defaults.blur_amount
            ),
        )


class EdgeDetectResponse(BaseModel):
    """Edge map for one frame"""

    image_base64: str = Field(..., description="Base64 encoded PNG edge map")
    width: int
    height: int
    method: EdgeMethod
    backend: EdgeBackend
    threshold: int
    blur_amount: int
    edge_pixel_count: int = Field(..., ge=0)
    processing_time_ms: int = Field(..., ge=0)


class BlurRequest(BaseModel):
    """Request to blur one frame"""

    model_config = ConfigDict(extra="forbid")

    image_base64: str = Field(..., min_length=1, description="Base64 encoded PNG/JPEG frame")
    blur_amount: int = Field(
        default=EdgeConstants.DEFAULT_BLUR_AMOUNT,
        ge=1,
        le=EdgeConstants.MAX_BLUR_RADIUS,
        description="Gaussian blur radius",
    )
    backend: Optional[EdgeBackend] = Field(None, description="Filter implementation")


class BlurResponse(BaseModel):
    """Blurred frame"""

    image_base64: str
    width: int
    height: int
    blur_amount: int
    processing_time_ms: int = Field(..., ge=0)


class MethodInfo(BaseModel):
    """Description of one edge detection method"""

    name: EdgeMethod
    description: str


class MethodsResponse(BaseModel):
    """Available methods and server defaults"""

    methods: List[MethodInfo]
    backends: List[EdgeBackend]
    defaults: FilterConfig
    default_backend: EdgeBackend
    canny_high_ratio: int = EdgeConstants.CANNY_HIGH_RATIO
