"""
Vision API Router - Edge detection endpoints

Every endpoint follows the same pattern:
1. Validate request (Pydantic)
2. Call the vision service (returns result buffer, base64 PNG, timing)
3. Return a typed response
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_vision_service
from api.exceptions import safe_endpoint
from core.enums import EdgeBackend, EdgeMethod
from schemas import (
    BlurRequest,
    BlurResponse,
    EdgeDetectRequest,
    EdgeDetectResponse,
    MethodInfo,
    MethodsResponse,
)
from vision.thresholding import count_edge_pixels

logger = logging.getLogger(__name__)

router = APIRouter()

METHOD_DESCRIPTIONS = {
    EdgeMethod.SOBEL: "3x3 Sobel gradient magnitude, binary threshold",
    EdgeMethod.CANNY: "Blur, Sobel, non-maximum suppression, double threshold, hysteresis",
    EdgeMethod.ROBERTS: "2x2 Roberts Cross gradient magnitude, binary threshold",
    EdgeMethod.PREWITT: "3x3 Prewitt gradient magnitude, binary threshold",
    EdgeMethod.LAPLACIAN: "4-neighbour Laplacian absolute response, binary threshold",
}


@router.post("/edge-detect")
@safe_endpoint
async def edge_detect(
    request: EdgeDetectRequest,
    vision_service=Depends(get_vision_service),
) -> EdgeDetectResponse:
    """
    Run edge detection on one frame.

    INPUT:
    - image_base64: PNG/JPEG frame
    - method / threshold / blur_amount / backend: optional, server defaults apply

    OUTPUT:
    - image_base64: PNG edge map with the same width and height
    """
    config = request.to_filter_config(vision_service.defaults)
    backend = vision_service.resolve_backend(request.backend)

    edge_map, result_base64, processing_time = vision_service.detect_edges(
        request.image_base64, config, backend
    )

    return EdgeDetectResponse(
        image_base64=result_base64,
        width=edge_map.width,
        height=edge_map.height,
        method=config.method,
        backend=backend,
        threshold=config.threshold,
        blur_amount=config.blur_amount,
        edge_pixel_count=count_edge_pixels(edge_map),
        processing_time_ms=processing_time,
    )


@router.post("/blur")
@safe_endpoint
async def blur(
    request: BlurRequest,
    vision_service=Depends(get_vision_service),
) -> BlurResponse:
    """Gaussian-blur one frame."""
    blurred, result_base64, processing_time = vision_service.blur(
        request.image_base64, request.blur_amount, request.backend
    )
    return BlurResponse(
        image_base64=result_base64,
        width=blurred.width,
        height=blurred.height,
        blur_amount=request.blur_amount,
        processing_time_ms=processing_time,
    )


@router.get("/methods")
async def list_methods(vision_service=Depends(get_vision_service)) -> MethodsResponse:
    """List available edge detection methods and server defaults."""
    return MethodsResponse(
        methods=[
            MethodInfo(
                name=method,
                description=METHOD_DESCRIPTIONS[method],
            )
            for method in EdgeMethod
        ],
        backends=list(EdgeBackend),
        defaults=vision_service.defaults,
        default_backend=vision_service.default_backend,
    )
