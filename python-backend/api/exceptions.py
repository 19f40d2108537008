"""
HTTP-layer exceptions and handlers.

Domain errors from the filter core are input-validation failures and map
to 400 responses carrying the error kind; anything unexpected is a 500.
"""

import functools
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from core.exceptions import EdgeDetectionError
from core.image.converters import ImageDecodeError

logger = logging.getLogger(__name__)


class ServiceNotInitializedException(HTTPException):
    """Service missing from app state"""

    def __init__(self, name: str):
        super().__init__(status_code=500, detail=f"Internal server error: {name} not initialized")


def safe_endpoint(func):
    """
    Decorator for async endpoints.

    HTTP and domain errors pass through to the registered handlers;
    anything else is logged with its traceback and re-raised.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except (HTTPException, EdgeDetectionError, ImageDecodeError):
            raise
        except Exception as e:
            logger.error(f"Unhandled error in {func.__name__}: {e}", exc_info=True)
            raise

    return wrapper


async def edge_detection_error_handler(request: Request, exc: EdgeDetectionError) -> JSONResponse:
    logger.warning(f"{exc.kind} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=400, content={"detail": exc.message, "error": exc.kind})


async def image_decode_error_handler(request: Request, exc: ImageDecodeError) -> JSONResponse:
    logger.warning(f"image_decode_error on {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"detail": str(exc), "error": "image_decode_error"})


def register_exception_handlers(app: FastAPI) -> None:
    """Attach domain error handlers to the app."""
    app.add_exception_handler(EdgeDetectionError, edge_detection_error_handler)
    app.add_exception_handler(ImageDecodeError, image_decode_error_handler)
