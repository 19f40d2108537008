"""
Edge Vision Flow - Main FastAPI Application
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Add parent directory to path
sys.path.append(str(Path(__file__).parent))

from api.exceptions import register_exception_handlers  # noqa: E402
from api.routers import system, vision  # noqa: E402
from config import get_settings  # noqa: E402
from services.vision_service import VisionService  # noqa: E402
from vision.edge_detection import FilterConfig  # noqa: E402

# Get configuration
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.system.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Suppress watchfiles debug messages
logging.getLogger("watchfiles").setLevel(logging.WARNING)


def create_vision_service() -> VisionService:
    """Build the vision service from settings."""
    processing = settings.processing
    return VisionService(
        defaults=FilterConfig(
            method=processing.default_method,
            threshold=processing.default_threshold,
            blur_amount=processing.default_blur_amount,
        ),
        default_backend=processing.default_backend,
        max_image_dimension=processing.max_image_dimension,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle"""
    # Startup
    logger.info("Starting Edge Vision Flow server...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Debug mode: {settings.system.debug}")

    app.state.vision_service = create_vision_service()
    app.state.config = settings.to_dict()
    app.state.debug = settings.system.debug

    yield

    # Shutdown
    stats = app.state.vision_service.get_statistics()
    logger.info(
        f"Shutting down Edge Vision Flow server after {stats['frames_processed']} frames..."
    )


# Create FastAPI app
app = FastAPI(
    title="Edge Vision Flow",
    description="Real-time edge detection service (Sobel, Prewitt, Roberts, Laplacian, Canny)",
    version="1.0.0",
    lifespan=lifespan,
)

if settings.api.cors_enabled:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(vision.router, prefix="/api/vision", tags=["Vision"])
app.include_router(system.router, prefix="/api/system", tags=["System"])


# Root endpoint
@app.get("/")
async def root():
    return {
        "name": "Edge Vision Flow",
        "status": "running",
        "version": "1.0.0",
        "endpoints": {
            "vision": "/api/vision",
            "system": "/api/system",
            "docs": "/docs",
        },
    }


# Health check endpoint
@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "services": {
            "vision_service": hasattr(app.state, "vision_service")
            and app.state.vision_service is not None,
        },
    }


# Error handler
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"detail": f"Internal server error: {str(exc)}"})


if __name__ == "__main__":
    logger.info(f"Serving on {settings.api.host}:{settings.api.port}")
    uvicorn.run(
        "main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.system.debug,
        log_level=settings.system.log_level.lower(),
    )
