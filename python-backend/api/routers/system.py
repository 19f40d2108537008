"""
System API Router - Status and performance monitoring
"""

import logging
import time
from datetime import datetime

import psutil
from fastapi import APIRouter, Depends, Request

from api.dependencies import get_config, get_vision_service
from api.exceptions import safe_endpoint
from schemas import DebugSettings, ProcessingStats, SystemStatus

logger = logging.getLogger(__name__)

router = APIRouter()

# Track start time
START_TIME = time.time()


@router.get("/status")
@safe_endpoint
async def get_status(vision_service=Depends(get_vision_service)) -> SystemStatus:
    """Get system status"""
    process = psutil.Process()
    memory_info = process.memory_info()
    virtual_memory = psutil.virtual_memory()

    return SystemStatus(
        status="healthy",
        uptime=time.time() - START_TIME,
        memory_usage={
            "process_mb": memory_info.rss / 1024 / 1024,
            "system_percent": virtual_memory.percent,
            "available_mb": virtual_memory.available / 1024 / 1024,
        },
        processing=ProcessingStats(**vision_service.get_statistics()),
    )


@router.post("/stats/reset")
@safe_endpoint
async def reset_stats(vision_service=Depends(get_vision_service)) -> ProcessingStats:
    """Reset frame counters"""
    vision_service.reset_statistics()
    logger.info("Processing statistics reset")
    return ProcessingStats(**vision_service.get_statistics())


@router.post("/debug/{enable}")
@safe_endpoint
async def set_debug_mode(enable: bool, request: Request) -> DebugSettings:
    """Enable or disable debug logging"""
    config = get_config(request)
    if "system" in config:
        config["system"]["debug"] = enable

    log_level = logging.DEBUG if enable else logging.INFO
    logging.getLogger().setLevel(log_level)

    logger.info(f"Debug mode {'enabled' if enable else 'disabled'}")

    return DebugSettings(enabled=enable, verbose_logging=enable)


@router.get("/config")
@safe_endpoint
async def get_app_config(request: Request) -> dict:
    """Get current configuration"""
    return get_config(request)


@router.get("/health")
async def health_check() -> dict:
    """Simple health check"""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}
