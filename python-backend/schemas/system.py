"""
System API models.
"""

from typing import Dict

from pydantic import BaseModel


class ProcessingStats(BaseModel):
    """Frame counters kept by the edge detection service"""

    frames_processed: int
    frames_failed: int
    total_processing_time_ms: int
    avg_processing_time_ms: float


class SystemStatus(BaseModel):
    """System status"""

    status: str
    uptime: float
    memory_usage: Dict[str, float]
    processing: ProcessingStats


class DebugSettings(BaseModel):
    """Debug settings"""

    enabled: bool
    verbose_logging: bool
