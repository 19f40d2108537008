"""
API Routers for Edge Vision Flow
"""

from . import system, vision

__all__ = ["vision", "system"]
