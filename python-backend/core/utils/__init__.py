"""
Utility modules for core functionality.

Modules:
- decorators: Timing helpers (timer, timed)
"""

from .decorators import timed, timer

__all__ = ["timer", "timed"]
