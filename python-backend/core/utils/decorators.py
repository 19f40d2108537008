"""
Timing helpers.
"""

import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Dict, Iterator

logger = logging.getLogger(__name__)


@contextmanager
def timer() -> Iterator[Dict[str, float]]:
    """
    Measure wall-clock time of a block.

    The yielded dict gets ``ms`` (int milliseconds) and ``seconds`` once the
    block exits, including when it raises.

    Example:
        >>> with timer() as t:
        ...     do_work()
        >>> t["ms"]
    """
    result: Dict[str, float] = {"ms": 0, "seconds": 0.0}
    start = time.perf_counter()
    try:
        yield result
    finally:
        elapsed = time.perf_counter() - start
        result["seconds"] = elapsed
        result["ms"] = max(1, int(round(elapsed * 1000)))


def timed(func):
    """Log the duration of each call at DEBUG level."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        with timer() as t:
            result = func(*args, **kwargs)
        logger.debug(f"{func.__qualname__} took {t['seconds'] * 1000:.2f} ms")
        return result

    return wrapper
