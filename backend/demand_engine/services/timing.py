"""
Timing utilities for engine instrumentation.

Logs START / END events with durations in a single greppable format.
"""

import functools
import logging
import time
from contextlib import contextmanager
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def log_timing(stage: str, action: str, duration_ms: Optional[float] = None):
    """Log a timing event in standard format."""
    if duration_ms is not None:
        logger.debug("[TIMING] %s: %s — duration=%.1fms", stage, action, duration_ms)
    else:
        logger.debug("[TIMING] %s: %s", stage, action)


@contextmanager
def sync_timer(stage: str, action: str = "OPERATION"):
    """Context manager timing a synchronous block."""
    log_timing(stage, f"{action} START")
    start = time.perf_counter()
    try:
        yield
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        log_timing(stage, f"{action} END", duration_ms)


def timed(stage: str):
    """Decorator form of ``sync_timer``."""
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with sync_timer(stage, func.__name__):
                return func(*args, **kwargs)
        return wrapper
    return decorator
