"""Helper functions shared across valuation modules."""

from __future__ import annotations

from contextlib import contextmanager
from collections.abc import Iterator
import time

__all__ = [
    "log_timing",
]


@contextmanager
def log_timing(logger, label: str, enabled: bool) -> Iterator[None]:
    """Log timing for a code block when enabled is True."""
    if not enabled:
        yield
        return
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        logger.debug("Timing %s: %.6fs", label, elapsed)
