"""Pipeline utilities package.

This package provides core utilities for the filtering pipeline:
- BoundedQueue: Thread-safe closable queue with size limits for backpressure
- StageStatistics: Thread-safe per-stage counters
"""

from __future__ import annotations

from filterpipe.core.pipeline.utils.bounded_queue import BoundedQueue
from filterpipe.core.pipeline.utils.statistics import StageStatistics

__all__ = [
    "BoundedQueue",
    "StageStatistics",
]
