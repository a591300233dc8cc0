"""Statistics collectors for pipeline stages.

Every stage owns one StageStatistics. Counters are written by the stage's
own thread and read by the orchestrator after the run, so each access
goes through a lock.
"""

from __future__ import annotations

import threading


class StageStatistics:
    """Statistics collector for one pipeline stage.

    Attributes:
        stage_name: Name of the stage these counters belong to.
    """

    def __init__(self, stage_name: str) -> None:
        """Initialize the statistics with zero counters."""
        self.stage_name = stage_name
        self._lock = threading.Lock()
        self._items_received = 0
        self._items_forwarded = 0
        self._items_dropped = 0
        self._stat_failures = 0

    def increment_items_received(self) -> None:
        """Increment the items received counter."""
        with self._lock:
            self._items_received += 1

    def increment_items_forwarded(self) -> None:
        """Increment the items forwarded counter."""
        with self._lock:
            self._items_forwarded += 1

    def increment_items_dropped(self) -> None:
        """Increment the items dropped counter."""
        with self._lock:
            self._items_dropped += 1

    def increment_stat_failures(self) -> None:
        """Increment the stat failures counter."""
        with self._lock:
            self._stat_failures += 1

    @property
    def items_received(self) -> int:
        """Get the number of items taken from the input queue."""
        with self._lock:
            return self._items_received

    @property
    def items_forwarded(self) -> int:
        """Get the number of items passed downstream (or written, for the sink)."""
        with self._lock:
            return self._items_forwarded

    @property
    def items_dropped(self) -> int:
        """Get the number of items rejected by a filter."""
        with self._lock:
            return self._items_dropped

    @property
    def stat_failures(self) -> int:
        """Get the number of items dropped because their size was unreadable."""
        with self._lock:
            return self._stat_failures

    def as_dict(self) -> dict[str, int]:
        """Return a snapshot of all counters."""
        with self._lock:
            return {
                "items_received": self._items_received,
                "items_forwarded": self._items_forwarded,
                "items_dropped": self._items_dropped,
                "stat_failures": self._stat_failures,
            }
