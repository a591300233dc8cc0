"""Bounded queue for pipeline backpressure control.

This module provides BoundedQueue, a thread-safe queue wrapper with a
size limit and an explicit close signal. Each queue connects exactly one
producer stage to exactly one consumer stage.

Closing enqueues ``Pipeline.SENTINEL`` behind every buffered item, so the
consumer sees end-of-stream only after draining what was sent before it.
"""

from __future__ import annotations

import queue
import threading
from typing import Any

from filterpipe.shared.constants import Pipeline
from filterpipe.shared.errors import create_queue_error


class BoundedQueue:
    """Thread-safe closable queue with size limits for backpressure control.

    Args:
        maxsize: Maximum number of items the queue can hold.
                0 means unlimited size.
        name: Optional name used in error messages and logs.
    """

    def __init__(self, maxsize: int = 0, name: str | None = None) -> None:
        """Initialize the bounded queue.

        Args:
            maxsize: Maximum number of items the queue can hold.
                    0 means unlimited size.
            name: Optional name used in error messages and logs.
        """
        self._queue: queue.Queue[Any] = queue.Queue(maxsize=maxsize)
        self.name = name or f"queue_{id(self) & 0xFFFF}"
        self._close_lock = threading.Lock()
        self._closed = False
        self._drained = False

    def put(
        self,
        item: Any,
        block: bool = True,
        timeout: float | None = None,
    ) -> None:
        """Put an item into the queue.

        Args:
            item: The item to put into the queue.
            block: If True, block until a slot is available.
            timeout: Maximum time to wait if blocking.

        Raises:
            queue.Full: If no slot became available.
            InfrastructureError: If the queue has already been closed.
        """
        if self._closed:
            raise create_queue_error(
                f"Cannot put onto closed queue '{self.name}'",
                operation="queue_put",
                queue_name=self.name,
            )
        self._queue.put(item, block=block, timeout=timeout)

    def get(self, block: bool = True, timeout: float | None = None) -> Any:
        """Get the next item from the queue.

        Once the end-of-stream marker has been received, every further call
        returns ``Pipeline.SENTINEL`` immediately.

        Args:
            block: If True, block until an item is available.
            timeout: Maximum time to wait if blocking.

        Returns:
            The next item, or ``Pipeline.SENTINEL`` after the queue is closed
            and drained.

        Raises:
            queue.Empty: If no item became available.
        """
        if self._drained:
            return Pipeline.SENTINEL
        item = self._queue.get(block=block, timeout=timeout)
        if item is Pipeline.SENTINEL:
            self._drained = True
        return item

    def close(self, block: bool = True, timeout: float | None = None) -> None:
        """Signal end-of-stream to the consumer.

        Must be called exactly once, by the producer, after its last put.

        Args:
            block: If True, block until a slot is available for the marker.
            timeout: Maximum time to wait if blocking.

        Raises:
            queue.Full: If the marker could not be enqueued; the queue
                stays open so the call can be retried.
            InfrastructureError: If the queue has already been closed.
        """
        with self._close_lock:
            if self._closed:
                raise create_queue_error(
                    f"Queue '{self.name}' closed twice",
                    operation="queue_close",
                    queue_name=self.name,
                )
            self._queue.put(Pipeline.SENTINEL, block=block, timeout=timeout)
            self._closed = True

    @property
    def closed(self) -> bool:
        """Whether the producer has closed the queue."""
        return self._closed

