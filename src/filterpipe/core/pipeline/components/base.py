"""Base stage thread for the filterpipe pipeline.

This module provides PipelineStage, a threading.Thread subclass that owns
one inbound and one outbound queue end, and FilterStage, the shared loop
of the two filter stages.

Every stage closes its output queue exactly once when its loop ends, even
when the loop fails, so end-of-stream always reaches the next stage.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Iterator

from filterpipe.core.pipeline.utils import BoundedQueue, StageStatistics
from filterpipe.shared.constants import Pipeline
from filterpipe.shared.errors import (
    ErrorCode,
    ErrorContext,
    FilterPipeError,
    InfrastructureError,
    PipelineCancelledError,
)
from filterpipe.shared.logging import (
    log_operation_error,
    log_operation_start,
    log_operation_success,
)

logger = logging.getLogger(__name__)


class PipelineStage(threading.Thread):
    """One concurrently running processing step.

    Subclasses implement ``_run_stage`` using ``_receive`` and ``_send``.
    Both block in ``Pipeline.POLL_INTERVAL`` slices and raise
    PipelineCancelledError once the shared cancel event is set.

    Args:
        input_queue: Queue this stage consumes, or None for the source.
        output_queue: Queue this stage produces, or None for the sink.
        stage_name: Name used for the thread, logs and statistics.
        stats: Optional statistics collector; one is created if omitted.
        cancel_event: Event shared by all stages of one run.
    """

    def __init__(
        self,
        input_queue: BoundedQueue | None,
        output_queue: BoundedQueue | None,
        stage_name: str,
        stats: StageStatistics | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        super().__init__(name=f"filterpipe-{stage_name}", daemon=True)
        self.input_queue = input_queue
        self.output_queue = output_queue
        self.stage_name = stage_name
        self.stats = stats or StageStatistics(stage_name)
        self.cancel_event = cancel_event or threading.Event()
        self.error: BaseException | None = None

    def run(self) -> None:
        """Run the stage loop, then close the output queue."""
        context = ErrorContext(
            operation="stage_run",
            additional_data={"stage": self.stage_name},
        )
        start_time = time.time()
        log_operation_start(logger, "stage_run", context.safe_dict())

        try:
            self._run_stage()
        except PipelineCancelledError:
            logger.debug("Stage %s: cancelled, shutting down", self.stage_name)
        except Exception as e:  # noqa: BLE001
            self._record_failure(e, context)
        else:
            log_operation_success(
                logger=logger,
                operation="stage_run",
                duration_ms=(time.time() - start_time) * 1000,
                result_info=self.stats.as_dict(),
                context=context,
            )
        finally:
            self._close_output()

    def _run_stage(self) -> None:
        """Process the stage's input. Implemented by subclasses."""
        raise NotImplementedError

    def cancel(self) -> None:
        """Ask every stage sharing this cancel event to stop."""
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        """Whether the run has been cancelled."""
        return self.cancel_event.is_set()

    def _receive(self) -> Iterator[str]:
        """Yield items from the input queue until it is closed and drained."""
        if self.input_queue is None:
            return
        while True:
            if self.cancelled:
                raise PipelineCancelledError(self.stage_name)
            try:
                item = self.input_queue.get(timeout=Pipeline.POLL_INTERVAL)
            except queue.Empty:
                continue
            if item is Pipeline.SENTINEL:
                logger.debug("Stage %s: input closed", self.stage_name)
                return
            self.stats.increment_items_received()
            yield item

    def _send(self, item: str) -> None:
        """Put an item onto the output queue, waiting while it is full."""
        if self.output_queue is None:
            return
        while True:
            if self.cancelled:
                raise PipelineCancelledError(self.stage_name)
            try:
                self.output_queue.put(item, timeout=Pipeline.POLL_INTERVAL)
            except queue.Full:
                continue
            self.stats.increment_items_forwarded()
            return

    def _close_output(self) -> None:
        """Close the output queue once; give up only if the run is cancelled."""
        if self.output_queue is None or self.output_queue.closed:
            return
        while True:
            try:
                self.output_queue.close(timeout=Pipeline.POLL_INTERVAL)
            except queue.Full:
                # The consumer stops on cancellation, so it needs no marker.
                if self.cancelled:
                    return
                continue
            logger.debug("Stage %s: output closed", self.stage_name)
            return

    def _record_failure(self, error: Exception, context: ErrorContext) -> None:
        """Store the failure and cancel the rest of the run."""
        self.error = error
        self.cancel()
        if isinstance(error, FilterPipeError):
            failure = error
        else:
            failure = InfrastructureError(
                ErrorCode.PIPELINE_EXECUTION_ERROR,
                f"Stage '{self.stage_name}' failed: {error}",
                context,
                original_error=error,
            )
        log_operation_error(
            logger=logger,
            error=failure,
            operation="stage_run",
            context=context,
            level=logging.DEBUG,
        )


class FilterStage(PipelineStage):
    """A stage that forwards the subsequence of its input it accepts.

    When ``is_identity`` is true every item is forwarded without calling
    ``accepts``.
    """

    @property
    def is_identity(self) -> bool:
        """Whether this filter is configured to pass everything."""
        raise NotImplementedError

    def accepts(self, item: str) -> bool:
        """Decide whether ``item`` is forwarded."""
        raise NotImplementedError

    def _run_stage(self) -> None:
        if self.is_identity:
            logger.debug("Stage %s: no constraint configured, passing through", self.stage_name)
            for item in self._receive():
                self._send(item)
            return

        for item in self._receive():
            if self.accepts(item):
                self._send(item)
            else:
                self.stats.increment_items_dropped()
