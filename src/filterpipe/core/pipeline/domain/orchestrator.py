"""Pipeline orchestration and component factory.

This module provides factory classes and orchestration functions for the pipeline:
- PipelineFactory: Creates and wires up all pipeline stages
- run_pipeline: Main orchestration function for running the complete pipeline
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TextIO

from filterpipe.config import FilterSettings
from filterpipe.core.pipeline.components import (
    PathSink,
    PathSource,
    PipelineStage,
    SizeFilter,
    SuffixFilter,
)
from filterpipe.core.pipeline.domain.lifecycle import (
    cancel_pipeline,
    first_stage_failure,
    start_pipeline_components,
    wait_for_pipeline_completion,
)
from filterpipe.core.pipeline.domain.statistics import format_statistics
from filterpipe.core.pipeline.utils import BoundedQueue, StageStatistics
from filterpipe.shared.constants import Pipeline, StageName
from filterpipe.shared.errors import (
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    create_output_closed_error,
)
from filterpipe.shared.logging import log_operation_success

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineComponents:
    """The stages and cancel event of one run."""

    source: PathSource
    suffix_filter: SuffixFilter
    size_filter: SizeFilter
    sink: PathSink
    cancel_event: threading.Event

    @property
    def stages(self) -> tuple[PipelineStage, ...]:
        """Stages in pipeline order."""
        return (self.source, self.suffix_filter, self.size_filter, self.sink)

    @property
    def statistics(self) -> dict[str, StageStatistics]:
        return {stage.stage_name: stage.stats for stage in self.stages}


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of a completed run.

    Attributes:
        statistics: Per-stage counters keyed by stage name.
        duration_seconds: Wall time of the run.
    """

    statistics: dict[str, StageStatistics]
    duration_seconds: float

    @property
    def paths_written(self) -> int:
        """Number of paths the sink wrote."""
        return self.statistics[StageName.SINK].items_forwarded


class PipelineFactory:
    """Factory for creating and wiring pipeline stages."""

    @staticmethod
    def create_components(
        paths: Sequence[str],
        settings: FilterSettings,
        stream: TextIO | None = None,
    ) -> PipelineComponents:
        """Create the four stages and the three queues between them.

        Args:
            paths: Paths the source emits.
            settings: Validated filter settings.
            stream: Output stream for the sink, stdout when None.

        Returns:
            The wired, not yet started components.
        """
        cancel_event = threading.Event()

        source_queue = BoundedQueue(maxsize=settings.queue_size, name="source->suffix_filter")
        suffix_queue = BoundedQueue(maxsize=settings.queue_size, name="suffix_filter->size_filter")
        size_queue = BoundedQueue(maxsize=settings.queue_size, name="size_filter->sink")

        source = PathSource(
            paths=paths,
            output_queue=source_queue,
            cancel_event=cancel_event,
        )
        suffix_filter = SuffixFilter(
            suffixes=settings.suffixes,
            input_queue=source_queue,
            output_queue=suffix_queue,
            cancel_event=cancel_event,
        )
        size_filter = SizeFilter(
            min_size=settings.min_size,
            max_size=settings.max_size,
            input_queue=suffix_queue,
            output_queue=size_queue,
            cancel_event=cancel_event,
        )
        sink = PathSink(
            input_queue=size_queue,
            stream=stream,
            cancel_event=cancel_event,
        )

        return PipelineComponents(
            source=source,
            suffix_filter=suffix_filter,
            size_filter=size_filter,
            sink=sink,
            cancel_event=cancel_event,
        )


def run_pipeline(
    paths: Sequence[str],
    settings: FilterSettings | None = None,
    stream: TextIO | None = None,
) -> PipelineResult:
    """Run the complete filtering pipeline.

    This function orchestrates the entire pipeline:
    1. PathSource puts every path onto the first queue
    2. SuffixFilter and SizeFilter forward the paths they accept
    3. PathSink writes the survivors, one per line, in input order

    Args:
        paths: Paths to filter.
        settings: Validated filter settings; defaults accept everything.
        stream: Output stream for the sink, stdout when None.

    Returns:
        PipelineResult with per-stage statistics.

    Raises:
        InfrastructureError: If any stage fails (PIPELINE_EXECUTION_ERROR)
            or the reader closed the output early (CLI_OUTPUT_CLOSED).
    """
    settings = settings or FilterSettings()
    context = ErrorContext(
        operation="run_pipeline",
        additional_data={
            "path_count": len(paths),
            "suffix_count": len(settings.suffixes),
            "min_size": settings.min_size,
            "max_size": settings.max_size,
            "queue_size": settings.queue_size,
        },
    )

    logger.info(
        "Starting pipeline: paths=%s, suffixes=%s, min=%s, max=%s",
        len(paths),
        list(settings.suffixes),
        settings.min_size,
        settings.max_size,
    )

    start_time = time.time()
    components = PipelineFactory.create_components(paths, settings, stream)

    try:
        start_pipeline_components(components)
        wait_for_pipeline_completion(components)
    except KeyboardInterrupt:
        cancel_pipeline(components, timeout=Pipeline.POLL_INTERVAL * 10)
        raise

    failure = first_stage_failure(components)
    if failure is not None:
        _raise_stage_failure(failure, context)
    if components.sink.output_closed:
        raise create_output_closed_error(components.sink.stats.items_forwarded)

    result = PipelineResult(
        statistics=components.statistics,
        duration_seconds=time.time() - start_time,
    )

    logger.info("Pipeline completed successfully!")
    logger.info(format_statistics(result.statistics, result.duration_seconds))

    log_operation_success(
        logger=logger,
        operation="run_pipeline",
        duration_ms=result.duration_seconds * 1000,
        result_info={"paths_written": result.paths_written},
        context=context,
    )

    return result


def _raise_stage_failure(
    failure: tuple[str, BaseException],
    context: ErrorContext,
) -> None:
    """Wrap a stage failure in an InfrastructureError and raise it.

    The stage already logged the failure at DEBUG; the caller reports it.
    """
    stage_name, error = failure
    message = getattr(error, "message", None) or str(error)
    infrastructure_error = InfrastructureError(
        ErrorCode.PIPELINE_EXECUTION_ERROR,
        f"Pipeline stage '{stage_name}' failed: {message}",
        context,
        original_error=error,
    )
    raise infrastructure_error from error
