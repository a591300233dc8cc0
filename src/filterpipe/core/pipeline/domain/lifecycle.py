"""Pipeline component lifecycle management.

This module provides functions for managing the lifecycle of pipeline stages:
- Starting stages
- Waiting for completion
- Cancelling a run
- Collecting stage failures
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from filterpipe.shared.errors import ErrorCode, ErrorContext, InfrastructureError
from filterpipe.shared.logging import log_operation_error, log_operation_success

if TYPE_CHECKING:
    from filterpipe.core.pipeline.domain.orchestrator import PipelineComponents

logger = logging.getLogger(__name__)


def start_pipeline_components(components: PipelineComponents) -> None:
    """Start every stage, sink first so nothing waits on an unstarted consumer.

    Args:
        components: The stages and queues of one run.

    Raises:
        InfrastructureError: If a stage thread cannot be started.
    """
    context = ErrorContext(
        operation="start_pipeline_components",
        additional_data={"stages": len(components.stages)},
    )

    try:
        for stage in reversed(components.stages):
            logger.debug("Starting %s...", stage.stage_name)
            stage.start()

        log_operation_success(
            logger=logger,
            operation="start_pipeline_components",
            duration_ms=0.0,
            context=context,
        )

    except RuntimeError as e:
        # Stages that did start must not wait forever on the rest.
        cancel_pipeline(components)
        infrastructure_error = InfrastructureError(
            ErrorCode.PIPELINE_INITIALIZATION_ERROR,
            f"Failed to start pipeline components: {e}",
            context,
            original_error=e,
        )
        log_operation_error(
            logger=logger,
            error=infrastructure_error,
            operation="start_pipeline_components",
            level=logging.DEBUG,
        )
        raise infrastructure_error from e


def wait_for_pipeline_completion(components: PipelineComponents) -> None:
    """Join every stage in pipeline order.

    Stages end on their own once the source closes its queue, so no
    timeout is applied.
    """
    for stage in components.stages:
        logger.debug("Waiting for %s to complete...", stage.stage_name)
        stage.join()
        logger.debug(
            "%s completed: %s",
            stage.stage_name,
            stage.stats.as_dict(),
        )


def cancel_pipeline(components: PipelineComponents, timeout: float | None = None) -> None:
    """Set the shared cancel event and wait for started stages to stop.

    Args:
        components: The stages and queues of one run.
        timeout: Maximum seconds to wait for each stage.
    """
    logger.info("Cancelling pipeline...")
    components.cancel_event.set()
    for stage in components.stages:
        if stage.is_alive():
            stage.join(timeout=timeout)
            if stage.is_alive():
                logger.warning("%s did not stop within %s seconds", stage.stage_name, timeout)


def first_stage_failure(components: PipelineComponents) -> tuple[str, BaseException] | None:
    """Return the name and error of the first failed stage, in pipeline order."""
    for stage in components.stages:
        if stage.error is not None:
            return stage.stage_name, stage.error
    return None
