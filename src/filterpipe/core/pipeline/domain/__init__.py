"""Pipeline domain logic package.

This package contains domain-specific logic for the pipeline:
- lifecycle: Stage lifecycle management functions
- orchestrator: Pipeline component factory and orchestration
- statistics: Statistics formatting
"""

from __future__ import annotations

from filterpipe.core.pipeline.domain.lifecycle import (
    cancel_pipeline,
    first_stage_failure,
    start_pipeline_components,
    wait_for_pipeline_completion,
)
from filterpipe.core.pipeline.domain.orchestrator import (
    PipelineComponents,
    PipelineFactory,
    PipelineResult,
    run_pipeline,
)
from filterpipe.core.pipeline.domain.statistics import (
    build_statistics_table,
    format_statistics,
)

__all__ = [
    "PipelineComponents",
    "PipelineFactory",
    "PipelineResult",
    "build_statistics_table",
    "cancel_pipeline",
    "first_stage_failure",
    "format_statistics",
    "run_pipeline",
    "start_pipeline_components",
    "wait_for_pipeline_completion",
]
