"""Filtering pipeline for filterpipe.

Four stages, one thread each, connected by bounded queues:
PathSource -> SuffixFilter -> SizeFilter -> PathSink.

Recommended imports:
    from filterpipe.core.pipeline import run_pipeline
    from filterpipe.core.pipeline.domain import PipelineFactory
    from filterpipe.core.pipeline.components import SuffixFilter, SizeFilter
"""

from filterpipe.core.pipeline.domain.orchestrator import PipelineResult, run_pipeline

__all__ = ["PipelineResult", "run_pipeline"]
