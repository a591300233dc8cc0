"""Pipeline components package.

This package contains the pipeline stages:
- PathSource: Emits the input paths
- SuffixFilter: Keeps paths with a configured suffix
- SizeFilter: Keeps paths whose size is within bounds
- PathSink: Prints the surviving paths
"""

from __future__ import annotations

from filterpipe.core.pipeline.components.base import FilterStage, PipelineStage
from filterpipe.core.pipeline.components.sink import PathSink
from filterpipe.core.pipeline.components.size_filter import SizeFilter, passes_size_bounds
from filterpipe.core.pipeline.components.source import PathSource
from filterpipe.core.pipeline.components.suffix_filter import SuffixFilter, extract_extension

__all__ = [
    "FilterStage",
    "PathSink",
    "PathSource",
    "PipelineStage",
    "SizeFilter",
    "SuffixFilter",
    "extract_extension",
    "passes_size_bounds",
]
