"""
filterpipe - Concurrent File Path Filter

Filters a list of file paths by suffix and size through a pipeline of
threaded stages connected by bounded queues, streaming survivors to stdout.
"""

__version__ = "0.1.0"
__author__ = "filterpipe Team"

from .core.pipeline import run_pipeline

__all__ = ["run_pipeline"]
