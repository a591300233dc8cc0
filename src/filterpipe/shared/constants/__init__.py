"""Constants package."""

from .cli import CLIDefaults, CLIHelp, CLIOptions
from .pipeline import Pipeline, SizeBound, StageName

__all__ = [
    "CLIDefaults",
    "CLIHelp",
    "CLIOptions",
    "Pipeline",
    "SizeBound",
    "StageName",
]
