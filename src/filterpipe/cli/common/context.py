"""
Per-invocation CLI state.

The filter command stores its ambient options (verbosity, log level and
format, statistics) in a ``CliContext`` held by a ContextVar, so the
logging setup and the statistics output read one validated object.
"""

from __future__ import annotations

import contextvars
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LogLevel(str, Enum):
    """Accepted values of ``--log-level``."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CliContext(BaseModel):
    """Ambient options of one filter command.

    Attributes:
        verbose: Number of ``-v`` flags given.
        log_level: Level requested with ``--log-level``.
        log_json: Emit diagnostics as JSON lines instead of rich output.
        show_stats: Print the per-stage statistics table after the run.
    """

    model_config = ConfigDict(frozen=True)

    verbose: int = Field(default=0, ge=0, description="Number of -v flags")
    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Diagnostic log level")
    log_json: bool = Field(default=False, description="JSON log lines on stderr")
    show_stats: bool = Field(default=False, description="Print statistics after the run")

    def is_verbose(self) -> bool:
        return self.verbose > 0

    def get_effective_log_level(self) -> str:
        """Return DEBUG when any ``-v`` was given, else ``log_level``."""
        return LogLevel.DEBUG.value if self.is_verbose() else self.log_level.value


cli_context_var: contextvars.ContextVar[CliContext | None] = contextvars.ContextVar(
    "filterpipe_cli_context",
    default=None,
)


def get_cli_context() -> CliContext:
    """Return the context set by the running command.

    Raises:
        RuntimeError: If no command has set one.
    """
    context = cli_context_var.get()
    if context is None:
        msg = "CLI context is not set; the filter command sets it before running"
        raise RuntimeError(msg)
    return context


def set_cli_context(context: CliContext) -> None:
    cli_context_var.set(context)
