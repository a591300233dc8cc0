"""
Diagnostic logging for filterpipe.

Stdout carries nothing but filtered paths, so every handler installed here
writes to stderr: a rich console by default, or one JSON object per line
with ``--log-json``. The ``log_operation_*`` helpers attach the operation
name, timings and ``ErrorContext`` data as record extras that the JSON
formatter picks up.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

from filterpipe.shared.constants import CLIDefaults
from filterpipe.shared.errors import ErrorContext, FilterPipeError

ROOT_LOGGER_NAME = "filterpipe"

_EXTRA_FIELDS = (
    "error_code",
    "context",
    "operation",
    "duration_ms",
    "result_info",
    "original_error",
)

_LOG_THEME = Theme(
    {
        "logging.level.debug": "cyan",
        "logging.level.info": "green",
        "logging.level.warning": "yellow",
        "logging.level.error": "red bold",
        "logging.level.critical": "red bold reverse",
        "log.time": "dim cyan",
    }
)


class StructuredFormatter(logging.Formatter):
    """Render a record as a single JSON object, extras included."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "thread": record.threadName,
            "message": record.getMessage(),
        }
        entry.update(
            {field: getattr(record, field) for field in _EXTRA_FIELDS if hasattr(record, field)}
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_structured_logger(
    name: str = ROOT_LOGGER_NAME,
    level: str = CLIDefaults.LOG_LEVEL,
    *,
    use_rich_console: bool = True,
) -> logging.Logger:
    """
    Point the package logger at stderr, replacing earlier handlers.

    Args:
        name: Logger to configure, the package root by default.
        level: Level name, case-insensitive.
        use_rich_console: RichHandler output when true, JSON lines otherwise.

    Returns:
        The configured logger.
    """
    log_level = getattr(logging, level.upper())
    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.setLevel(log_level)

    handler: logging.Handler
    if use_rich_console:
        handler = RichHandler(
            console=Console(theme=_LOG_THEME, stderr=True),
            show_time=True,
            show_level=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
            tracebacks_show_locals=False,
            log_time_format="[%H:%M:%S]",
        )
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(StructuredFormatter())
    handler.setLevel(log_level)
    logger.addHandler(handler)

    logger.propagate = False
    return logger


def _context_to_dict(context: dict[str, Any] | ErrorContext | None) -> dict[str, Any]:
    if context is None:
        return {}
    if isinstance(context, ErrorContext):
        return context.safe_dict()
    return dict(context)


def log_operation_error(
    logger: logging.Logger,
    error: FilterPipeError,
    operation: str | None = None,
    context: dict[str, Any] | ErrorContext | None = None,
    level: int = logging.ERROR,
) -> None:
    """
    Log ``error`` with its code, context and wrapped traceback.

    Args:
        logger: Logger to write to.
        error: The error to record.
        operation: Operation name; the error context's operation if omitted.
        context: Extra context, merged over the error's own.
        level: Record level. Code that re-raises the error for a caller
            to report passes DEBUG so the failure is logged once.
    """
    details = error.to_dict()
    details["context"].update(_context_to_dict(context))
    cause = error.original_error

    logger.log(
        level,
        error.message,
        extra={
            "error_code": error.code.name,
            "operation": operation or error.context.operation,
            "context": details["context"],
            "original_error": details["original_error"],
        },
        exc_info=None if cause is None else (type(cause), cause, cause.__traceback__),
    )


def log_operation_success(
    logger: logging.Logger,
    operation: str,
    duration_ms: float,
    result_info: dict[str, Any] | None = None,
    context: dict[str, Any] | ErrorContext | None = None,
) -> None:
    """Log a finished operation at DEBUG with its duration and results."""
    logger.debug(
        "%s finished in %.1f ms",
        operation,
        duration_ms,
        extra={
            "operation": operation,
            "duration_ms": duration_ms,
            "result_info": result_info or {},
            "context": _context_to_dict(context),
        },
    )


def log_operation_start(
    logger: logging.Logger,
    operation: str,
    context: dict[str, Any] | ErrorContext | None = None,
) -> None:
    """Log the start of an operation at DEBUG."""
    logger.debug(
        "%s started",
        operation,
        extra={"operation": operation, "context": _context_to_dict(context)},
    )
