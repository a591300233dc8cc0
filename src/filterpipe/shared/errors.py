"""Errors raised by filterpipe.

Every failure the CLI can report is a ``FilterPipeError`` carrying an
``ErrorCode``, a message meant for the user, an ``ErrorContext`` for the
logs, and the exception it wraps, if any.

- ``ApplicationError``: the invocation itself is wrong (bad bounds, bad
  queue size). Reported without a traceback.
- ``InfrastructureError``: the run broke (a stage thread failed, a queue was
  misused, stdout went away).
- ``CliError``: an ``ApplicationError`` that also fixes the exit code.

Per-path stat failures are not errors: the size filter drops the path.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union

ContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Stable identifiers for every reportable failure."""

    CONFIG_INVALID = "CONFIG_INVALID"

    PIPELINE_INITIALIZATION_ERROR = "PIPELINE_INITIALIZATION_ERROR"
    PIPELINE_EXECUTION_ERROR = "PIPELINE_EXECUTION_ERROR"
    PIPELINE_CANCELLED = "PIPELINE_CANCELLED"
    QUEUE_OPERATION_ERROR = "QUEUE_OPERATION_ERROR"

    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"
    CLI_COMMAND_INTERRUPTED = "CLI_COMMAND_INTERRUPTED"
    CLI_OUTPUT_ERROR = "CLI_OUTPUT_ERROR"
    CLI_OUTPUT_CLOSED = "CLI_OUTPUT_CLOSED"


def _to_context_value(key: str, value: Any) -> ContextValue:
    if isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    msg = (
        f"additional_data[{key!r}] is a {type(value).__name__}; "
        "only str, int, float, bool, Path and Enum values are allowed"
    )
    raise TypeError(msg)


@dataclass(frozen=True)
class ErrorContext:
    """Where an error happened, in log-friendly form.

    ``additional_data`` may hold ``Path`` and ``Enum`` values; they are
    stored as ``str`` and ``.value`` so the context always serialises.

    Raises:
        TypeError: If ``additional_data`` is not a dict or holds any other
            kind of value.
    """

    file_path: str | None = None
    operation: str | None = None
    additional_data: dict[str, ContextValue] | None = None

    def __post_init__(self) -> None:
        if self.additional_data is None:
            return
        if not isinstance(self.additional_data, dict):
            msg = f"additional_data must be a dict, got {type(self.additional_data).__name__}"
            raise TypeError(msg)
        converted = {
            key: _to_context_value(key, value) for key, value in self.additional_data.items()
        }
        object.__setattr__(self, "additional_data", converted)

    def safe_dict(self) -> dict[str, Any]:
        """Return the set fields; ``additional_data`` is always included.

        Example:
            >>> ErrorContext(operation="stat", file_path="/tmp/a").safe_dict()
            {'file_path': '/tmp/a', 'operation': 'stat', 'additional_data': {}}
        """
        data: dict[str, Any] = {}
        if self.file_path is not None:
            data["file_path"] = self.file_path
        if self.operation is not None:
            data["operation"] = self.operation
        data["additional_data"] = dict(self.additional_data or {})
        return data


class FilterPipeError(Exception):
    """Base class of all filterpipe errors.

    Args:
        code: What kind of failure this is.
        message: Text shown to the user after ``Error:``.
        context: Log context; an empty one is used when omitted.
        original_error: The exception being wrapped, if any.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(f"{code.value}: {message}")
        self.code = code
        self.message = message
        self.context = context if context is not None else ErrorContext()
        self.original_error = original_error

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Serialise for structured logs."""
        cause = self.original_error
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": None if cause is None else str(cause),
        }


class ApplicationError(FilterPipeError):
    """The command line asked for something invalid."""


class InfrastructureError(FilterPipeError):
    """A thread, queue or the output stream failed during a run."""


class CliError(ApplicationError):
    """Error with the exit code the process should end with."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: BaseException | None = None,
        command: str | None = None,
        exit_code: int = 1,
    ) -> None:
        super().__init__(code, message, context, original_error)
        self.command = command
        self.exit_code = exit_code


class PipelineCancelledError(InfrastructureError):
    """Raised inside a stage when the run's cancel event is set.

    Stages catch it in their run loop; it never escapes a stage thread.
    """

    def __init__(self, stage_name: str) -> None:
        super().__init__(
            ErrorCode.PIPELINE_CANCELLED,
            f"Stage '{stage_name}' cancelled",
            ErrorContext(operation="stage_run", additional_data={"stage": stage_name}),
        )


def create_config_error(
    message: str,
    config_key: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> ApplicationError:
    """Build a CONFIG_INVALID error, optionally naming the offending setting."""
    context = ErrorContext(
        operation=operation,
        additional_data={"config_key": config_key} if config_key else None,
    )
    return ApplicationError(ErrorCode.CONFIG_INVALID, message, context, original_error)


def create_queue_error(
    message: str,
    operation: str | None = None,
    queue_name: str | None = None,
) -> InfrastructureError:
    """Build a QUEUE_OPERATION_ERROR for a put or close on a closed queue."""
    context = ErrorContext(
        operation=operation,
        additional_data={"queue": queue_name} if queue_name else None,
    )
    return InfrastructureError(ErrorCode.QUEUE_OPERATION_ERROR, message, context)


def create_output_error(
    message: str,
    original_error: Exception | None = None,
) -> InfrastructureError:
    """Build a CLI_OUTPUT_ERROR for a failed write to the sink's stream."""
    return InfrastructureError(
        ErrorCode.CLI_OUTPUT_ERROR,
        message,
        ErrorContext(operation="write_output"),
        original_error,
    )


def create_output_closed_error(paths_written: int) -> InfrastructureError:
    """Build a CLI_OUTPUT_CLOSED error for a reader that stopped reading early."""
    return InfrastructureError(
        ErrorCode.CLI_OUTPUT_CLOSED,
        f"Output closed by reader after {paths_written} path(s); remaining paths not written",
        ErrorContext(operation="write_output", additional_data={"paths_written": paths_written}),
    )


def create_cli_error(
    message: str,
    command: str | None = None,
    original_error: BaseException | None = None,
    exit_code: int = 1,
    code: ErrorCode = ErrorCode.CLI_UNEXPECTED_ERROR,
) -> CliError:
    """Build the CliError the CLI reports and exits with."""
    context = ErrorContext(
        operation="cli",
        additional_data={"command": command} if command else None,
    )
    return CliError(code, message, context, original_error, command, exit_code)
