"""
Command failure reporting for the filterpipe CLI.

Every exception that escapes the filter command ends up in
``handle_cli_error``: it is normalised to a CliError, logged, reported on
stderr as ``Error: <message>`` and turned into the process exit code.
Stdout is never touched, so a failed run prints no paths after the error.
Bad input and a reader that closed stdout early produce that single line
only; other failures are also logged with a traceback.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from filterpipe.shared.constants import CLIDefaults
from filterpipe.shared.errors import (
    ApplicationError,
    CliError,
    ErrorCode,
    FilterPipeError,
    create_cli_error,
)

logger = logging.getLogger(__name__)

_QUIET_CODES = frozenset({ErrorCode.CONFIG_INVALID, ErrorCode.CLI_OUTPUT_CLOSED})


def handle_cli_error(error: BaseException, command: str) -> int:
    """Report a failed command and return its exit code.

    Args:
        error: Whatever the command raised, KeyboardInterrupt included.
        command: Name of the command, recorded in the log context.

    Returns:
        ``CLIDefaults.EXIT_INTERRUPTED`` for Ctrl-C, the CliError's own exit
        code when one was raised, otherwise ``CLIDefaults.EXIT_ERROR``.
    """
    details: dict[str, Any] = {
        "command": command,
        "exception": type(error).__name__,
    }
    cli_error = _as_cli_error(error, command, details)
    _log_failure(error, cli_error, details)
    sys.stderr.write(f"Error: {cli_error.message}\n")
    return cli_error.exit_code


def _as_cli_error(error: BaseException, command: str, details: dict[str, Any]) -> CliError:
    if isinstance(error, CliError):
        details["error_code"] = error.code.value
        return error

    if isinstance(error, FilterPipeError):
        # Configuration and pipeline errors already carry a readable message.
        details["error_code"] = error.code.value
        return create_cli_error(
            error.message,
            command=command,
            original_error=error,
            exit_code=CLIDefaults.EXIT_ERROR,
            code=error.code,
        )

    if isinstance(error, KeyboardInterrupt):
        return create_cli_error(
            "Command interrupted by user",
            command=command,
            original_error=error,
            exit_code=CLIDefaults.EXIT_INTERRUPTED,
            code=ErrorCode.CLI_COMMAND_INTERRUPTED,
        )

    prefix = "File system error" if isinstance(error, OSError) else "Unexpected error"
    details["error_code"] = ErrorCode.CLI_UNEXPECTED_ERROR.value
    return create_cli_error(
        f"{prefix}: {error}",
        command=command,
        original_error=error,
        exit_code=CLIDefaults.EXIT_ERROR,
    )


def _log_failure(error: BaseException, cli_error: CliError, details: dict[str, Any]) -> None:
    extra = {"error_code": cli_error.code.name, "context": details}

    if isinstance(error, KeyboardInterrupt):
        logger.warning("Run interrupted", extra=extra)
    elif isinstance(error, ApplicationError) or cli_error.code in _QUIET_CODES:
        logger.debug("Run stopped: %s", cli_error.message, extra=extra)
    else:
        logger.error(
            "Run failed: %s",
            cli_error.message,
            extra=extra,
            exc_info=(type(error), error, error.__traceback__),
        )
