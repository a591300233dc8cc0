"""Tests for structured logging helpers."""

from __future__ import annotations

import json
import logging

from rich.logging import RichHandler

from filterpipe.shared.errors import ApplicationError, ErrorCode, ErrorContext
from filterpipe.shared.logging import (
    StructuredFormatter,
    log_operation_error,
    log_operation_success,
    setup_structured_logger,
)


class TestSetupStructuredLogger:
    """Test cases for setup_structured_logger."""

    def test_rich_handler_by_default(self) -> None:
        logger = setup_structured_logger(level="info")

        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)
        assert logger.propagate is False

    def test_reconfiguring_replaces_handler(self) -> None:
        setup_structured_logger()
        logger = setup_structured_logger(use_rich_console=False)

        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, StructuredFormatter)

    def test_json_lines_on_stderr(self, capsys) -> None:
        logger = setup_structured_logger(level="DEBUG", use_rich_console=False)

        log_operation_success(
            logger,
            "stage_run",
            duration_ms=1.5,
            result_info={"items_forwarded": 2},
            context=ErrorContext(operation="stage_run"),
        )

        captured = capsys.readouterr()
        assert captured.out == ""
        entry = json.loads(captured.err.strip())
        assert entry["level"] == "DEBUG"
        assert entry["operation"] == "stage_run"
        assert entry["duration_ms"] == 1.5
        assert entry["result_info"] == {"items_forwarded": 2}

    def test_operation_error_fields(self, capsys) -> None:
        logger = setup_structured_logger(level="ERROR", use_rich_console=False)
        error = ApplicationError(
            ErrorCode.CONFIG_INVALID,
            "bad",
            ErrorContext(operation="build_filter_settings"),
        )

        log_operation_error(logger, error, context={"attempt": 1})

        entry = json.loads(capsys.readouterr().err.strip())
        assert entry["message"] == "bad"
        assert entry["error_code"] == "CONFIG_INVALID"
        assert entry["operation"] == "build_filter_settings"
        assert entry["context"]["attempt"] == 1
        assert entry["original_error"] is None
        assert "exception" not in entry

    def test_operation_error_at_debug_level(self, capsys) -> None:
        """Code that re-raises logs the failure below ERROR."""
        logger = setup_structured_logger(level="DEBUG", use_rich_console=False)
        cause = OSError(5, "Input/output error")
        error = ApplicationError(ErrorCode.CONFIG_INVALID, "bad", original_error=cause)

        log_operation_error(logger, error, level=logging.DEBUG)

        entry = json.loads(capsys.readouterr().err.splitlines()[0])
        assert entry["level"] == "DEBUG"
        assert entry["original_error"] == str(cause)
        assert "Input/output error" in entry["exception"]
