"""Tests for the PathSink stage."""

from __future__ import annotations

import io
import logging
from unittest.mock import patch

from filterpipe.core.pipeline.components import PathSink
from filterpipe.shared.errors import ErrorCode, InfrastructureError


class FailingStream(io.StringIO):
    """Stream whose device fails on every write."""

    def write(self, text: str) -> int:
        raise OSError(5, "Input/output error")


class ClosingStream(io.StringIO):
    """Stream whose reader goes away after ``accepted`` writes."""

    def __init__(self, accepted: int) -> None:
        super().__init__()
        self.accepted = accepted

    def write(self, text: str) -> int:
        if self.accepted == 0:
            raise BrokenPipeError(32, "Broken pipe")
        self.accepted -= 1
        return super().write(text)


class TestPathSink:
    """Test cases for PathSink."""

    def test_writes_one_line_per_path_in_order(self, feed_queue) -> None:
        """Paths are written verbatim, newline terminated, in arrival order."""
        # Given
        stream = io.StringIO()
        sink = PathSink(feed_queue(["c.txt", "a b.pdf", "c.txt"]), stream=stream)

        # When
        sink.run()

        # Then
        assert stream.getvalue() == "c.txt\na b.pdf\nc.txt\n"
        assert sink.stats.items_received == 3
        assert sink.stats.items_forwarded == 3
        assert sink.error is None

    def test_empty_stream_writes_nothing(self, feed_queue) -> None:
        """End-of-stream with no items produces no output."""
        stream = io.StringIO()
        sink = PathSink(feed_queue([]), stream=stream)

        sink.run()

        assert stream.getvalue() == ""

    def test_defaults_to_stdout(self, feed_queue, capsys) -> None:
        """Without a stream the sink prints to standard output."""
        sink = PathSink(feed_queue(["x.bin"]))

        sink.run()

        assert capsys.readouterr().out == "x.bin\n"

    def test_write_failure_is_recorded_and_cancels(self, feed_queue) -> None:
        """A failing stream stops the sink and cancels the run."""
        # Given
        sink = PathSink(feed_queue(["a", "b"]), stream=FailingStream())

        # When
        sink.run()

        # Then
        assert isinstance(sink.error, InfrastructureError)
        assert sink.error.code == ErrorCode.CLI_OUTPUT_ERROR
        assert isinstance(sink.error.original_error, OSError)
        assert sink.cancelled
        assert not sink.output_closed
        assert sink.stats.items_forwarded == 0


class TestPathSinkClosedOutput:
    """Test cases for a reader that closes the sink's output early."""

    def test_broken_pipe_stops_without_failure(self, feed_queue) -> None:
        """A broken pipe ends the run but is not recorded as a stage failure."""
        # Given
        stream = ClosingStream(accepted=1)
        sink = PathSink(feed_queue(["a", "b", "c"]), stream=stream)

        # When
        sink.run()

        # Then
        assert sink.error is None
        assert sink.output_closed
        assert sink.cancelled
        assert sink.stats.items_forwarded == 1
        assert stream.getvalue() == "a\n"

    def test_broken_pipe_on_custom_stream_is_not_redirected(self, feed_queue) -> None:
        """Only the process's own stdout is pointed at devnull."""
        stream = ClosingStream(accepted=0)
        sink = PathSink(feed_queue(["a"]), stream=stream)

        with patch("filterpipe.core.pipeline.components.sink.os.dup2") as mock_dup2:
            sink.run()

        mock_dup2.assert_not_called()
        assert sink.output_closed

    def test_broken_pipe_is_logged_below_error(self, feed_queue, caplog) -> None:
        """Nothing at ERROR is logged when the reader goes away."""
        sink = PathSink(feed_queue(["a", "b"]), stream=ClosingStream(accepted=0))

        with caplog.at_level(logging.DEBUG, logger="filterpipe"):
            sink.run()

        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]
