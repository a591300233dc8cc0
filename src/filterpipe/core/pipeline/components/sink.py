"""Path sink for the filterpipe pipeline.

PathSink is the terminal stage: it writes each path that survived the
filters on its own line, in arrival order. It is the only writer of the
output stream.

When the reader closes the output early (`filterpipe ... | head -1`) the
sink sets ``output_closed``, cancels the run and stops without an error.
"""

from __future__ import annotations

import logging
import os
import sys
import threading
from typing import TextIO

from filterpipe.core.pipeline.components.base import PipelineStage
from filterpipe.core.pipeline.utils import BoundedQueue, StageStatistics
from filterpipe.shared.constants import StageName
from filterpipe.shared.errors import create_output_error

logger = logging.getLogger(__name__)


class PathSink(PipelineStage):
    """Consumer stage that prints paths one per line.

    Args:
        input_queue: Queue to drain.
        stream: Text stream to write to. Defaults to ``sys.stdout`` as
            found when the stage starts running.
        stats: Optional statistics collector.
        cancel_event: Event shared by all stages of one run.
    """

    def __init__(
        self,
        input_queue: BoundedQueue,
        stream: TextIO | None = None,
        stats: StageStatistics | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        super().__init__(
            input_queue=input_queue,
            output_queue=None,
            stage_name=StageName.SINK,
            stats=stats,
            cancel_event=cancel_event,
        )
        self.stream = stream
        self.output_closed = False

    def _run_stage(self) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        for item in self._receive():
            try:
                stream.write(f"{item}\n")
                stream.flush()
            except BrokenPipeError:
                self._stop_on_closed_output(stream)
                return
            except OSError as e:
                raise create_output_error(
                    f"Failed to write to output: {e}",
                    original_error=e,
                ) from e
            self.stats.increment_items_forwarded()

    def _stop_on_closed_output(self, stream: TextIO) -> None:
        """Stop the run after the reader of our output went away."""
        logger.debug("Stage %s: output closed by reader, stopping run", self.stage_name)
        self.output_closed = True
        self.cancel()
        if stream is sys.__stdout__:
            # Interpreter shutdown flushes stdout once more; send that to devnull.
            devnull = os.open(os.devnull, os.O_WRONLY)
            os.dup2(devnull, stream.fileno())
            os.close(devnull)
