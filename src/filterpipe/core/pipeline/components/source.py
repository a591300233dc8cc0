"""Path source for the filterpipe pipeline.

PathSource is the producer stage: it puts a fixed list of paths onto its
output queue in order and then closes the queue.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence

from filterpipe.core.pipeline.components.base import PipelineStage
from filterpipe.core.pipeline.utils import BoundedQueue, StageStatistics
from filterpipe.shared.constants import StageName


class PathSource(PipelineStage):
    """Producer stage that emits a fixed list of path strings.

    A thread can only be started once, so a fresh instance is needed for
    every run.

    Args:
        paths: Paths to emit, in order. Duplicates are emitted as given.
        output_queue: Queue to put paths onto.
        stats: Optional statistics collector.
        cancel_event: Event shared by all stages of one run.
    """

    def __init__(
        self,
        paths: Sequence[str],
        output_queue: BoundedQueue,
        stats: StageStatistics | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        super().__init__(
            input_queue=None,
            output_queue=output_queue,
            stage_name=StageName.SOURCE,
            stats=stats,
            cancel_event=cancel_event,
        )
        self.paths = tuple(paths)

    def _run_stage(self) -> None:
        for path in self.paths:
            self._send(path)
