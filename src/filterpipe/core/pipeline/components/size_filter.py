"""Size filter stage for the filterpipe pipeline.

A path passes when its size in bytes lies strictly between the configured
bounds. Either bound may be ``SizeBound.UNSET``. Paths whose size cannot
be read are dropped without interrupting the run.
"""

from __future__ import annotations

import logging
import os
import threading

from filterpipe.core.pipeline.components.base import FilterStage
from filterpipe.core.pipeline.utils import BoundedQueue, StageStatistics
from filterpipe.shared.constants import SizeBound, StageName

logger = logging.getLogger(__name__)


def passes_size_bounds(size: int, min_size: int, max_size: int) -> bool:
    """Check ``size`` against exclusive bounds.

    Examples:
        >>> passes_size_bounds(500, SizeBound.UNSET, 2000)
        True
        >>> passes_size_bounds(2000, SizeBound.UNSET, 2000)
        False
    """
    above_min = min_size == SizeBound.UNSET or min_size < size
    below_max = max_size == SizeBound.UNSET or size < max_size
    return above_min and below_max


class SizeFilter(FilterStage):
    """Filter stage that keeps paths whose size is within bounds.

    Args:
        min_size: Exclusive lower bound, or ``SizeBound.UNSET``.
        max_size: Exclusive upper bound, or ``SizeBound.UNSET``.
        input_queue: Queue to take paths from.
        output_queue: Queue to put accepted paths onto.
        stats: Optional statistics collector.
        cancel_event: Event shared by all stages of one run.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        min_size: int,
        max_size: int,
        input_queue: BoundedQueue,
        output_queue: BoundedQueue,
        stats: StageStatistics | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        super().__init__(
            input_queue=input_queue,
            output_queue=output_queue,
            stage_name=StageName.SIZE_FILTER,
            stats=stats,
            cancel_event=cancel_event,
        )
        self.min_size = min_size
        self.max_size = max_size

    @property
    def is_identity(self) -> bool:
        return self.min_size == SizeBound.UNSET and self.max_size == SizeBound.UNSET

    def accepts(self, item: str) -> bool:
        try:
            size = os.stat(item).st_size
        except (OSError, ValueError) as e:
            self.stats.increment_stat_failures()
            logger.debug("Dropping %s: size unavailable (%s)", item, e)
            return False
        return passes_size_bounds(size, self.min_size, self.max_size)
