"""Suffix filter stage for the filterpipe pipeline.

A path passes when its lowercased extension equals one of the configured
suffixes exactly. Configured suffixes are compared verbatim, so ``A.PDF``
passes ``.pdf`` while ``a.pdf`` does not pass ``.PDF``.
"""

from __future__ import annotations

import os
import threading
from collections.abc import Sequence

from filterpipe.core.pipeline.components.base import FilterStage
from filterpipe.core.pipeline.utils import BoundedQueue, StageStatistics
from filterpipe.shared.constants import StageName


def extract_extension(path: str) -> str:
    """Return the extension of the final path element, dot included.

    The extension runs from the last ``.`` of the final element to its end;
    an element without a ``.`` has the empty extension.

    Examples:
        >>> extract_extension("docs/report.tar.GZ")
        '.GZ'
        >>> extract_extension("archive.d/README")
        ''
    """
    name = os.path.basename(path)
    _, dot, tail = name.rpartition(".")
    return dot + tail if dot else ""


class SuffixFilter(FilterStage):
    """Filter stage that keeps paths with a configured suffix.

    Args:
        suffixes: Accepted suffixes, used verbatim. Empty accepts all.
        input_queue: Queue to take paths from.
        output_queue: Queue to put accepted paths onto.
        stats: Optional statistics collector.
        cancel_event: Event shared by all stages of one run.
    """

    def __init__(
        self,
        suffixes: Sequence[str],
        input_queue: BoundedQueue,
        output_queue: BoundedQueue,
        stats: StageStatistics | None = None,
        cancel_event: threading.Event | None = None,
    ) -> None:
        super().__init__(
            input_queue=input_queue,
            output_queue=output_queue,
            stage_name=StageName.SUFFIX_FILTER,
            stats=stats,
            cancel_event=cancel_event,
        )
        self.suffixes = tuple(suffixes)

    @property
    def is_identity(self) -> bool:
        return not self.suffixes

    def accepts(self, item: str) -> bool:
        extension = extract_extension(item).lower()
        return any(extension == suffix for suffix in self.suffixes)
