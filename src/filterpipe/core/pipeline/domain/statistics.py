"""Statistics formatting for pipeline runs.

This module renders the per-stage counters of a run, either as a plain
text report for the log or as a rich table for the ``--stats`` option.
"""

from __future__ import annotations

from collections.abc import Mapping

from rich.table import Table

from filterpipe.core.pipeline.utils import StageStatistics
from filterpipe.shared.constants import StageName

_COLUMNS = ("items_received", "items_forwarded", "items_dropped", "stat_failures")


def _ordered(statistics: Mapping[str, StageStatistics]) -> list[StageStatistics]:
    known = [statistics[name] for name in StageName.ORDER if name in statistics]
    extra = [stats for name, stats in statistics.items() if name not in StageName.ORDER]
    return known + extra


def format_statistics(
    statistics: Mapping[str, StageStatistics],
    total_duration: float,
) -> str:
    """Format per-stage statistics into a text report.

    Args:
        statistics: Stage counters keyed by stage name.
        total_duration: Wall time of the run in seconds.

    Returns:
        Multi-line report.
    """
    lines = ["Pipeline Statistics:"]
    for stats in _ordered(statistics):
        counters = stats.as_dict()
        lines.append(
            f"  {stats.stage_name}: "
            + ", ".join(f"{key}={counters[key]}" for key in _COLUMNS),
        )
    lines.append(f"  total_duration={total_duration:.3f}s")
    return "\n".join(lines)


def build_statistics_table(
    statistics: Mapping[str, StageStatistics],
    total_duration: float,
) -> Table:
    """Build a rich table of per-stage statistics."""
    table = Table(title=f"Pipeline statistics ({total_duration:.3f}s)")
    table.add_column("Stage")
    table.add_column("Received", justify="right")
    table.add_column("Forwarded", justify="right")
    table.add_column("Dropped", justify="right")
    table.add_column("Stat failures", justify="right")

    for stats in _ordered(statistics):
        counters = stats.as_dict()
        table.add_row(stats.stage_name, *(str(counters[key]) for key in _COLUMNS))

    return table
