"""Presentation helpers for mate reports."""

from dataclasses import dataclass
from datetime import timedelta
from typing import Sequence

from .aggregate import filter_separators, group_by_title, total_duration
from .models.ledger import STOP_TOKEN
from .models.segment import Segment


def format_duration(duration: timedelta) -> str:
    """Format a duration as ``1h2m3s``, ``2m3s`` or ``3s``.

    Sub-second parts are dropped.
    """
    total = int(duration.total_seconds())
    sign = "-" if total < 0 else ""
    hours, rest = divmod(abs(total), 3600)
    minutes, seconds = divmod(rest, 60)

    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def ordered_totals(segments: Sequence[Segment]) -> list[tuple[str, timedelta]]:
    """Per-title totals of worked segments, ordered by first occurrence."""
    worked = filter_separators(segments)
    totals = group_by_title(worked)

    order = dict.fromkeys(segment.title for segment in worked)

    return [(title, totals[title]) for title in order]


@dataclass(frozen=True)
class DayInfo:
    """Snapshot of the current status against the daily target."""

    status: str
    current_total: timedelta
    worked: timedelta
    work_day: timedelta

    @property
    def working(self) -> bool:
        return self.status != STOP_TOKEN

    @property
    def remaining(self) -> timedelta:
        return self.work_day - self.worked


def build_day_info(segments: Sequence[Segment], status: str, work_day: timedelta) -> DayInfo:
    """Summarize worked time and the current ticket's total.

    Args:
        segments: Raw segments, separators included
        status: Current session status (a title, or STOP)
        work_day: Daily target duration

    Returns:
        DayInfo for the info report
    """
    worked = filter_separators(segments)
    current_total = timedelta()
    if status != STOP_TOKEN:
        current_total = group_by_title(worked).get(status, timedelta())

    return DayInfo(
        status=status,
        current_total=current_total,
        worked=total_duration(worked),
        work_day=work_day,
    )
