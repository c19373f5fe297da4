"""Aggregation of work segments into totals."""

from collections import defaultdict
from datetime import timedelta
from typing import Iterable

from .models.ledger import STOP_TOKEN
from .models.segment import Segment


def filter_separators(segments: Iterable[Segment]) -> list[Segment]:
    """Drop STOP segments, keeping the order of the rest."""
    return [segment for segment in segments if segment.title != STOP_TOKEN]


def group_by_title(segments: Iterable[Segment]) -> dict[str, timedelta]:
    """Sum durations per title.

    The iteration order of the result is unspecified; presentation code
    must impose its own ordering.
    """
    totals: dict[str, timedelta] = defaultdict(timedelta)
    for segment in segments:
        totals[segment.title] += segment.duration
    return dict(totals)


def total_duration(segments: Iterable[Segment]) -> timedelta:
    return sum((segment.duration for segment in segments), timedelta())
