"""Derivation of work segments from ledger events."""

from datetime import datetime
from typing import Sequence

from .models.ledger import LedgerEvent
from .models.segment import Segment


def compute_segments(events: Sequence[LedgerEvent], now: datetime) -> list[Segment]:
    """Turn an ordered event sequence into work segments.

    Each event opens a segment that lasts until the next event, STOP events
    included (they become separator segments). If the last event is not a
    STOP, a trailing segment stays open until ``now``.

    Args:
        events: Events in append order (not re-sorted)
        now: End of the open trailing segment

    Returns:
        Segments in the same order as the events that opened them
    """
    segments = [
        Segment(title=current.title, duration=following.timestamp - current.timestamp)
        for current, following in zip(events, events[1:])
    ]

    if events and not events[-1].is_stop:
        last = events[-1]
        segments.append(Segment(title=last.title, duration=now - last.timestamp))

    return segments
