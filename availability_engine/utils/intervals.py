"""
Half-open interval arithmetic.

Every comparison of two time ranges in the engine goes through overlaps()
so slot generation and booking conflict checks cannot drift apart.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Sequence, TypeVar

from ..schemas.availability import BusyInterval

T = TypeVar("T", datetime, int, float)


def overlaps(a_start: T, a_end: T, b_start: T, b_end: T) -> bool:
    """
    Check whether [a_start, a_end) and [b_start, b_end) intersect.

    Touching intervals (a_end == b_start) do not overlap, and a zero-length
    interval never overlaps anything.
    """
    if a_start >= a_end or b_start >= b_end:
        return False
    return a_start < b_end and a_end > b_start


def find_overlapping(
    start: datetime,
    end: datetime,
    intervals: Iterable[BusyInterval],
    exclude_source_id: Optional[str] = None,
) -> List[BusyInterval]:
    """Busy intervals overlapping [start, end), in input order."""
    return [
        interval
        for interval in intervals
        if exclude_source_id is None or interval.source_id != exclude_source_id
        if overlaps(start, end, interval.start, interval.end)
    ]


def pad_intervals(intervals: Sequence[BusyInterval], minutes: int) -> List[BusyInterval]:
    """Widen each busy interval by a buffer on both sides."""
    if minutes <= 0:
        return list(intervals)
    pad = timedelta(minutes=minutes)
    return [
        interval.model_copy(update={"start": interval.start - pad, "end": interval.end + pad})
        for interval in intervals
    ]
