from __future__ import annotations

from datetime import time

from ..core.constants import SECONDS_PER_DAY


def time_to_seconds(t: time, *, is_end_time: bool = False) -> int:
    """
    Convert time to seconds since midnight.

    Args:
        t: Time object (sub-second precision is ignored).
        is_end_time: If True, treat time(0, 0) as 86400 (end of day).

    Returns:
        Seconds since midnight (0-86400).
    """
    seconds = t.hour * 3600 + t.minute * 60 + t.second
    if is_end_time and seconds == 0:
        return SECONDS_PER_DAY
    return seconds


def is_valid_window(start: time, end: time) -> bool:
    """A window is valid when it starts strictly before it ends (00:00 end = 24:00)."""
    return time_to_seconds(start) < time_to_seconds(end, is_end_time=True)
