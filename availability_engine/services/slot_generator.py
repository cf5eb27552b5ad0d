# availability_engine/services/slot_generator.py
"""
Slot generation for the availability engine.

Discretizes each applicable rule window into back-to-back, fixed-duration
slots and flags every slot against the busy intervals and the current
instant. Unavailable slots stay in the output so callers can tell
"fully booked" apart from "outside business hours".

Pure function of its inputs: no I/O, no clock reads, no shared state.
"""

from datetime import date, datetime, timedelta
import logging
from typing import List, Sequence, Set, Tuple

from ..core.exceptions import ValidationException
from ..core.timezone_utils import get_timezone, require_aware
from ..schemas.availability import AvailabilityRuleSnapshot, BusyInterval, Slot
from ..utils.intervals import find_overlapping
from .rule_resolution import resolve_applicable_rules, rule_window

logger = logging.getLogger(__name__)


def validate_duration(duration_minutes: int) -> None:
    if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int) or duration_minutes <= 0:
        raise ValidationException(
            "Slot duration must be a positive number of minutes",
            code="INVALID_DURATION",
            details={"duration_minutes": duration_minutes},
        )


def validate_date(target_date: date) -> None:
    # datetime is a date subclass; a datetime here means the caller mixed up instants and dates
    if not isinstance(target_date, date) or isinstance(target_date, datetime):
        raise ValidationException(f"Invalid calendar date: {target_date!r}", code="INVALID_DATE")


def generate_slots(
    target_date: date,
    resource_id: str,
    duration_minutes: int,
    rules: Sequence[AvailabilityRuleSnapshot],
    busy_intervals: Sequence[BusyInterval],
    now: datetime,
    timezone: str,
    dedupe: bool = False,
) -> List[Slot]:
    """
    Generate candidate slots for a resource on one local calendar date.

    Args:
        target_date: Local calendar date in the resource's timezone
        resource_id: Resource whose rules are resolved
        duration_minutes: Slot length
        rules: The resource's rules (inactive ones are ignored)
        busy_intervals: Committed and externally blocked intervals
        now: Current instant (timezone-aware)
        timezone: IANA timezone the rules' wall-clock times are expressed in
        dedupe: Drop repeated (start, end) pairs produced by overlapping rules

    Returns:
        Slots per window in rule resolution order; windows are not re-sorted

    Raises:
        ValidationException: On malformed input, before any computation
    """
    validate_date(target_date)
    validate_duration(duration_minutes)
    require_aware(now, "now")
    tz = get_timezone(timezone)

    duration = timedelta(minutes=duration_minutes)
    slots: List[Slot] = []
    seen: Set[Tuple[datetime, datetime]] = set()

    for rule in resolve_applicable_rules(rules, target_date, resource_id):
        window_start, window_end = rule_window(rule, target_date, tz)
        cursor = window_start

        while cursor + duration <= window_end:
            slot_end = cursor + duration

            if dedupe and (cursor, slot_end) in seen:
                cursor = slot_end
                continue
            seen.add((cursor, slot_end))

            conflict = bool(find_overlapping(cursor, slot_end, busy_intervals))
            is_past = slot_end <= now
            slots.append(
                Slot(
                    start=cursor,
                    end=slot_end,
                    duration_minutes=duration_minutes,
                    available=not conflict and not is_past,
                )
            )
            cursor = slot_end

    logger.debug(
        f"Generated {len(slots)} slots for {resource_id} on {target_date} "
        f"({duration_minutes}min, {len(busy_intervals)} busy intervals)"
    )
    return slots
