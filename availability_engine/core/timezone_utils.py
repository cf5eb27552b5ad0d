"""
Timezone utilities for the availability engine.

Rules:
- Availability rules are wall-clock times in the resource's timezone
- All instants handed to or produced by the engine are timezone-aware
- All comparisons happen on absolute instants (UTC)
"""

from datetime import date, datetime, time, timedelta, timezone

import pytz

from .exceptions import ValidationException


def get_timezone(tz_str: str) -> pytz.BaseTzInfo:
    """
    Resolve an IANA timezone name.

    Raises:
        ValidationException: If the name is unknown
    """
    try:
        return pytz.timezone(tz_str)
    except pytz.UnknownTimeZoneError:
        raise ValidationException(f"Unknown timezone: {tz_str}", code="INVALID_TIMEZONE")


def require_aware(dt: datetime, field: str) -> datetime:
    """Reject naive datetimes at engine entry points."""
    if not isinstance(dt, datetime):
        raise ValidationException(f"{field} must be a datetime", code="INVALID_DATETIME")
    if dt.tzinfo is None or dt.utcoffset() is None:
        raise ValidationException(
            f"{field} must be timezone-aware", code="NAIVE_DATETIME", details={"field": field}
        )
    return dt


def ensure_utc(dt: datetime) -> datetime:
    """Convert to UTC, treating naive datetimes as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def localize_wall_time(target_date: date, wall_time: time, tz: pytz.BaseTzInfo) -> datetime:
    """
    Turn a wall-clock time on a date into an aware UTC instant.

    Uses the timezone rules valid on target_date. Ambiguous times (fall back)
    take the first occurrence; nonexistent times (spring forward) are shifted
    forward by the size of the gap.
    """
    naive_dt = datetime.combine(target_date, wall_time)  # utc-naive-ok: localized below

    try:
        local_dt = tz.localize(naive_dt, is_dst=None)
    except pytz.exceptions.AmbiguousTimeError:
        local_dt = tz.localize(naive_dt, is_dst=True)
    except pytz.exceptions.NonExistentTimeError:
        local_dt = tz.normalize(tz.localize(naive_dt, is_dst=False))

    return local_dt.astimezone(timezone.utc)


def local_day_bounds(target_date: date, tz: pytz.BaseTzInfo) -> tuple[datetime, datetime]:
    """Return [local midnight, next local midnight) for a date as UTC instants."""
    start = localize_wall_time(target_date, time.min, tz)
    end = localize_wall_time(target_date + timedelta(days=1), time.min, tz)
    return start, end


def local_date(dt: datetime, tz: pytz.BaseTzInfo) -> date:
    """Calendar date of an aware instant in the given timezone."""
    return dt.astimezone(tz).date()
