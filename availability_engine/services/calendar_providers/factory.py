"""Calendar provider factory."""

from typing import Any

from ...core.exceptions import ValidationException
from .base import ExternalCalendarProvider
from .google_provider import GoogleCalendarProvider
from .static_provider import StaticCalendarProvider


def create_calendar_provider(kind: str, **kwargs: Any) -> ExternalCalendarProvider:
    normalized = (kind or "").strip().lower()
    if normalized == "google":
        return GoogleCalendarProvider(**kwargs)
    if normalized == "static":
        return StaticCalendarProvider(**kwargs)
    raise ValidationException(f"Unknown calendar provider: {kind}", code="UNKNOWN_CALENDAR_PROVIDER")
