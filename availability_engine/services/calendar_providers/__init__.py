from .base import ExternalCalendarProvider
from .factory import create_calendar_provider
from .google_provider import GoogleCalendarProvider
from .static_provider import StaticCalendarProvider

__all__ = [
    "ExternalCalendarProvider",
    "GoogleCalendarProvider",
    "StaticCalendarProvider",
    "create_calendar_provider",
]
