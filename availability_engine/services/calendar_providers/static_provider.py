"""In-memory calendar provider for local development and tests."""

from datetime import datetime
from typing import Iterable, List, Optional

from ...schemas.external_calendar import RawCalendarEvent
from ...utils.intervals import overlaps
from .base import ExternalCalendarProvider


class StaticCalendarProvider(ExternalCalendarProvider):
    def __init__(
        self,
        events: Iterable[RawCalendarEvent] = (),
        name: str = "static",
        error: Optional[Exception] = None,
    ) -> None:
        self.name = name
        self.events = list(events)
        self.error = error

    def list_busy_events(self, range_start: datetime, range_end: datetime) -> List[RawCalendarEvent]:
        if self.error is not None:
            raise self.error
        # Incomplete events pass through untouched; the adapter decides what to drop
        return [
            event
            for event in self.events
            if event.start is None
            or event.end is None
            or overlaps(event.start, event.end, range_start, range_end)
        ]
