"""Provider-agnostic external calendar interfaces."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from ...schemas.external_calendar import RawCalendarEvent


class ExternalCalendarProvider(ABC):
    """
    Source of busy time mirrored from a third-party calendar.

    Implementations receive already-acquired credentials; token refresh is
    the caller's concern. Failures should raise ExternalCalendarException.
    """

    name: str

    @abstractmethod
    def list_busy_events(self, range_start: datetime, range_end: datetime) -> List[RawCalendarEvent]:
        pass
