# availability_engine/services/external_blockers.py
"""
External calendar blockers.

Converts events fetched from third-party calendars into busy intervals.
The adapter is fail-open: a provider that cannot be read is reported in a
degraded result instead of failing the availability query, so the engine
keeps answering from internal data alone.
"""

from datetime import datetime
import logging
from typing import Iterable, List, Sequence, Union

from ..core.constants import EXTERNAL_SOURCE_SEPARATOR
from ..monitoring.prometheus_metrics import prometheus_metrics
from ..schemas.availability import BusyInterval
from ..schemas.external_calendar import ExternalBusyDegraded, ExternalBusyOk, RawCalendarEvent
from .calendar_providers.base import ExternalCalendarProvider

logger = logging.getLogger(__name__)

FREE_TRANSPARENCY = "transparent"
CANCELLED_STATUS = "cancelled"


class ExternalBlockerAdapter:
    """Merge busy time from every configured external calendar."""

    def __init__(self, providers: Sequence[ExternalCalendarProvider] = ()):
        self.providers = list(providers)

    def adapt_events(self, provider_name: str, events: Iterable[RawCalendarEvent]) -> List[BusyInterval]:
        """
        Convert raw provider events into busy intervals.

        Events missing either bound, with end before start, cancelled, or
        marked as free time are dropped.
        """
        intervals: List[BusyInterval] = []
        for event in events:
            if event.start is None or event.end is None:
                logger.debug(f"Dropping {provider_name} event {event.id}: missing start or end")
                continue
            if event.end < event.start:
                logger.debug(f"Dropping {provider_name} event {event.id}: ends before it starts")
                continue
            if event.status == CANCELLED_STATUS or event.transparency == FREE_TRANSPARENCY:
                continue

            intervals.append(
                BusyInterval(
                    start=event.start,
                    end=event.end,
                    source_id=f"{provider_name}{EXTERNAL_SOURCE_SEPARATOR}{event.id}",
                    source=provider_name,
                )
            )
        return intervals

    def collect(
        self, range_start: datetime, range_end: datetime
    ) -> Union[ExternalBusyOk, ExternalBusyDegraded]:
        """
        Busy intervals from all providers for [range_start, range_end).

        Never raises for a provider failure; the failure is reported in an
        ExternalBusyDegraded result alongside whatever the other providers
        returned.
        """
        intervals: List[BusyInterval] = []
        failed_providers: List[str] = []
        reasons: List[str] = []

        for provider in self.providers:
            try:
                events = provider.list_busy_events(range_start, range_end)
            except Exception as e:
                logger.warning(f"External calendar {provider.name} unavailable: {str(e)}")
                prometheus_metrics.record_external_calendar_failure(provider.name)
                failed_providers.append(provider.name)
                reasons.append(f"{provider.name}: {str(e)}")
                continue
            intervals.extend(self.adapt_events(provider.name, events))

        if failed_providers:
            return ExternalBusyDegraded(intervals=intervals, failed_providers=failed_providers, reasons=reasons)
        return ExternalBusyOk(intervals=intervals)
