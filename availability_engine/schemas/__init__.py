from .availability import (
    AvailabilityRuleCreate,
    AvailabilityRuleSnapshot,
    BookabilityCheck,
    BookabilityReason,
    BusyInterval,
    DailyAvailability,
    Slot,
)
from .external_calendar import ExternalBusyDegraded, ExternalBusyOk, ExternalBusyResult, RawCalendarEvent
from .schedule import EffectiveScheduleConfig, ProductSnapshot, ScheduleConfigSnapshot

__all__ = [
    "AvailabilityRuleCreate",
    "AvailabilityRuleSnapshot",
    "BookabilityCheck",
    "BookabilityReason",
    "BusyInterval",
    "DailyAvailability",
    "EffectiveScheduleConfig",
    "ExternalBusyDegraded",
    "ExternalBusyOk",
    "ExternalBusyResult",
    "ProductSnapshot",
    "RawCalendarEvent",
    "ScheduleConfigSnapshot",
    "Slot",
]
