"""
Service layer for the availability engine.

Pure slot/conflict logic lives in slot_generator, rule_resolution and
conflict_checker; AvailabilityService wires them to collaborators.
"""

from .availability_service import AvailabilityService
from .base import BaseService
from .calendar_providers import (
    ExternalCalendarProvider,
    GoogleCalendarProvider,
    StaticCalendarProvider,
    create_calendar_provider,
)
from .conflict_checker import ConflictChecker
from .default_schedule import DefaultScheduleInitializer
from .external_blockers import ExternalBlockerAdapter
from .schedule_config_service import ScheduleConfigService, resolve_slot_duration
from .slot_generator import generate_slots

__all__ = [
    "AvailabilityService",
    "BaseService",
    "ConflictChecker",
    "DefaultScheduleInitializer",
    "ExternalBlockerAdapter",
    "ExternalCalendarProvider",
    "GoogleCalendarProvider",
    "ScheduleConfigService",
    "StaticCalendarProvider",
    "create_calendar_provider",
    "generate_slots",
    "resolve_slot_duration",
]
