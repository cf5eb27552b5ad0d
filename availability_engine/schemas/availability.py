# availability_engine/schemas/availability.py
"""
Availability schemas shared by the engine and its collaborators.

Rules and busy intervals are frozen snapshots built fresh per request;
slots and bookability checks are derived results that are never persisted.
"""

import datetime
from enum import Enum
from typing import Any, List, Literal, Optional

from pydantic import Field, field_validator, model_validator

from ..core.constants import INTERNAL_SOURCE
from ..core.timezone_utils import ensure_utc
from ..models.availability import RuleKind
from ..utils.time_helpers import string_to_time
from ..utils.time_utils import is_valid_window
from ._strict_base import SnapshotModel, StrictModel

DateType = datetime.date
TimeType = datetime.time
DateTimeType = datetime.datetime


def _parse_time(v: Any) -> Any:
    if isinstance(v, str):
        try:
            return string_to_time(v)
        except ValueError:
            raise ValueError(f"Invalid time of day: {v!r} (expected HH:MM)")
    return v


class _RuleFields(SnapshotModel):
    kind: RuleKind
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)
    specific_date: Optional[DateType] = None
    start_time: TimeType
    end_time: TimeType

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def parse_time_strings(cls, v: Any) -> Any:
        """Accept HH:MM strings, including the 24:00 end-of-day sentinel."""
        return _parse_time(v)

    @model_validator(mode="after")
    def validate_rule_shape(self) -> "_RuleFields":
        if self.kind == RuleKind.RECURRING:
            if self.day_of_week is None or self.specific_date is not None:
                raise ValueError("Recurring rules need day_of_week and no specific_date")
        elif self.specific_date is None or self.day_of_week is not None:
            raise ValueError("One-time rules need specific_date and no day_of_week")

        if not is_valid_window(self.start_time, self.end_time):
            raise ValueError("End time must be after start time")
        return self


class AvailabilityRuleCreate(_RuleFields):
    """Rule definition handed to a rule store for creation."""

    is_active: bool = True


class AvailabilityRuleSnapshot(_RuleFields):
    """Read-only view of one availability rule."""

    id: Optional[str] = None
    resource_id: str
    is_active: bool = True


class BusyInterval(SnapshotModel):
    """Absolute time range that blocks slots, from any source."""

    start: DateTimeType
    end: DateTimeType
    source_id: str
    source: str = INTERNAL_SOURCE

    @field_validator("start", "end")
    @classmethod
    def normalize_to_utc(cls, v: DateTimeType) -> DateTimeType:
        return ensure_utc(v)


class Slot(StrictModel):
    """Fixed-duration candidate booking window with an availability flag."""

    start: DateTimeType
    end: DateTimeType
    duration_minutes: int
    available: bool


class BookabilityReason(str, Enum):
    """First check a proposed booking failed."""

    OUTSIDE_AVAILABILITY = "outside_availability"
    IN_PAST = "in_past"
    CONFLICT = "conflict"


class BookabilityCheck(StrictModel):
    bookable: bool
    reason: Optional[BookabilityReason] = None
    conflicts: List[BusyInterval] = Field(default_factory=list)


class DailyAvailability(StrictModel):
    """Slots for one resource on one local calendar date."""

    resource_id: str
    date: DateType
    timezone: str
    slot_duration_minutes: int
    slots: List[Slot] = Field(default_factory=list)
    external_status: Literal["ok", "degraded"] = "ok"
    warnings: List[str] = Field(default_factory=list)
    outside_booking_window: bool = False

    @property
    def available_slots(self) -> List[Slot]:
        return [slot for slot in self.slots if slot.available]
