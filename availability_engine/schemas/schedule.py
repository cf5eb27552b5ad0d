# availability_engine/schemas/schedule.py
from typing import Optional

from pydantic import Field, field_validator
import pytz

from ._strict_base import SnapshotModel, StrictModel


def _validate_timezone(v: str) -> str:
    try:
        pytz.timezone(v)
    except pytz.UnknownTimeZoneError:
        raise ValueError(f"Unknown timezone: {v}")
    return v


class ScheduleConfigSnapshot(SnapshotModel):
    """Stored scheduling defaults for a resource."""

    resource_id: str
    timezone: str
    slot_duration_minutes: int = Field(gt=0)
    buffer_minutes: int = Field(default=0, ge=0)
    lookahead_days: int = Field(default=30, ge=0)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        return _validate_timezone(v)


class ProductSnapshot(SnapshotModel):
    id: str
    resource_id: str
    name: str
    duration_minutes: Optional[int] = None
    is_active: bool = True


class EffectiveScheduleConfig(StrictModel):
    """
    Scheduling configuration resolved for one request.

    slot_duration_minutes already reflects any product override;
    buffer_minutes and lookahead_days are applied by the availability
    service, never inside slot math.
    """

    resource_id: str
    timezone: str
    slot_duration_minutes: int = Field(gt=0)
    buffer_minutes: int = Field(default=0, ge=0)
    lookahead_days: int = Field(default=30, ge=0)
    product_id: Optional[str] = None

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        return _validate_timezone(v)
