# availability_engine/core/config.py
import logging
from typing import List

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import pytz

from ..utils.time_helpers import string_to_time
from ..utils.time_utils import is_valid_window

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # Persistence collaborator (rules, bookings, products)
    database_url: str = Field(
        default="sqlite:///./availability.db",
        description="SQLAlchemy URL for the rule/booking store",
    )

    # Resource schedule defaults, used when a resource has no stored config
    default_timezone: str = Field(
        default="America/New_York",
        description="IANA timezone applied to resources without an explicit one",
    )
    default_slot_duration_minutes: int = Field(default=60, gt=0)
    default_buffer_minutes: int = Field(default=0, ge=0)
    default_lookahead_days: int = Field(default=30, ge=0)

    # Bootstrap weekly schedule (date.weekday(): 0 = Monday)
    default_schedule_days: List[int] = Field(default_factory=lambda: [0, 1, 2, 3, 4])
    default_schedule_start: str = "09:00"
    default_schedule_end: str = "17:00"

    # Overlapping recurring/one-time rules yield duplicate slots unless enabled
    dedupe_union_slots: bool = False

    # External calendars
    google_calendar_api_base: str = "https://www.googleapis.com/calendar/v3"
    external_calendar_timeout_seconds: float = Field(default=10.0, gt=0)

    # Booking lock (Redis SET NX EX, shared by every worker)
    redis_url: str = "redis://localhost:6379"
    lock_namespace: str = "availability"
    booking_lock_ttl_seconds: int = Field(default=90, gt=0)

    slow_operation_threshold_seconds: float = 1.0

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("default_timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            pytz.timezone(v)
        except pytz.UnknownTimeZoneError:
            raise ValueError(f"Unknown timezone: {v}")
        return v

    @field_validator("default_schedule_days")
    @classmethod
    def validate_schedule_days(cls, v: List[int]) -> List[int]:
        for day in v:
            if not 0 <= day <= 6:
                raise ValueError(f"Day of week out of range: {day}")
        return sorted(set(v))

    @model_validator(mode="after")
    def _check_default_window(self) -> "Settings":
        start = string_to_time(self.default_schedule_start)
        end = string_to_time(self.default_schedule_end)
        if not is_valid_window(start, end):
            raise ValueError("default_schedule_start must be before default_schedule_end")
        return self


settings = Settings()
