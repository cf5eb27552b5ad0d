# availability_engine/schemas/external_calendar.py
"""
External calendar schemas.

RawCalendarEvent is the provider-neutral projection of an event as fetched;
the adapter result is a tagged union so callers can tell a fully merged
answer from a partial one without exception control flow.
"""

import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from .availability import BusyInterval

DateTimeType = datetime.datetime


class RawCalendarEvent(BaseModel):
    id: str
    start: Optional[DateTimeType] = None
    end: Optional[DateTimeType] = None
    status: Optional[str] = None
    transparency: Optional[str] = None
    summary: Optional[str] = None


class ExternalBusyOk(BaseModel):
    status: Literal["ok"] = "ok"
    intervals: List[BusyInterval] = Field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return False


class ExternalBusyDegraded(BaseModel):
    status: Literal["degraded"] = "degraded"
    intervals: List[BusyInterval] = Field(default_factory=list)
    failed_providers: List[str] = Field(default_factory=list)
    reasons: List[str] = Field(default_factory=list)

    @property
    def degraded(self) -> bool:
        return True


ExternalBusyResult = Annotated[Union[ExternalBusyOk, ExternalBusyDegraded], Field(discriminator="status")]
