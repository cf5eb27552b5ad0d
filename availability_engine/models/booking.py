# availability_engine/models/booking.py
"""
Booking model as seen by the availability engine.

Only the fields needed to block time are kept: the resource, the absolute
interval and the lifecycle status.
"""

from enum import Enum
import logging

from sqlalchemy import Column, DateTime, Index, String
from sqlalchemy.sql import func

from ..core.ulid_helper import generate_ulid
from ..database import Base

logger = logging.getLogger(__name__)


class BookingStatus(str, Enum):
    """Booking lifecycle statuses."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"


# Statuses whose time is still committed and must block new bookings
BLOCKING_STATUSES = [BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingStatus.COMPLETED]


class Booking(Base):
    """Committed booking occupying [start_at, end_at) of a resource's time."""

    __tablename__ = "bookings"

    id = Column(String(26), primary_key=True, index=True, default=generate_ulid)
    resource_id = Column(String(64), nullable=False, index=True)
    product_id = Column(String(26), nullable=True)
    start_at = Column(DateTime(timezone=True), nullable=False)
    end_at = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(20), nullable=False, default=BookingStatus.CONFIRMED.value, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (Index("idx_bookings_resource_start", "resource_id", "start_at"),)

    def __repr__(self) -> str:
        return f"<Booking {self.id} {self.resource_id} {self.start_at}-{self.end_at} {self.status}>"
