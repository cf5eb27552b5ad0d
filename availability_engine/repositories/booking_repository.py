# availability_engine/repositories/booking_repository.py
"""
Booking repository.

Implements the BusyIntervalSource collaborator from internally tracked
bookings. Booking instants are stored in UTC.
"""

from datetime import datetime
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..core.timezone_utils import ensure_utc
from ..models.booking import BLOCKING_STATUSES, Booking, BookingStatus
from ..schemas.availability import BusyInterval
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class BookingRepository(BaseRepository[Booking]):
    """Repository for booking data access."""

    def __init__(self, db: Session):
        super().__init__(db, Booking)

    def get_busy_intervals_for_resource(
        self,
        resource_id: str,
        range_start: datetime,
        range_end: datetime,
        exclude_booking_id: Optional[str] = None,
    ) -> List[BusyInterval]:
        """
        Busy intervals for bookings that still hold time and touch the range.

        The query is a coarse pre-filter on the range; overlap with a
        specific slot or booking is decided by the engine.

        Args:
            resource_id: The resource ID
            range_start: Start of the queried range
            range_end: End of the queried range
            exclude_booking_id: Optional booking ID to leave out

        Returns:
            BusyInterval per blocking booking, ordered by start
        """
        start_utc = ensure_utc(range_start)
        end_utc = ensure_utc(range_end)
        try:
            query = self.db.query(Booking).filter(
                Booking.resource_id == resource_id,
                Booking.status.in_([status.value for status in BLOCKING_STATUSES]),
                Booking.start_at < end_utc,
                Booking.end_at > start_utc,
            )
            if exclude_booking_id:
                query = query.filter(Booking.id != exclude_booking_id)

            bookings = query.order_by(Booking.start_at).all()
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting busy intervals for {resource_id}: {str(e)}")
            raise RepositoryException(f"Failed to get bookings: {str(e)}")

        return [BusyInterval(start=b.start_at, end=b.end_at, source_id=b.id) for b in bookings]

    def create_booking(
        self,
        resource_id: str,
        start_at: datetime,
        end_at: datetime,
        status: BookingStatus = BookingStatus.CONFIRMED,
        product_id: Optional[str] = None,
    ) -> Booking:
        """Create a booking row (no commit)."""
        return self.create(
            resource_id=resource_id,
            product_id=product_id,
            start_at=ensure_utc(start_at),
            end_at=ensure_utc(end_at),
            status=status.value,
        )
