# availability_engine/services/availability_service.py
"""
Availability Service for the availability engine.

Orchestrates the read path and the write gate:
- Resolve the effective configuration (timezone, duration, buffer, lookahead)
- Fetch rules and committed bookings from the injected collaborators
- Merge external calendar blockers (fail-open)
- Generate slots, or re-check a proposed booking at commit time

The read path is advisory. Callers persisting a booking go through
ensure_bookable/commit_booking, which re-fetch fresh data.
"""

from contextlib import contextmanager
from datetime import date, datetime, timedelta
from typing import Callable, Iterator, List, Optional, Tuple, TypeVar

from ..core.booking_lock import booking_lock_sync
from ..core.config import settings
from ..core.exceptions import RepositoryException, ServiceException, SlotUnavailableException
from ..core.timezone_utils import get_timezone, local_date, local_day_bounds, require_aware
from ..repositories.interfaces import BusyIntervalSource, RuleSource
from ..schemas.availability import BookabilityCheck, BusyInterval, DailyAvailability
from ..schemas.schedule import EffectiveScheduleConfig
from ..utils.intervals import pad_intervals
from .base import BaseService
from .conflict_checker import ConflictChecker, raise_for_check, validate_interval
from .external_blockers import ExternalBlockerAdapter
from .schedule_config_service import ScheduleConfigService
from .slot_generator import generate_slots, validate_date

T = TypeVar("T")


class AvailabilityService(BaseService):
    """
    Service answering "when can this resource be booked?".

    All collaborators are passed in; nothing here reads a clock or opens
    a connection on its own.
    """

    def __init__(
        self,
        rule_source: RuleSource,
        busy_source: BusyIntervalSource,
        config_service: ScheduleConfigService,
        external_blockers: Optional[ExternalBlockerAdapter] = None,
        conflict_checker: Optional[ConflictChecker] = None,
    ):
        super().__init__()
        self.rule_source = rule_source
        self.busy_source = busy_source
        self.config_service = config_service
        self.external_blockers = external_blockers
        self.conflict_checker = conflict_checker or ConflictChecker(rule_source, busy_source)

    @contextmanager
    def _collaborator(self, what: str) -> Iterator[None]:
        """Fail the whole query when a collaborator cannot answer."""
        try:
            yield
        except RepositoryException as e:
            self.logger.error(f"Failed to load {what}: {str(e)}")
            raise ServiceException(
                f"Could not load {what}",
                code="COLLABORATOR_UNAVAILABLE",
                details={"collaborator": what},
            ) from e

    def _effective_config(self, resource_id: str, product_id: Optional[str]) -> EffectiveScheduleConfig:
        with self._collaborator("schedule configuration"):
            return self.config_service.get_effective_config(resource_id, product_id)

    def _collect_busy(
        self,
        resource_id: str,
        range_start: datetime,
        range_end: datetime,
        buffer_minutes: int,
        exclude_booking_id: Optional[str] = None,
    ) -> Tuple[List[BusyInterval], List[str]]:
        """
        Internal and external busy intervals for a range, buffer applied.

        Returns:
            Tuple of (busy intervals, degradation warnings)
        """
        padding = timedelta(minutes=buffer_minutes)
        query_start, query_end = range_start - padding, range_end + padding

        with self._collaborator("bookings"):
            busy = [
                interval
                for interval in self.busy_source.get_busy_intervals_for_resource(resource_id, query_start, query_end)
                if exclude_booking_id is None or interval.source_id != exclude_booking_id
            ]

        warnings: List[str] = []
        if self.external_blockers is not None:
            external = self.external_blockers.collect(query_start, query_end)
            busy.extend(external.intervals)
            if external.degraded:
                self.logger.warning(
                    f"Availability for {resource_id} computed without: {', '.join(external.failed_providers)}"
                )
                warnings.extend(external.reasons)

        return pad_intervals(busy, buffer_minutes), warnings

    @BaseService.measure_operation("get_available_slots")
    def get_available_slots(
        self,
        resource_id: str,
        target_date: date,
        *,
        now: datetime,
        product_id: Optional[str] = None,
    ) -> DailyAvailability:
        """
        Slots for a resource on one local calendar date.

        Args:
            resource_id: The resource
            target_date: Calendar date in the resource's timezone
            now: Current instant (timezone-aware)
            product_id: Optional product whose duration overrides the default

        Returns:
            DailyAvailability with every slot flagged available or not

        Raises:
            ValidationException: On malformed input
            ServiceException: If rules or bookings cannot be loaded
        """
        validate_date(target_date)
        require_aware(now, "now")

        config = self._effective_config(resource_id, product_id)
        tz = get_timezone(config.timezone)

        result = DailyAvailability(
            resource_id=resource_id,
            date=target_date,
            timezone=config.timezone,
            slot_duration_minutes=config.slot_duration_minutes,
        )

        today = local_date(now, tz)
        if target_date < today or target_date > today + timedelta(days=config.lookahead_days):
            result.outside_booking_window = True
            return result

        with self._collaborator("availability rules"):
            rules = list(self.rule_source.get_active_rules(resource_id))

        day_start, day_end = local_day_bounds(target_date, tz)
        busy, warnings = self._collect_busy(resource_id, day_start, day_end, config.buffer_minutes)

        slots = generate_slots(
            target_date,
            resource_id,
            config.slot_duration_minutes,
            rules,
            busy,
            now,
            config.timezone,
            dedupe=settings.dedupe_union_slots,
        )
        # Stable sort keeps duplicates from overlapping rules adjacent
        result.slots = sorted(slots, key=lambda slot: slot.start)
        if warnings:
            result.external_status = "degraded"
            result.warnings = warnings
        return result

    def has_available_slots(
        self,
        resource_id: str,
        target_date: date,
        *,
        now: datetime,
        product_id: Optional[str] = None,
    ) -> bool:
        availability = self.get_available_slots(resource_id, target_date, now=now, product_id=product_id)
        return bool(availability.available_slots)

    @BaseService.measure_operation("check_booking")
    def check_booking(
        self,
        resource_id: str,
        start: datetime,
        end: datetime,
        *,
        now: datetime,
        product_id: Optional[str] = None,
        exclude_booking_id: Optional[str] = None,
    ) -> BookabilityCheck:
        """
        Re-check a proposed booking against fresh rules and busy time.

        External calendars are merged fail-open here too; a degraded
        provider is logged and the check proceeds on the remaining data.
        """
        validate_interval(start, end)
        require_aware(now, "now")

        config = self._effective_config(resource_id, product_id)
        with self._collaborator("availability rules"):
            rules = list(self.rule_source.get_active_rules(resource_id))
        busy, _ = self._collect_busy(resource_id, start, end, config.buffer_minutes, exclude_booking_id)

        return self.conflict_checker.check_bookable(
            resource_id,
            start,
            end,
            now=now,
            timezone=config.timezone,
            exclude_source_id=exclude_booking_id,
            rules=rules,
            busy_intervals=busy,
        )

    def ensure_bookable(
        self,
        resource_id: str,
        start: datetime,
        end: datetime,
        *,
        now: datetime,
        product_id: Optional[str] = None,
        exclude_booking_id: Optional[str] = None,
    ) -> None:
        """
        Raise unless the proposed booking can be committed right now.

        Raises:
            OutsideAvailabilityException: No rule window covers the booking
            PastSlotException: The booking has already ended
            SlotUnavailableException: The time is taken
        """
        check = self.check_booking(
            resource_id,
            start,
            end,
            now=now,
            product_id=product_id,
            exclude_booking_id=exclude_booking_id,
        )
        raise_for_check(check, start, end)

    def commit_booking(
        self,
        resource_id: str,
        start: datetime,
        end: datetime,
        persist: Callable[[], T],
        *,
        now: datetime,
        product_id: Optional[str] = None,
        exclude_booking_id: Optional[str] = None,
        lock_ttl_s: Optional[int] = None,
    ) -> T:
        """
        Re-check and persist a booking while holding the resource's lock.

        Args:
            persist: Callable that writes the booking; only invoked when the
                re-check passes
            lock_ttl_s: Lock expiry in seconds (defaults to settings.booking_lock_ttl_seconds)

        Returns:
            Whatever persist returns
        """
        with booking_lock_sync(resource_id, ttl_s=lock_ttl_s) as acquired:
            if not acquired:
                raise SlotUnavailableException(
                    "Another booking for this time is being processed. Please try again.",
                    details={"resource_id": resource_id},
                )
            self.ensure_bookable(
                resource_id,
                start,
                end,
                now=now,
                product_id=product_id,
                exclude_booking_id=exclude_booking_id,
            )
            result = persist()

        self.log_operation("commit_booking", resource_id=resource_id, start=start.isoformat())
        return result
