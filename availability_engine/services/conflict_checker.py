# availability_engine/services/conflict_checker.py
"""
Conflict Checker Service for the availability engine.

Handles booking conflict detection and validation:
- Checking whether a time range overlaps committed or external busy time
- Excluding one booking so it can be edited in place
- The composite bookability gate (rule coverage, past time, conflicts)

is_bookable/ensure_bookable is the authoritative check a caller runs
immediately before persisting a booking. It is deterministic and
side-effect-free over the data it is given, so re-running it at commit
time is always safe.
"""

from datetime import datetime
import logging
from typing import List, Optional, Sequence

from ..core.exceptions import (
    OutsideAvailabilityException,
    PastSlotException,
    ServiceException,
    SlotUnavailableException,
    ValidationException,
)
from ..core.timezone_utils import get_timezone, local_date, require_aware
from ..repositories.interfaces import BusyIntervalSource, RuleSource
from ..schemas.availability import (
    AvailabilityRuleSnapshot,
    BookabilityCheck,
    BookabilityReason,
    BusyInterval,
)
from ..utils.intervals import find_overlapping
from .base import BaseService
from .rule_resolution import resolve_applicable_rules, rule_window

logger = logging.getLogger(__name__)


def validate_interval(start: datetime, end: datetime) -> None:
    """Reject naive or empty/inverted booking intervals."""
    require_aware(start, "start")
    require_aware(end, "end")
    if start >= end:
        raise ValidationException(
            "End time must be after start time",
            code="INVALID_INTERVAL",
            details={"start": start.isoformat(), "end": end.isoformat()},
        )


class ConflictChecker(BaseService):
    """
    Service for checking booking conflicts and bookability.

    Works on supplied snapshots when given; otherwise pulls rules and busy
    intervals from the injected collaborators.
    """

    def __init__(
        self,
        rule_source: Optional[RuleSource] = None,
        busy_source: Optional[BusyIntervalSource] = None,
    ):
        """
        Initialize conflict checker service.

        Args:
            rule_source: Optional collaborator returning a resource's active rules
            busy_source: Optional collaborator returning a resource's busy intervals
        """
        super().__init__()
        self.rule_source = rule_source
        self.busy_source = busy_source

    def _load_busy(self, resource_id: str, start: datetime, end: datetime) -> List[BusyInterval]:
        if self.busy_source is None:
            raise ServiceException("No busy interval source configured", code="MISSING_BUSY_SOURCE")
        return list(self.busy_source.get_busy_intervals_for_resource(resource_id, start, end))

    def _load_rules(self, resource_id: str) -> List[AvailabilityRuleSnapshot]:
        if self.rule_source is None:
            raise ServiceException("No rule source configured", code="MISSING_RULE_SOURCE")
        return list(self.rule_source.get_active_rules(resource_id))

    @BaseService.measure_operation("find_conflicts")
    def find_conflicts(
        self,
        resource_id: str,
        start: datetime,
        end: datetime,
        exclude_source_id: Optional[str] = None,
        busy_intervals: Optional[Sequence[BusyInterval]] = None,
    ) -> List[BusyInterval]:
        """
        Busy intervals overlapping [start, end).

        Args:
            resource_id: The resource to check
            start: Start of the proposed range (aware)
            end: End of the proposed range (aware)
            exclude_source_id: Booking/event id to ignore (edit in place)
            busy_intervals: Pre-fetched busy intervals; fetched when omitted

        Returns:
            Overlapping busy intervals
        """
        validate_interval(start, end)
        if busy_intervals is None:
            busy_intervals = self._load_busy(resource_id, start, end)

        conflicts = find_overlapping(start, end, busy_intervals, exclude_source_id)

        if conflicts:
            self.logger.warning(
                f"Found {len(conflicts)} conflicts for {resource_id} "
                f"between {start.isoformat()}-{end.isoformat()}"
            )

        return conflicts

    def has_scheduling_conflict(
        self,
        resource_id: str,
        start: datetime,
        end: datetime,
        exclude_source_id: Optional[str] = None,
        busy_intervals: Optional[Sequence[BusyInterval]] = None,
    ) -> bool:
        """True iff any busy interval other than exclude_source_id overlaps [start, end)."""
        return len(self.find_conflicts(resource_id, start, end, exclude_source_id, busy_intervals)) > 0

    def is_covered_by_rules(
        self,
        resource_id: str,
        start: datetime,
        end: datetime,
        timezone: str,
        rules: Sequence[AvailabilityRuleSnapshot],
    ) -> bool:
        """Check that one active rule window on start's local date contains [start, end]."""
        tz = get_timezone(timezone)
        booking_date = local_date(start, tz)

        for rule in resolve_applicable_rules(rules, booking_date, resource_id):
            window_start, window_end = rule_window(rule, booking_date, tz)
            if window_start <= start and end <= window_end:
                return True
        return False

    @BaseService.measure_operation("check_bookable")
    def check_bookable(
        self,
        resource_id: str,
        start: datetime,
        end: datetime,
        *,
        now: datetime,
        timezone: str,
        exclude_source_id: Optional[str] = None,
        rules: Optional[Sequence[AvailabilityRuleSnapshot]] = None,
        busy_intervals: Optional[Sequence[BusyInterval]] = None,
    ) -> BookabilityCheck:
        """
        Composite bookability check.

        Checks, in order:
        - Rule coverage on the booking's local date
        - The booking has not already ended
        - No scheduling conflict

        Returns:
            BookabilityCheck with the first failing reason, if any
        """
        validate_interval(start, end)
        require_aware(now, "now")

        if rules is None:
            rules = self._load_rules(resource_id)

        if not self.is_covered_by_rules(resource_id, start, end, timezone, rules):
            return BookabilityCheck(bookable=False, reason=BookabilityReason.OUTSIDE_AVAILABILITY)

        if end <= now:
            return BookabilityCheck(bookable=False, reason=BookabilityReason.IN_PAST)

        conflicts = self.find_conflicts(resource_id, start, end, exclude_source_id, busy_intervals)
        if conflicts:
            return BookabilityCheck(bookable=False, reason=BookabilityReason.CONFLICT, conflicts=conflicts)

        return BookabilityCheck(bookable=True)

    def is_bookable(
        self,
        resource_id: str,
        start: datetime,
        end: datetime,
        *,
        now: datetime,
        timezone: str,
        exclude_source_id: Optional[str] = None,
        rules: Optional[Sequence[AvailabilityRuleSnapshot]] = None,
        busy_intervals: Optional[Sequence[BusyInterval]] = None,
    ) -> bool:
        return self.check_bookable(
            resource_id,
            start,
            end,
            now=now,
            timezone=timezone,
            exclude_source_id=exclude_source_id,
            rules=rules,
            busy_intervals=busy_intervals,
        ).bookable

    def ensure_bookable(
        self,
        resource_id: str,
        start: datetime,
        end: datetime,
        *,
        now: datetime,
        timezone: str,
        exclude_source_id: Optional[str] = None,
        rules: Optional[Sequence[AvailabilityRuleSnapshot]] = None,
        busy_intervals: Optional[Sequence[BusyInterval]] = None,
    ) -> None:
        """
        Raise unless the proposed booking passes check_bookable.

        Raises:
            OutsideAvailabilityException: No rule window covers the booking
            PastSlotException: The booking has already ended
            SlotUnavailableException: The time is taken
        """
        check = self.check_bookable(
            resource_id,
            start,
            end,
            now=now,
            timezone=timezone,
            exclude_source_id=exclude_source_id,
            rules=rules,
            busy_intervals=busy_intervals,
        )
        raise_for_check(check, start, end)


def raise_for_check(check: BookabilityCheck, start: datetime, end: datetime) -> None:
    """Translate a failed BookabilityCheck into its domain exception."""
    if check.bookable:
        return
    if check.reason == BookabilityReason.OUTSIDE_AVAILABILITY:
        raise OutsideAvailabilityException(start.isoformat(), end.isoformat())
    if check.reason == BookabilityReason.IN_PAST:
        raise PastSlotException(end.isoformat())
    raise SlotUnavailableException(
        details={
            "start": start.isoformat(),
            "end": end.isoformat(),
            "conflicting_source_ids": [c.source_id for c in check.conflicts],
        }
    )
