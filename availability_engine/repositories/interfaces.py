"""
Collaborator interfaces consumed by the availability engine.

The engine never talks to storage directly; it receives these
collaborators at construction time. The SQLAlchemy repositories in this
package implement them, and tests swap in in-memory fakes.
"""

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..schemas.availability import AvailabilityRuleCreate, AvailabilityRuleSnapshot, BusyInterval
from ..schemas.schedule import ProductSnapshot, ScheduleConfigSnapshot


class RuleSource(Protocol):
    """Rule lookup: a resource's active availability rules."""

    def get_active_rules(self, resource_id: str) -> Sequence[AvailabilityRuleSnapshot]:
        ...


class RuleStore(RuleSource, Protocol):
    """Rule lookup that can also count and persist rules."""

    def count_active_rules(self, resource_id: str) -> int:
        ...

    def create_rules(
        self, resource_id: str, rules: Sequence[AvailabilityRuleCreate]
    ) -> Sequence[AvailabilityRuleSnapshot]:
        ...


class BusyIntervalSource(Protocol):
    """Busy intervals drawn from internally tracked commitments."""

    def get_busy_intervals_for_resource(
        self, resource_id: str, range_start: datetime, range_end: datetime
    ) -> Sequence[BusyInterval]:
        ...


class ProductSource(Protocol):
    def get_product(self, product_id: str) -> Optional[ProductSnapshot]:
        ...


class ScheduleConfigSource(Protocol):
    def get_schedule_config(self, resource_id: str) -> Optional[ScheduleConfigSnapshot]:
        ...
