# availability_engine/models/availability.py
"""
Availability rule model.

A rule is either recurring (weekly, keyed by day of week) or one-time
(keyed by a specific calendar date). Times are wall-clock times in the
resource's timezone; an end_time of 00:00 closes the window at midnight.
Rules are soft-deleted through is_active.
"""

from enum import Enum
import logging

from sqlalchemy import Boolean, CheckConstraint, Column, Date, DateTime, Index, Integer, String, Time
from sqlalchemy.sql import func

from ..core.ulid_helper import generate_ulid
from ..database import Base

logger = logging.getLogger(__name__)


class RuleKind(str, Enum):
    """How an availability rule selects the dates it applies to."""

    RECURRING = "recurring"
    ONE_TIME = "one_time"


class AvailabilityRule(Base):
    """Weekly or date-specific availability window for a resource."""

    __tablename__ = "availability_rules"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    resource_id = Column(String(64), nullable=False, index=True)
    kind = Column(String(20), nullable=False, default=RuleKind.RECURRING.value)
    day_of_week = Column(Integer, nullable=True)
    specific_date = Column(Date, nullable=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("day_of_week IS NULL OR (day_of_week >= 0 AND day_of_week <= 6)", name="ck_rule_day_of_week"),
        CheckConstraint(
            "(kind = 'recurring' AND day_of_week IS NOT NULL AND specific_date IS NULL) OR "
            "(kind = 'one_time' AND specific_date IS NOT NULL AND day_of_week IS NULL)",
            name="ck_rule_kind_fields",
        ),
        Index("idx_availability_rules_resource_active", "resource_id", "is_active"),
    )

    def __repr__(self) -> str:
        when = self.day_of_week if self.kind == RuleKind.RECURRING.value else self.specific_date
        return f"<AvailabilityRule {self.resource_id} {self.kind} {when} {self.start_time}-{self.end_time}>"
