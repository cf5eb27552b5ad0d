# availability_engine/repositories/availability_rule_repository.py
"""
Availability rule repository.

Implements the RuleStore collaborator: active-rule lookup for a resource
and bulk creation used by the default schedule bootstrap. Inactive rules
stay in the table (soft delete) and are never returned.
"""

import logging
from typing import List, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import RepositoryException
from ..models.availability import AvailabilityRule
from ..schemas.availability import AvailabilityRuleCreate, AvailabilityRuleSnapshot
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class AvailabilityRuleRepository(BaseRepository[AvailabilityRule]):
    """Repository for availability rule data access."""

    def __init__(self, db: Session):
        super().__init__(db, AvailabilityRule)

    def get_active_rules(self, resource_id: str) -> List[AvailabilityRuleSnapshot]:
        """
        Get all active rules for a resource.

        Ordered recurring first, then by day/date and start time, so window
        resolution order is stable across calls.

        Args:
            resource_id: The resource ID

        Returns:
            Frozen rule snapshots
        """
        try:
            rows = (
                self.db.query(AvailabilityRule)
                .filter(
                    AvailabilityRule.resource_id == resource_id,
                    AvailabilityRule.is_active.is_(True),
                )
                .order_by(
                    AvailabilityRule.kind.desc(),
                    AvailabilityRule.day_of_week,
                    AvailabilityRule.specific_date,
                    AvailabilityRule.start_time,
                )
                .all()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting active rules for {resource_id}: {str(e)}")
            raise RepositoryException(f"Failed to get availability rules: {str(e)}")

        return [AvailabilityRuleSnapshot.model_validate(row) for row in rows]

    def count_active_rules(self, resource_id: str) -> int:
        try:
            return (
                self.db.query(AvailabilityRule)
                .filter(
                    AvailabilityRule.resource_id == resource_id,
                    AvailabilityRule.is_active.is_(True),
                )
                .count()
            )
        except SQLAlchemyError as e:
            self.logger.error(f"Error counting rules for {resource_id}: {str(e)}")
            raise RepositoryException(f"Failed to count availability rules: {str(e)}")

    def create_rules(
        self, resource_id: str, rules: Sequence[AvailabilityRuleCreate]
    ) -> List[AvailabilityRuleSnapshot]:
        """
        Create rules for a resource.

        Note: Does NOT commit - the calling service owns the transaction.
        """
        created = [
            self.create(
                resource_id=resource_id,
                kind=rule.kind.value,
                day_of_week=rule.day_of_week,
                specific_date=rule.specific_date,
                start_time=rule.start_time,
                end_time=rule.end_time,
                is_active=rule.is_active,
            )
            for rule in rules
        ]
        self.logger.debug(f"Created {len(created)} availability rules for {resource_id}")
        return [AvailabilityRuleSnapshot.model_validate(row) for row in created]
