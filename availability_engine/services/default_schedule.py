# availability_engine/services/default_schedule.py
"""
Default schedule initialization.

Seeds a weekly schedule for resources that have no availability rules yet,
so a newly onboarded resource is bookable during business hours.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.exceptions import RepositoryException, ServiceException
from ..models.availability import RuleKind
from ..repositories.interfaces import RuleStore
from ..schemas.availability import AvailabilityRuleCreate, AvailabilityRuleSnapshot
from ..utils.time_helpers import string_to_time
from .base import BaseService


class DefaultScheduleInitializer(BaseService):
    def __init__(self, rule_store: RuleStore, db: Optional[Session] = None):
        super().__init__(db)
        self.rule_store = rule_store

    def default_rules(self) -> List[AvailabilityRuleCreate]:
        start_time = string_to_time(settings.default_schedule_start)
        end_time = string_to_time(settings.default_schedule_end)
        return [
            AvailabilityRuleCreate(
                kind=RuleKind.RECURRING,
                day_of_week=day,
                start_time=start_time,
                end_time=end_time,
            )
            for day in settings.default_schedule_days
        ]

    @BaseService.measure_operation("ensure_default_schedule")
    def ensure_default_schedule(self, resource_id: str) -> List[AvailabilityRuleSnapshot]:
        """
        Create the default weekly rules if the resource has no active rules.

        Args:
            resource_id: Resource to initialize

        Returns:
            The created rules, or an empty list when rules already existed
        """
        try:
            existing = self.rule_store.count_active_rules(resource_id)
            if existing:
                self.logger.debug(f"Resource {resource_id} already has {existing} active rules")
                return []

            with self.transaction():
                created = list(self.rule_store.create_rules(resource_id, self.default_rules()))
        except RepositoryException as e:
            raise ServiceException(
                f"Could not initialize default schedule: {str(e)}",
                code="DEFAULT_SCHEDULE_FAILED",
                details={"resource_id": resource_id},
            ) from e

        self.log_operation("ensure_default_schedule", resource_id=resource_id, rules_created=len(created))
        return created
