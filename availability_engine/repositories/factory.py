# availability_engine/repositories/factory.py
"""
Repository Factory for the availability engine.

Provides centralized creation of repository instances,
ensuring consistent initialization and dependency injection.
"""

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

# Avoid circular imports
if TYPE_CHECKING:
    from .availability_rule_repository import AvailabilityRuleRepository
    from .booking_repository import BookingRepository
    from .product_repository import ProductRepository
    from .schedule_config_repository import ScheduleConfigRepository


class RepositoryFactory:
    """
    Factory class for creating repository instances.

    Centralizes repository creation to ensure consistent initialization
    and makes it easy to swap implementations if needed.
    """

    @staticmethod
    def create_availability_rule_repository(db: Session) -> "AvailabilityRuleRepository":
        """Create repository for availability rule operations."""
        from .availability_rule_repository import AvailabilityRuleRepository

        return AvailabilityRuleRepository(db)

    @staticmethod
    def create_booking_repository(db: Session) -> "BookingRepository":
        """Create repository for booking busy-interval queries."""
        from .booking_repository import BookingRepository

        return BookingRepository(db)

    @staticmethod
    def create_product_repository(db: Session) -> "ProductRepository":
        from .product_repository import ProductRepository

        return ProductRepository(db)

    @staticmethod
    def create_schedule_config_repository(db: Session) -> "ScheduleConfigRepository":
        from .schedule_config_repository import ScheduleConfigRepository

        return ScheduleConfigRepository(db)
