from .availability_rule_repository import AvailabilityRuleRepository
from .base_repository import BaseRepository
from .booking_repository import BookingRepository
from .factory import RepositoryFactory
from .product_repository import ProductRepository
from .schedule_config_repository import ScheduleConfigRepository

__all__ = [
    "AvailabilityRuleRepository",
    "BaseRepository",
    "BookingRepository",
    "ProductRepository",
    "RepositoryFactory",
    "ScheduleConfigRepository",
]
