from .availability import AvailabilityRule, RuleKind
from .booking import Booking, BookingStatus
from .product import Product
from .schedule_config import ResourceScheduleConfig

__all__ = [
    "AvailabilityRule",
    "Booking",
    "BookingStatus",
    "Product",
    "ResourceScheduleConfig",
    "RuleKind",
]
