# availability_engine/services/schedule_config_service.py
"""
Per-request scheduling configuration.

Resolves a resource's stored settings (or the configured defaults) and
applies a product's duration override for the current request only.
"""

from typing import Optional

from ..core.config import settings
from ..repositories.interfaces import ProductSource, ScheduleConfigSource
from ..schemas.schedule import EffectiveScheduleConfig, ProductSnapshot
from .base import BaseService


def resolve_slot_duration(default_minutes: int, product: Optional[ProductSnapshot]) -> int:
    """Product duration when the product is active and declares a positive one."""
    if product is None or not product.is_active:
        return default_minutes
    if product.duration_minutes is None or product.duration_minutes <= 0:
        return default_minutes
    return product.duration_minutes


class ScheduleConfigService(BaseService):
    def __init__(
        self,
        config_source: ScheduleConfigSource,
        product_source: Optional[ProductSource] = None,
    ):
        super().__init__()
        self.config_source = config_source
        self.product_source = product_source

    def _load_product(self, resource_id: str, product_id: str) -> Optional[ProductSnapshot]:
        if self.product_source is None:
            self.logger.warning(f"Product {product_id} requested but no product source is configured")
            return None

        product = self.product_source.get_product(product_id)
        if product is None:
            self.logger.warning(f"Product {product_id} not found; using resource default duration")
            return None
        if product.resource_id != resource_id:
            self.logger.warning(f"Product {product_id} does not belong to resource {resource_id}; ignoring")
            return None
        return product

    def get_effective_config(self, resource_id: str, product_id: Optional[str] = None) -> EffectiveScheduleConfig:
        """
        Effective configuration for one availability request.

        Args:
            resource_id: The resource being scheduled
            product_id: Optional product whose duration overrides the default

        Returns:
            A fresh EffectiveScheduleConfig; stored configuration is untouched
        """
        stored = self.config_source.get_schedule_config(resource_id)
        if stored is None:
            timezone = settings.default_timezone
            slot_duration = settings.default_slot_duration_minutes
            buffer_minutes = settings.default_buffer_minutes
            lookahead_days = settings.default_lookahead_days
        else:
            timezone = stored.timezone
            slot_duration = stored.slot_duration_minutes
            buffer_minutes = stored.buffer_minutes
            lookahead_days = stored.lookahead_days

        product = self._load_product(resource_id, product_id) if product_id else None
        duration = resolve_slot_duration(slot_duration, product)

        return EffectiveScheduleConfig(
            resource_id=resource_id,
            timezone=timezone,
            slot_duration_minutes=duration,
            buffer_minutes=buffer_minutes,
            lookahead_days=lookahead_days,
            product_id=product.id if product is not None else None,
        )
