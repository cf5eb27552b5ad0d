# availability_engine/repositories/schedule_config_repository.py
import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..models.schedule_config import ResourceScheduleConfig
from ..schemas.schedule import ScheduleConfigSnapshot
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ScheduleConfigRepository(BaseRepository[ResourceScheduleConfig]):
    """Stored per-resource scheduling defaults."""

    def __init__(self, db: Session):
        super().__init__(db, ResourceScheduleConfig)

    def get_schedule_config(self, resource_id: str) -> Optional[ScheduleConfigSnapshot]:
        config = self.get_by_id(resource_id)
        if config is None:
            return None
        return ScheduleConfigSnapshot.model_validate(config)
