# availability_engine/models/schedule_config.py
from sqlalchemy import Column, Integer, String

from ..database import Base


class ResourceScheduleConfig(Base):
    """Per-resource scheduling defaults (timezone, slot length, buffer, lookahead)."""

    __tablename__ = "resource_schedule_configs"

    resource_id = Column(String(64), primary_key=True)
    timezone = Column(String(64), nullable=False, default="America/New_York")
    slot_duration_minutes = Column(Integer, nullable=False, default=60)
    buffer_minutes = Column(Integer, nullable=False, default=0)
    lookahead_days = Column(Integer, nullable=False, default=30)

    def __repr__(self) -> str:
        return f"<ResourceScheduleConfig {self.resource_id} {self.timezone} {self.slot_duration_minutes}min>"
