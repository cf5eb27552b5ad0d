# availability_engine/models/product.py
from sqlalchemy import Boolean, Column, Integer, String

from ..core.ulid_helper import generate_ulid
from ..database import Base


class Product(Base):
    """Bookable product; a declared duration overrides the resource's slot length."""

    __tablename__ = "products"

    id = Column(String(26), primary_key=True, default=generate_ulid)
    resource_id = Column(String(64), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    duration_minutes = Column(Integer, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<Product {self.name} {self.duration_minutes}min active={self.is_active}>"
