# availability_engine/repositories/product_repository.py
import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..models.product import Product
from ..schemas.schedule import ProductSnapshot
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ProductRepository(BaseRepository[Product]):
    """Product lookup for per-product slot durations."""

    def __init__(self, db: Session):
        super().__init__(db, Product)

    def get_product(self, product_id: str) -> Optional[ProductSnapshot]:
        product = self.get_by_id(product_id)
        if product is None:
            return None
        return ProductSnapshot.model_validate(product)
