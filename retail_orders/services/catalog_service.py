"""
Catalog Service - products and stock maintenance
"""
import logging
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from retail_orders.exceptions import UnknownProduct, from_store_error
from retail_orders.models.sequence import IdSequence
from retail_orders.repositories.product_repository import ProductRepository
from retail_orders.repositories.sequence_repository import SequenceRepository
from retail_orders.schemas.product import ProductCreate, ProductResponse

logger = logging.getLogger(__name__)


class CatalogService:
    """Service layer for product business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repository = ProductRepository(db)
        self.sequence_repository = SequenceRepository(db)

    def get_all_products(self) -> List[ProductResponse]:
        """Get all products"""
        return [ProductResponse.model_validate(p) for p in self.repository.get_all()]

    def get_product_by_id(self, product_id: int) -> Optional[ProductResponse]:
        """Get product by ID"""
        product = self.repository.get_by_id(product_id)
        if not product:
            return None
        return ProductResponse.model_validate(product)

    def create_product(self, product_data: ProductCreate) -> ProductResponse:
        """Create new product with an ID from the product sequence"""
        try:
            product_id = self.sequence_repository.next_value(IdSequence.PRODUCT)
            product = self.repository.create(
                product_id,
                product_data.description,
                product_data.price,
                product_data.stock
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise from_store_error(e, f"Product {product_data.description!r} was rejected", stage="product") from e

        logger.info("Product %s added with stock %s", product.product_id, product.stock)
        return ProductResponse.model_validate(product)

    def restock(self, product_id: int, quantity: int) -> ProductResponse:
        """
        Return ``quantity`` units to a product's stock

        Raises:
            UnknownProduct: If product not found
        """
        try:
            found = self.repository.adjust_stock(product_id, quantity)
            if not found:
                self.db.rollback()
                raise UnknownProduct(product_id)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise from_store_error(e, f"Restock of product {product_id} was rejected", stage="restock") from e

        product = self.repository.get_by_id(product_id)
        self.db.refresh(product)
        logger.info("Product ID %s restocked by %s, stock is now at %s", product_id, quantity, product.stock)
        return ProductResponse.model_validate(product)
