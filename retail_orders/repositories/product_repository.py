"""
Product Repository - Data Access Layer
"""
from typing import List, Optional
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from retail_orders.models.product import Product


class ProductRepository:
    """Repository for catalog store operations"""

    def __init__(self, db: Session):
        self.db = db

    def get_all(self) -> List[Product]:
        """Get all products ordered by ID"""
        return list(self.db.scalars(select(Product).order_by(Product.product_id)))

    def get_by_id(self, product_id: int) -> Optional[Product]:
        """Get product by ID"""
        return self.db.get(Product, product_id)

    def get_stock(self, product_id: int) -> Optional[int]:
        """Current stock read straight from the store, None if no such product"""
        return self.db.scalar(
            select(Product.stock).where(Product.product_id == product_id)
        )

    def create(self, product_id: int, description: str, price, stock: int) -> Product:
        """Stage a new product; the caller commits"""
        product = Product(
            product_id=product_id,
            description=description,
            price=price,
            stock=stock
        )
        self.db.add(product)
        self.db.flush()
        return product

    def adjust_stock(self, product_id: int, quantity_change: int) -> bool:
        """
        Add (positive) or remove (negative) stock in a single UPDATE

        The store's non-negative stock constraint rejects over-removal.

        Returns:
            False if the product does not exist
        """
        result = self.db.execute(
            update(Product)
            .where(Product.product_id == product_id)
            .values(stock=Product.stock + quantity_change)
        )
        return result.rowcount == 1
