"""
SQLAlchemy Product model
"""
from sqlalchemy import Column, Integer, String, Numeric, CheckConstraint
from retail_orders.database import Base


class Product(Base):
    """Product database model (catalog store)"""

    __tablename__ = "product"

    product_id = Column(Integer, primary_key=True, autoincrement=False)
    description = Column(String(30), nullable=False)
    price = Column(Numeric(8, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)

    # Constraints
    __table_args__ = (
        CheckConstraint('product_id > 0', name='check_product_id_positive'),
        CheckConstraint('LENGTH(description) > 0', name='check_description_not_empty'),
        CheckConstraint('price > 0', name='check_price_positive'),
        CheckConstraint('stock >= 0', name='check_stock_non_negative'),
    )

    def __repr__(self):
        return f"<Product(product_id={self.product_id}, description='{self.description}', price={self.price}, stock={self.stock})>"
