"""
SQLAlchemy order ledger models
"""
from sqlalchemy import Column, Integer, String, Boolean, Date, ForeignKey, CheckConstraint
from retail_orders.database import Base


class Order(Base):
    """Order database model"""

    __tablename__ = "orders"

    order_id = Column(Integer, primary_key=True, autoincrement=False)
    order_type = Column(String(30), nullable=False, index=True)
    completed = Column(Boolean, nullable=False, default=False)
    placed_on = Column(Date, nullable=False, index=True)

    # Constraints
    __table_args__ = (
        CheckConstraint('order_id > 0', name='check_order_id_positive'),
        CheckConstraint(
            "order_type IN ('InStore', 'Collection', 'Delivery')",
            name='check_order_type_valid'
        ),
    )

    def __repr__(self):
        return f"<Order(order_id={self.order_id}, order_type='{self.order_type}', completed={self.completed})>"


class OrderLine(Base):
    """One (product, quantity) pairing within an order"""

    __tablename__ = "order_line"

    order_id = Column(Integer, ForeignKey("orders.order_id"), primary_key=True)
    product_id = Column(Integer, ForeignKey("product.product_id"), primary_key=True, index=True)
    quantity = Column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint('quantity > 0', name='check_quantity_positive'),
    )

    def __repr__(self):
        return f"<OrderLine(order_id={self.order_id}, product_id={self.product_id}, quantity={self.quantity})>"


class CollectionDetail(Base):
    """Customer pickup details for a Collection order"""

    __tablename__ = "collection_detail"

    order_id = Column(Integer, ForeignKey("orders.order_id"), primary_key=True)
    first_name = Column(String(30), nullable=False)
    last_name = Column(String(30), nullable=False)
    collection_date = Column(Date, nullable=False, index=True)

    __table_args__ = (
        CheckConstraint('LENGTH(first_name) > 0', name='check_collection_first_name_not_empty'),
        CheckConstraint('LENGTH(last_name) > 0', name='check_collection_last_name_not_empty'),
    )

    def __repr__(self):
        return f"<CollectionDetail(order_id={self.order_id}, collection_date={self.collection_date})>"


class DeliveryDetail(Base):
    """Customer address details for a Delivery order"""

    __tablename__ = "delivery_detail"

    order_id = Column(Integer, ForeignKey("orders.order_id"), primary_key=True)
    first_name = Column(String(30), nullable=False)
    last_name = Column(String(30), nullable=False)
    house = Column(String(30), nullable=False)
    street = Column(String(30), nullable=False)
    city = Column(String(30), nullable=False)
    delivery_date = Column(Date, nullable=False)

    __table_args__ = (
        CheckConstraint('LENGTH(first_name) > 0', name='check_delivery_first_name_not_empty'),
        CheckConstraint('LENGTH(last_name) > 0', name='check_delivery_last_name_not_empty'),
        CheckConstraint('LENGTH(house) > 0', name='check_delivery_house_not_empty'),
        CheckConstraint('LENGTH(street) > 0', name='check_delivery_street_not_empty'),
        CheckConstraint('LENGTH(city) > 0', name='check_delivery_city_not_empty'),
    )

    def __repr__(self):
        return f"<DeliveryDetail(order_id={self.order_id}, city='{self.city}', delivery_date={self.delivery_date})>"
