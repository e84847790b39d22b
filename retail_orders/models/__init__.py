"""
Models package
"""
from retail_orders.models.sequence import IdSequence
from retail_orders.models.product import Product
from retail_orders.models.staff import Staff, StaffOrderAssignment
from retail_orders.models.order import (
    Order,
    OrderLine,
    CollectionDetail,
    DeliveryDetail
)

__all__ = [
    "IdSequence",
    "Product",
    "Staff",
    "StaffOrderAssignment",
    "Order",
    "OrderLine",
    "CollectionDetail",
    "DeliveryDetail"
]
