"""
Repositories package
"""
from retail_orders.repositories.sequence_repository import SequenceRepository
from retail_orders.repositories.product_repository import ProductRepository
from retail_orders.repositories.staff_repository import StaffRepository
from retail_orders.repositories.order_repository import OrderRepository
from retail_orders.repositories.report_repository import ReportRepository

__all__ = [
    "SequenceRepository",
    "ProductRepository",
    "StaffRepository",
    "OrderRepository",
    "ReportRepository"
]
