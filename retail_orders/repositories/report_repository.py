"""
Report Repository - read-only aggregate queries

Quantities are summed in the store; money is computed by the caller from
exact unit prices so no floating point sum ever reaches a threshold check.
"""
from datetime import date
from typing import List, Optional, Tuple
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from retail_orders.models.product import Product
from retail_orders.models.order import Order, OrderLine
from retail_orders.models.staff import Staff, StaffOrderAssignment


class ReportRepository:
    """Aggregations over the ledger, catalog and staff stores"""

    def __init__(self, db: Session):
        self.db = db

    def product_quantities(self) -> List[Tuple[int, str, object, int]]:
        """
        (product_id, description, price, quantity sold) for every product

        Products never ordered report a quantity of 0.
        """
        quantity = func.coalesce(func.sum(OrderLine.quantity), 0)
        stmt = (
            select(Product.product_id, Product.description, Product.price, quantity)
            .outerjoin(OrderLine, OrderLine.product_id == Product.product_id)
            .group_by(Product.product_id, Product.description, Product.price)
            .order_by(Product.product_id)
        )
        return [tuple(row) for row in self.db.execute(stmt)]

    def product_quantities_between(self, start: date, end: date) -> List[Tuple[int, object, int]]:
        """(product_id, price, quantity) for products sold in orders placed in [start, end)"""
        stmt = (
            select(Product.product_id, Product.price, func.sum(OrderLine.quantity))
            .join(OrderLine, OrderLine.product_id == Product.product_id)
            .join(Order, Order.order_id == OrderLine.order_id)
            .where(Order.placed_on >= start, Order.placed_on < end)
            .group_by(Product.product_id, Product.price)
            .order_by(Product.product_id)
        )
        return [tuple(row) for row in self.db.execute(stmt)]

    def staff_product_quantities(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None
    ) -> List[Tuple[int, int, object, int]]:
        """
        (staff_id, product_id, price, quantity) per staff member and product

        Optionally limited to orders placed in [start, end). Incomplete
        orders count.
        """
        stmt = (
            select(
                StaffOrderAssignment.staff_id,
                OrderLine.product_id,
                Product.price,
                func.sum(OrderLine.quantity)
            )
            .join(Order, Order.order_id == StaffOrderAssignment.order_id)
            .join(OrderLine, OrderLine.order_id == StaffOrderAssignment.order_id)
            .join(Product, Product.product_id == OrderLine.product_id)
        )
        if start is not None:
            stmt = stmt.where(Order.placed_on >= start)
        if end is not None:
            stmt = stmt.where(Order.placed_on < end)
        stmt = stmt.group_by(
            StaffOrderAssignment.staff_id, OrderLine.product_id, Product.price
        ).order_by(StaffOrderAssignment.staff_id, OrderLine.product_id)
        return [tuple(row) for row in self.db.execute(stmt)]

    def all_staff(self) -> List[Staff]:
        return list(self.db.scalars(select(Staff).order_by(Staff.staff_id)))
