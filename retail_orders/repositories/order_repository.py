"""
Order Repository - Data Access Layer for the order ledger
"""
from datetime import date
from typing import List, Optional
from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from retail_orders.models.order import Order, OrderLine, CollectionDetail, DeliveryDetail
from retail_orders.models.staff import StaffOrderAssignment


class OrderRepository:
    """
    Repository for orders, their lines, details and staff assignments

    Methods stage and flush writes; the calling service decides where a
    unit of work ends and commits it.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, order_id: int) -> Optional[Order]:
        """Get order by ID"""
        return self.db.get(Order, order_id)

    def get_lines(self, order_id: int) -> List[OrderLine]:
        return list(self.db.scalars(
            select(OrderLine)
            .where(OrderLine.order_id == order_id)
            .order_by(OrderLine.product_id)
        ))

    def create_with_assignment(
        self,
        order_id: int,
        order_type: str,
        completed: bool,
        placed_on: date,
        staff_id: int
    ) -> Order:
        """Stage an order together with the staff member who processed it"""
        order = Order(
            order_id=order_id,
            order_type=order_type,
            completed=completed,
            placed_on=placed_on
        )
        self.db.add(order)
        self.db.flush()
        self.db.add(StaffOrderAssignment(order_id=order_id, staff_id=staff_id))
        self.db.flush()
        return order

    def add_line(self, order_id: int, product_id: int, quantity: int) -> OrderLine:
        line = OrderLine(order_id=order_id, product_id=product_id, quantity=quantity)
        self.db.add(line)
        self.db.flush()
        return line

    def add_collection_detail(
        self,
        order_id: int,
        first_name: str,
        last_name: str,
        collection_date: date
    ) -> CollectionDetail:
        detail = CollectionDetail(
            order_id=order_id,
            first_name=first_name,
            last_name=last_name,
            collection_date=collection_date
        )
        self.db.add(detail)
        self.db.flush()
        return detail

    def add_delivery_detail(
        self,
        order_id: int,
        first_name: str,
        last_name: str,
        house: str,
        street: str,
        city: str,
        delivery_date: date
    ) -> DeliveryDetail:
        detail = DeliveryDetail(
            order_id=order_id,
            first_name=first_name,
            last_name=last_name,
            house=house,
            street=street,
            city=city,
            delivery_date=delivery_date
        )
        self.db.add(detail)
        self.db.flush()
        return detail

    def mark_completed(self, order: Order) -> Order:
        order.completed = True
        self.db.flush()
        return order

    def find_expired_collections(self, cutoff: date) -> List[int]:
        """IDs of uncollected Collection orders whose collection date is on or after ``cutoff``"""
        return list(self.db.scalars(
            select(Order.order_id)
            .join(CollectionDetail, CollectionDetail.order_id == Order.order_id)
            .where(
                Order.order_type == "Collection",
                Order.completed.is_(False),
                CollectionDetail.collection_date >= cutoff
            )
            .order_by(Order.order_id)
        ))

    def delete_order(self, order_id: int) -> None:
        """Delete an order and every row that references it"""
        for model in (OrderLine, StaffOrderAssignment, CollectionDetail, DeliveryDetail):
            self.db.execute(
                delete(model)
                .where(model.order_id == order_id)
            )
        self.db.execute(
            delete(Order)
            .where(Order.order_id == order_id)
        )
