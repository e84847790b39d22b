"""
Order Service - order fulfillment and expired collection sweep
"""
import logging
from collections import OrderedDict
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from retail_orders.config import settings
from retail_orders.dates import parse_store_date, format_store_date
from retail_orders.exceptions import (
    InvalidDate,
    InvalidOrderRequest,
    InvalidStaff,
    InsufficientStock,
    PersistenceRejected,
    UnknownOrder,
    UnknownProduct,
    from_store_error
)
from retail_orders.models.sequence import IdSequence
from retail_orders.repositories.order_repository import OrderRepository
from retail_orders.repositories.product_repository import ProductRepository
from retail_orders.repositories.sequence_repository import SequenceRepository
from retail_orders.repositories.staff_repository import StaffRepository
from retail_orders.schemas.order import (
    CollectionDetails,
    DeliveryDetails,
    OrderCreate,
    OrderPlacement,
    OrderResponse,
    OrderType
)
from retail_orders.schemas.product import StockLevel

logger = logging.getLogger(__name__)


class OrderService:
    """Service layer for order business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repository = OrderRepository(db)
        self.product_repository = ProductRepository(db)
        self.staff_repository = StaffRepository(db)
        self.sequence_repository = SequenceRepository(db)

    def get_order_by_id(self, order_id: int) -> Optional[OrderResponse]:
        """Get order by ID"""
        order = self.repository.get_by_id(order_id)
        if not order:
            return None
        return OrderResponse.model_validate(order)

    def place(self, order_data: OrderCreate) -> OrderPlacement:
        """
        Place an order of the type implied by its detail

        No detail is an in-store sale (completed at once); collection and
        delivery orders start uncompleted and get their detail row after the
        order itself is written.
        """
        order_type = order_data.order_type
        placement = self.place_order(
            order_data.product_ids,
            order_data.quantities,
            order_data.order_date,
            order_data.staff_id,
            order_type,
            completed=order_type is OrderType.IN_STORE
        )
        if order_data.detail is not None:
            self._insert_detail(placement.order_id, order_data.detail)
        return placement

    def place_in_store_order(
        self,
        product_ids: Sequence[int],
        quantities: Sequence[int],
        order_date: str,
        staff_id: int
    ) -> OrderPlacement:
        return self.place_order(
            product_ids, quantities, order_date, staff_id, OrderType.IN_STORE, completed=True
        )

    def place_collection_order(
        self,
        product_ids: Sequence[int],
        quantities: Sequence[int],
        order_date: str,
        staff_id: int,
        details: CollectionDetails
    ) -> OrderPlacement:
        placement = self.place_order(
            product_ids, quantities, order_date, staff_id, OrderType.COLLECTION, completed=False
        )
        self._insert_detail(placement.order_id, details)
        return placement

    def place_delivery_order(
        self,
        product_ids: Sequence[int],
        quantities: Sequence[int],
        order_date: str,
        staff_id: int,
        details: DeliveryDetails
    ) -> OrderPlacement:
        placement = self.place_order(
            product_ids, quantities, order_date, staff_id, OrderType.DELIVERY, completed=False
        )
        self._insert_detail(placement.order_id, details)
        return placement

    def place_order(
        self,
        product_ids: Sequence[int],
        quantities: Sequence[int],
        order_date: str,
        staff_id: int,
        order_type: Union[OrderType, str],
        completed: bool
    ) -> OrderPlacement:
        """
        Validate, reserve stock and write an order

        Steps:
        1. Check the staff member exists
        2. Parse the order date
        3. Read stock for every line; reject the whole order if any line
           is short (nothing has been written yet)
        4. Allocate an order ID (consumed even if later steps fail)
        5. Write the order and its staff assignment
        6. Write each line and take its quantity off stock, one line at a time
        7. Report stock left for every product in the order

        Raises:
            InvalidOrderRequest: Empty, mismatched or non-positive lines
            InvalidStaff: Unknown staff member
            InvalidDate: Order date not a DD-Mon-YY calendar date
            UnknownProduct: A line names a product that does not exist
            InsufficientStock: A line asks for more than remains
            PersistenceRejected: The store rejected a write from step 4 on;
                lines committed before the failure are not undone
        """
        lines = self._merge_lines(product_ids, quantities)
        try:
            order_type = OrderType(order_type)
        except ValueError:
            raise InvalidOrderRequest(f"Unknown order type: {order_type!r}")

        # Step 1: staff member
        if not self.staff_repository.exists(staff_id):
            logger.warning("Order rejected: staff ID %s was invalid", staff_id)
            raise InvalidStaff(staff_id)

        # Step 2: order date
        try:
            placed_on = parse_store_date(order_date)
        except InvalidDate:
            logger.warning("Order rejected: order date %r was invalid", order_date)
            raise

        # Step 3: stock for every line before any write
        for product_id, quantity in lines.items():
            available = self.product_repository.get_stock(product_id)
            if available is None:
                logger.warning("Order rejected: invalid product ID %s", product_id)
                raise UnknownProduct(product_id)
            if available < quantity:
                logger.warning(
                    "Order rejected: product %s has %s left, %s requested",
                    product_id, available, quantity
                )
                raise InsufficientStock(product_id, quantity, available)

        # Step 4: order identity
        try:
            order_id = self.sequence_repository.next_value(IdSequence.ORDER)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Could not allocate an order ID: %s", e)
            raise from_store_error(e, "Could not allocate an order ID", stage="sequence") from e

        # Step 5: order and staff assignment
        try:
            self.repository.create_with_assignment(
                order_id, order_type.value, completed, placed_on, staff_id
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Order %s rejected by the store: %s", order_id, e)
            raise from_store_error(
                e,
                f"Order {order_id} for staff ID {staff_id} on {order_date} was rejected",
                order_id=order_id,
                stage="order"
            ) from e

        # Step 6: lines and stock, committed one line at a time
        lines_written = 0
        for product_id, quantity in lines.items():
            try:
                self.repository.add_line(order_id, product_id, quantity)
                adjusted = self.product_repository.adjust_stock(product_id, -quantity)
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error(
                    "Order %s line for product %s (quantity %s) rejected after %s lines: %s",
                    order_id, product_id, quantity, lines_written, e
                )
                raise from_store_error(
                    e,
                    f"Product ID ({product_id}) or quantity ({quantity}) rejected for order {order_id}",
                    order_id=order_id,
                    stage="line",
                    lines_written=lines_written
                ) from e
            if not adjusted:
                self.db.rollback()
                raise PersistenceRejected(
                    f"Product ID ({product_id}) disappeared while writing order {order_id}",
                    order_id=order_id,
                    stage="line",
                    lines_written=lines_written
                )
            self.db.commit()
            lines_written += 1

        # Step 7: stock now left
        stock_levels = [
            StockLevel(product_id=product_id, stock=self.product_repository.get_stock(product_id))
            for product_id in lines
        ]
        for level in stock_levels:
            logger.info("Product ID %s stock is now at %s", level.product_id, level.stock)
        logger.info(
            "Order %s placed: %s, %s line(s), staff ID %s",
            order_id, order_type.value, lines_written, staff_id
        )

        return OrderPlacement(
            order_id=order_id,
            order_type=order_type,
            completed=completed,
            stock_levels=stock_levels
        )

    def complete_order(self, order_id: int) -> OrderResponse:
        """
        Mark an order collected or delivered

        Raises:
            UnknownOrder: If no such order exists
        """
        order = self.repository.get_by_id(order_id)
        if not order:
            raise UnknownOrder(order_id)
        if not order.completed:
            try:
                self.repository.mark_completed(order)
                self.db.commit()
            except SQLAlchemyError as e:
                self.db.rollback()
                raise from_store_error(
                    e, f"Could not complete order {order_id}", order_id=order_id, stage="complete"
                ) from e
            logger.info("Order %s completed", order_id)
        return OrderResponse.model_validate(order)

    def sweep_expired_collections(self, reference_date: Union[str, date]) -> List[int]:
        """
        Cancel uncollected collection orders and return their stock

        Matches Collection orders not yet completed whose collection date is
        at least ``COLLECTION_GRACE_DAYS`` after ``reference_date``. Each
        order is removed with its lines, assignment and detail, and its
        quantities restored, as one commit.

        Returns:
            Cancelled order IDs, ascending, each once

        Raises:
            InvalidDate: If reference_date is not a DD-Mon-YY date
            PersistenceRejected: If the store rejects removing an order;
                orders swept before it stay swept
        """
        if isinstance(reference_date, str):
            reference_date = parse_store_date(reference_date)
        elif isinstance(reference_date, datetime):
            # Collection dates are DATE columns; compare day to day
            reference_date = reference_date.date()
        cutoff = reference_date + timedelta(days=settings.COLLECTION_GRACE_DAYS)

        cancelled = []
        for order_id in self.repository.find_expired_collections(cutoff):
            try:
                lines = [(line.product_id, line.quantity) for line in self.repository.get_lines(order_id)]
                for product_id, quantity in lines:
                    self.product_repository.adjust_stock(product_id, quantity)
                self.repository.delete_order(order_id)
                self.db.commit()
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error("Sweep could not cancel order %s: %s", order_id, e)
                raise from_store_error(
                    e, f"Could not cancel order {order_id}", order_id=order_id, stage="sweep"
                ) from e
            logger.info("Order %s has been cancelled, %s line(s) returned to stock", order_id, len(lines))
            cancelled.append(order_id)

        logger.info(
            "Sweep for %s cancelled %s order(s)", format_store_date(reference_date), len(cancelled)
        )
        return cancelled

    def _insert_detail(self, order_id: int, detail: Union[CollectionDetails, DeliveryDetails]) -> None:
        """
        Write the collection or delivery row for a placed order

        A failure leaves the order and its lines in place without a detail
        row and raises PersistenceRejected carrying the order ID.
        """
        if isinstance(detail, CollectionDetails):
            label, raw_date = "Collection", detail.collection_date
        else:
            label, raw_date = "Delivery", detail.delivery_date

        try:
            detail_date = parse_store_date(raw_date)
        except InvalidDate as e:
            logger.error("Order %s placed but %s date %r was invalid", order_id, label.lower(), raw_date)
            raise PersistenceRejected(
                f"{label} date {raw_date!r} was invalid; order {order_id} exists without its {label.lower()} details",
                order_id=order_id,
                stage="detail"
            ) from e

        try:
            if isinstance(detail, CollectionDetails):
                self.repository.add_collection_detail(
                    order_id, detail.first_name, detail.last_name, detail_date
                )
            else:
                self.repository.add_delivery_detail(
                    order_id,
                    detail.first_name,
                    detail.last_name,
                    detail.house,
                    detail.street,
                    detail.city,
                    detail_date
                )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Order %s %s details rejected: %s", order_id, label.lower(), e)
            raise from_store_error(
                e,
                f"{label} details rejected; order {order_id} exists without them",
                order_id=order_id,
                stage="detail"
            ) from e

    @staticmethod
    def _merge_lines(product_ids: Sequence[int], quantities: Sequence[int]) -> "OrderedDict[int, int]":
        """Pair products with quantities, folding repeated products into one line"""
        product_ids = list(product_ids)
        quantities = list(quantities)
        if not product_ids:
            raise InvalidOrderRequest("An order needs at least one product")
        if len(product_ids) != len(quantities):
            raise InvalidOrderRequest(
                f"{len(product_ids)} product IDs but {len(quantities)} quantities"
            )

        lines = OrderedDict()
        for product_id, quantity in zip(product_ids, quantities):
            if quantity <= 0:
                raise InvalidOrderRequest(f"Quantity for product {product_id} must be positive, got {quantity}")
            lines[product_id] = lines.get(product_id, 0) + quantity
        return lines
