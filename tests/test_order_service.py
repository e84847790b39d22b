"""Tests for order fulfillment."""

from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from retail_orders.exceptions import (
    ConnectionLost,
    InsufficientStock,
    InvalidDate,
    InvalidOrderRequest,
    InvalidStaff,
    PersistenceRejected,
    UnknownOrder,
    UnknownProduct
)
from retail_orders.models import CollectionDetail, DeliveryDetail, Order, OrderLine, StaffOrderAssignment
from retail_orders.models.sequence import IdSequence
from retail_orders.repositories.sequence_repository import SequenceRepository
from retail_orders.schemas.order import (
    CollectionDetails,
    DeliveryDetails,
    OrderCreate,
    OrderLineCreate,
    OrderType
)


def _count(db, model):
    return db.query(model).count()


def _stock(catalog_service, product_id):
    return catalog_service.get_product_by_id(product_id).stock


class TestInStoreOrder:
    def test_concrete_scenario(self, order_service, catalog_service, staff, make_product):
        """Stock 10, sell 4, then an order for 8 fails with 6 left."""
        p1 = make_product("P1", price="5.00", stock=10)
        alice = staff[0]

        placement = order_service.place_in_store_order([p1.product_id], [4], "01-Jan-17", alice.staff_id)

        assert placement.order_type is OrderType.IN_STORE
        assert placement.completed is True
        assert [(s.product_id, s.stock) for s in placement.stock_levels] == [(p1.product_id, 6)]
        order = order_service.get_order_by_id(placement.order_id)
        assert order.order_type is OrderType.IN_STORE
        assert order.completed is True
        assert order.placed_on == date(2017, 1, 1)

        with pytest.raises(InsufficientStock) as exc_info:
            order_service.place_in_store_order([p1.product_id], [8], "02-Jan-17", alice.staff_id)
        assert exc_info.value.product_id == p1.product_id
        assert exc_info.value.requested == 8
        assert exc_info.value.available == 6
        assert _stock(catalog_service, p1.product_id) == 6

    def test_decrements_every_line_exactly(self, order_service, catalog_service, staff, make_product):
        a = make_product("A", stock=10)
        b = make_product("B", stock=5)

        placement = order_service.place_in_store_order(
            [a.product_id, b.product_id], [3, 5], "15-Mar-17", staff[0].staff_id
        )

        assert _stock(catalog_service, a.product_id) == 7
        assert _stock(catalog_service, b.product_id) == 0
        assert {s.product_id: s.stock for s in placement.stock_levels} == {a.product_id: 7, b.product_id: 0}

    def test_writes_order_lines_and_single_assignment(self, db, order_service, staff, make_product):
        a = make_product("A")
        b = make_product("B")
        placement = order_service.place_in_store_order(
            [a.product_id, b.product_id], [1, 2], "15-Mar-17", staff[1].staff_id
        )

        lines = db.query(OrderLine).filter_by(order_id=placement.order_id).all()
        assert {(l.product_id, l.quantity) for l in lines} == {(a.product_id, 1), (b.product_id, 2)}
        assignments = db.query(StaffOrderAssignment).filter_by(order_id=placement.order_id).all()
        assert [s.staff_id for s in assignments] == [staff[1].staff_id]

    def test_order_ids_increase(self, order_service, staff, make_product):
        p = make_product(stock=10)
        first = order_service.place_in_store_order([p.product_id], [1], "01-Jan-17", staff[0].staff_id)
        second = order_service.place_in_store_order([p.product_id], [1], "01-Jan-17", staff[0].staff_id)
        assert first.order_id == 1001
        assert second.order_id == 1002

    def test_repeated_product_is_one_line(self, db, order_service, catalog_service, staff, make_product):
        p = make_product(stock=10)
        placement = order_service.place_in_store_order(
            [p.product_id, p.product_id], [2, 3], "01-Jan-17", staff[0].staff_id
        )
        lines = db.query(OrderLine).filter_by(order_id=placement.order_id).all()
        assert [(l.product_id, l.quantity) for l in lines] == [(p.product_id, 5)]
        assert _stock(catalog_service, p.product_id) == 5

    def test_repeated_product_checked_against_combined_quantity(
        self, order_service, catalog_service, staff, make_product
    ):
        p = make_product(stock=4)
        with pytest.raises(InsufficientStock) as exc_info:
            order_service.place_in_store_order(
                [p.product_id, p.product_id], [2, 3], "01-Jan-17", staff[0].staff_id
            )
        assert exc_info.value.requested == 5
        assert _stock(catalog_service, p.product_id) == 4


class TestValidationFailures:
    def test_multi_line_shortfall_changes_nothing(self, db, order_service, catalog_service, staff, make_product):
        a = make_product("A", stock=10)
        b = make_product("B", stock=2)

        with pytest.raises(InsufficientStock) as exc_info:
            order_service.place_in_store_order(
                [a.product_id, b.product_id], [5, 3], "01-Jan-17", staff[0].staff_id
            )

        assert exc_info.value.product_id == b.product_id
        assert _stock(catalog_service, a.product_id) == 10
        assert _stock(catalog_service, b.product_id) == 2
        assert _count(db, Order) == 0
        assert _count(db, OrderLine) == 0

    def test_unknown_staff_writes_nothing(self, db, order_service, catalog_service, make_product):
        p = make_product(stock=10)

        with pytest.raises(InvalidStaff) as exc_info:
            order_service.place_in_store_order([p.product_id], [1], "01-Jan-17", 999)

        assert exc_info.value.staff_id == 999
        assert "999" in str(exc_info.value)
        assert _count(db, Order) == 0
        assert _count(db, StaffOrderAssignment) == 0
        assert _stock(catalog_service, p.product_id) == 10
        assert SequenceRepository(db).current_value(IdSequence.ORDER) == 1000

    def test_invalid_order_date(self, db, order_service, staff, make_product):
        p = make_product()
        with pytest.raises(InvalidDate) as exc_info:
            order_service.place_in_store_order([p.product_id], [1], "31-Feb-17", staff[0].staff_id)
        assert exc_info.value.value == "31-Feb-17"
        assert _count(db, Order) == 0

    def test_staff_checked_before_date(self, order_service, make_product):
        p = make_product()
        with pytest.raises(InvalidStaff):
            order_service.place_in_store_order([p.product_id], [1], "not a date", 999)

    def test_unknown_product(self, db, order_service, catalog_service, staff, make_product):
        p = make_product(stock=10)
        with pytest.raises(UnknownProduct) as exc_info:
            order_service.place_in_store_order([p.product_id, 4242], [1, 1], "01-Jan-17", staff[0].staff_id)
        assert exc_info.value.product_id == 4242
        assert _stock(catalog_service, p.product_id) == 10
        assert _count(db, Order) == 0

    @pytest.mark.parametrize("product_ids, quantities", [
        ([], []),
        ([1001], [1, 2]),
        ([1001], [0]),
        ([1001], [-1]),
    ])
    def test_malformed_requests(self, order_service, staff, make_product, product_ids, quantities):
        make_product()
        with pytest.raises(InvalidOrderRequest):
            order_service.place_in_store_order(product_ids, quantities, "01-Jan-17", staff[0].staff_id)

    def test_unknown_order_type(self, order_service, staff, make_product):
        p = make_product()
        with pytest.raises(InvalidOrderRequest):
            order_service.place_order([p.product_id], [1], "01-Jan-17", staff[0].staff_id, "Mail", True)


class TestCollectionAndDelivery:
    def test_collection_order(self, db, order_service, staff, make_product):
        p = make_product(stock=10)
        details = CollectionDetails(first_name="Dana", last_name="Dale", collection_date="10-Jan-17")

        placement = order_service.place_collection_order(
            [p.product_id], [2], "01-Jan-17", staff[0].staff_id, details
        )

        assert placement.order_type is OrderType.COLLECTION
        assert placement.completed is False
        detail = db.get(CollectionDetail, placement.order_id)
        assert detail.first_name == "Dana"
        assert detail.collection_date == date(2017, 1, 10)

    def test_delivery_order(self, db, order_service, staff, make_product):
        p = make_product(stock=10)
        details = DeliveryDetails(
            first_name="Eve", last_name="Evans", house="12", street="High Street",
            city="York", delivery_date="05-Jan-17"
        )

        placement = order_service.place_delivery_order(
            [p.product_id], [1], "01-Jan-17", staff[0].staff_id, details
        )

        assert placement.order_type is OrderType.DELIVERY
        assert placement.completed is False
        detail = db.get(DeliveryDetail, placement.order_id)
        assert (detail.house, detail.street, detail.city) == ("12", "High Street", "York")
        assert detail.delivery_date == date(2017, 1, 5)

    def test_place_dispatches_on_detail(self, order_service, staff, make_product):
        p = make_product(stock=10)
        request = OrderCreate(
            lines=[OrderLineCreate(product_id=p.product_id, quantity=1)],
            order_date="01-Jan-17",
            staff_id=staff[0].staff_id,
            detail={"kind": "collection", "first_name": "Dana", "last_name": "Dale",
                    "collection_date": "03-Jan-17"}
        )
        assert request.order_type is OrderType.COLLECTION
        placement = order_service.place(request)
        assert placement.order_type is OrderType.COLLECTION

        in_store = OrderCreate(
            lines=[OrderLineCreate(product_id=p.product_id, quantity=1)],
            order_date="01-Jan-17",
            staff_id=staff[0].staff_id
        )
        assert order_service.place(in_store).completed is True

    def test_invalid_collection_date_leaves_order_without_detail(
        self, db, order_service, catalog_service, staff, make_product
    ):
        p = make_product(stock=10)
        details = CollectionDetails(first_name="Dana", last_name="Dale", collection_date="45-Jan-17")

        with pytest.raises(PersistenceRejected) as exc_info:
            order_service.place_collection_order([p.product_id], [2], "01-Jan-17", staff[0].staff_id, details)

        order_id = exc_info.value.order_id
        assert exc_info.value.stage == "detail"
        assert "45-Jan-17" in str(exc_info.value)
        assert db.get(Order, order_id) is not None
        assert db.get(CollectionDetail, order_id) is None
        assert _stock(catalog_service, p.product_id) == 8


class TestWritePhaseFailures:
    def test_order_id_consumed_when_order_rejected(self, order_service, staff, make_product, monkeypatch):
        p = make_product(stock=10)

        def reject(*args, **kwargs):
            raise IntegrityError("INSERT INTO orders", {}, Exception("constraint"))

        monkeypatch.setattr(order_service.repository, "create_with_assignment", reject)
        with pytest.raises(PersistenceRejected) as exc_info:
            order_service.place_in_store_order([p.product_id], [1], "01-Jan-17", staff[0].staff_id)
        assert exc_info.value.order_id == 1001
        assert exc_info.value.stage == "order"
        assert "constraint" not in str(exc_info.value)

        monkeypatch.undo()
        placement = order_service.place_in_store_order([p.product_id], [1], "01-Jan-17", staff[0].staff_id)
        assert placement.order_id == 1002

    def test_earlier_lines_remain_when_a_later_line_fails(
        self, db, order_service, catalog_service, staff, make_product, monkeypatch
    ):
        a = make_product("A", stock=10)
        b = make_product("B", stock=10)
        real_adjust = order_service.product_repository.adjust_stock

        def adjust(product_id, quantity_change):
            if product_id == b.product_id:
                raise IntegrityError("UPDATE product", {}, Exception("check"))
            return real_adjust(product_id, quantity_change)

        monkeypatch.setattr(order_service.product_repository, "adjust_stock", adjust)
        with pytest.raises(PersistenceRejected) as exc_info:
            order_service.place_in_store_order(
                [a.product_id, b.product_id], [2, 3], "01-Jan-17", staff[0].staff_id
            )

        failure = exc_info.value
        assert failure.stage == "line"
        assert failure.lines_written == 1
        assert str(b.product_id) in str(failure)
        lines = db.query(OrderLine).filter_by(order_id=failure.order_id).all()
        assert [(l.product_id, l.quantity) for l in lines] == [(a.product_id, 2)]
        assert _stock(catalog_service, a.product_id) == 8
        assert _stock(catalog_service, b.product_id) == 10

    def test_missing_order_sequence_writes_nothing(self, db, order_service, catalog_service, staff, make_product):
        p = make_product(stock=10)
        db.delete(db.get(IdSequence, IdSequence.ORDER))
        db.commit()

        with pytest.raises(PersistenceRejected) as exc_info:
            order_service.place_in_store_order([p.product_id], [1], "01-Jan-17", staff[0].staff_id)

        assert exc_info.value.stage == "sequence"
        assert exc_info.value.order_id is None
        assert _count(db, Order) == 0
        assert _stock(catalog_service, p.product_id) == 10

    def test_lost_connection(self, order_service, staff, make_product, monkeypatch):
        p = make_product(stock=10)

        def lost(*args, **kwargs):
            raise OperationalError("INSERT INTO orders", {}, Exception("server closed the connection"))

        monkeypatch.setattr(order_service.repository, "create_with_assignment", lost)
        with pytest.raises(ConnectionLost) as exc_info:
            order_service.place_in_store_order([p.product_id], [1], "01-Jan-17", staff[0].staff_id)
        assert exc_info.value.order_id == 1001


class TestCompleteOrder:
    def test_complete_collection_order(self, order_service, staff, make_product):
        p = make_product(stock=10)
        details = CollectionDetails(first_name="Dana", last_name="Dale", collection_date="10-Jan-17")
        placement = order_service.place_collection_order(
            [p.product_id], [1], "01-Jan-17", staff[0].staff_id, details
        )

        completed = order_service.complete_order(placement.order_id)
        assert completed.completed is True
        assert order_service.complete_order(placement.order_id).completed is True

    def test_complete_unknown_order(self, order_service):
        with pytest.raises(UnknownOrder):
            order_service.complete_order(4242)
