"""
Order API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from retail_orders.api.errors import to_http_error
from retail_orders.database import get_db
from retail_orders.exceptions import RetailOrderError
from retail_orders.services.order_service import OrderService
from retail_orders.schemas.order import (
    OrderCreate,
    OrderPlacement,
    OrderResponse,
    SweepRequest,
    SweepResponse
)

router = APIRouter(prefix="/orders", tags=["orders"])


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    """Dependency to get OrderService instance"""
    return OrderService(db)


@router.post("", response_model=OrderPlacement, status_code=status.HTTP_201_CREATED, summary="Place order")
def place_order(
    order_data: OrderCreate,
    service: OrderService = Depends(get_order_service)
):
    """
    Place a new order

    The order type follows **detail**: none for an in-store sale,
    `{"kind": "collection", ...}` or `{"kind": "delivery", ...}` otherwise.

    - **lines**: Products and quantities (at least one)
    - **order_date**: Date placed, DD-Mon-YY
    - **staff_id**: Staff member processing the order
    """
    try:
        return service.place(order_data)
    except RetailOrderError as e:
        raise to_http_error(e)


@router.get("/{order_id}", response_model=OrderResponse, summary="Get order by ID")
def get_order(
    order_id: int,
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve a specific order by ID

    - **order_id**: Order ID
    """
    order = service.get_order_by_id(order_id)
    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Order with id={order_id} not found"
        )
    return order


@router.patch("/{order_id}/complete", response_model=OrderResponse, summary="Complete order")
def complete_order(
    order_id: int,
    service: OrderService = Depends(get_order_service)
):
    """
    Mark a collection or delivery order as collected or delivered

    - **order_id**: Order ID
    """
    try:
        return service.complete_order(order_id)
    except RetailOrderError as e:
        raise to_http_error(e)


@router.post("/sweep", response_model=SweepResponse, summary="Cancel expired collections")
def sweep_expired_collections(
    sweep_data: SweepRequest,
    service: OrderService = Depends(get_order_service)
):
    """
    Cancel uncollected collection orders past the grace period and return
    their stock

    - **reference_date**: Date to measure the grace period from, DD-Mon-YY
    """
    try:
        cancelled = service.sweep_expired_collections(sweep_data.reference_date)
    except RetailOrderError as e:
        raise to_http_error(e)
    return SweepResponse(cancelled_order_ids=cancelled)
