"""
Pydantic schemas for order requests, results and detail variants
"""
from datetime import date
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from retail_orders.schemas.product import StockLevel


class OrderType(str, Enum):
    """Kinds of sale"""
    IN_STORE = "InStore"
    COLLECTION = "Collection"
    DELIVERY = "Delivery"


class CollectionDetails(BaseModel):
    """Who collects a Collection order, and when"""
    kind: Literal["collection"] = "collection"
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    collection_date: str = Field(..., description="DD-Mon-YY")

    model_config = ConfigDict(frozen=True)


class DeliveryDetails(BaseModel):
    """Where and when a Delivery order is delivered"""
    kind: Literal["delivery"] = "delivery"
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    house: str = Field(..., min_length=1, max_length=30)
    street: str = Field(..., min_length=1, max_length=30)
    city: str = Field(..., min_length=1, max_length=30)
    delivery_date: str = Field(..., description="DD-Mon-YY")

    model_config = ConfigDict(frozen=True)


# No detail means an in-store sale
OrderDetail = Annotated[Union[CollectionDetails, DeliveryDetails], Field(discriminator="kind")]


class OrderLineCreate(BaseModel):
    """One product and quantity in an order request"""
    product_id: int = Field(..., gt=0, description="Product ID")
    quantity: int = Field(..., gt=0, description="Quantity to order")


class OrderCreate(BaseModel):
    """Schema for placing an order of any type"""
    lines: List[OrderLineCreate] = Field(..., min_length=1)
    order_date: str = Field(..., description="DD-Mon-YY")
    staff_id: int = Field(..., description="Staff member processing the order")
    detail: Optional[OrderDetail] = None

    model_config = ConfigDict(frozen=True)

    @property
    def order_type(self) -> OrderType:
        if isinstance(self.detail, CollectionDetails):
            return OrderType.COLLECTION
        if isinstance(self.detail, DeliveryDetails):
            return OrderType.DELIVERY
        return OrderType.IN_STORE

    @property
    def product_ids(self) -> List[int]:
        return [line.product_id for line in self.lines]

    @property
    def quantities(self) -> List[int]:
        return [line.quantity for line in self.lines]


class OrderPlacement(BaseModel):
    """Result of a successful order placement"""
    order_id: int
    order_type: OrderType
    completed: bool
    stock_levels: List[StockLevel]


class OrderResponse(BaseModel):
    """Schema for order response"""
    order_id: int
    order_type: OrderType
    completed: bool
    placed_on: date

    model_config = ConfigDict(from_attributes=True)


class SweepRequest(BaseModel):
    """Schema for running the expired collection sweep"""
    reference_date: str = Field(..., description="DD-Mon-YY")


class SweepResponse(BaseModel):
    """Orders cancelled by a sweep"""
    cancelled_order_ids: List[int]


class OrderFailure(BaseModel):
    """Error body for rejected orders"""
    detail: str
    error: str
    order_id: Optional[int] = None
    stage: Optional[str] = None
    lines_written: int = 0
