"""
Schemas package
"""
from retail_orders.schemas.product import (
    ProductBase,
    ProductCreate,
    RestockRequest,
    ProductResponse,
    StockLevel
)
from retail_orders.schemas.staff import StaffCreate, StaffResponse
from retail_orders.schemas.order import (
    OrderType,
    CollectionDetails,
    DeliveryDetails,
    OrderDetail,
    OrderLineCreate,
    OrderCreate,
    OrderPlacement,
    OrderResponse,
    SweepRequest,
    SweepResponse,
    OrderFailure
)
from retail_orders.schemas.report import (
    ProductValue,
    StaffValue,
    StaffMember,
    StaffProductRow,
    StaffProductMatrix
)

__all__ = [
    "ProductBase",
    "ProductCreate",
    "RestockRequest",
    "ProductResponse",
    "StockLevel",
    "StaffCreate",
    "StaffResponse",
    "OrderType",
    "CollectionDetails",
    "DeliveryDetails",
    "OrderDetail",
    "OrderLineCreate",
    "OrderCreate",
    "OrderPlacement",
    "OrderResponse",
    "SweepRequest",
    "SweepResponse",
    "OrderFailure",
    "ProductValue",
    "StaffValue",
    "StaffMember",
    "StaffProductRow",
    "StaffProductMatrix"
]
