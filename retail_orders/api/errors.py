"""
Translate typed order failures into HTTP errors
"""
from fastapi import HTTPException, status

from retail_orders.exceptions import (
    ConnectionLost,
    InsufficientStock,
    InvalidDate,
    InvalidOrderRequest,
    InvalidStaff,
    PersistenceRejected,
    RetailOrderError,
    UnknownOrder,
    UnknownProduct
)
from retail_orders.schemas.order import OrderFailure

_STATUS_BY_ERROR = (
    (ConnectionLost, status.HTTP_503_SERVICE_UNAVAILABLE),
    (PersistenceRejected, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (InsufficientStock, status.HTTP_409_CONFLICT),
    (UnknownProduct, status.HTTP_404_NOT_FOUND),
    (UnknownOrder, status.HTTP_404_NOT_FOUND),
    (InvalidStaff, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidDate, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidOrderRequest, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (RetailOrderError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def to_http_error(error: RetailOrderError) -> HTTPException:
    """Map a failure to a status code with a body naming the offending input"""
    status_code = next(code for error_type, code in _STATUS_BY_ERROR if isinstance(error, error_type))

    body = OrderFailure(detail=str(error), error=type(error).__name__)
    if isinstance(error, PersistenceRejected):
        body.order_id = error.order_id
        body.stage = error.stage
        body.lines_written = error.lines_written
    return HTTPException(status_code=status_code, detail=body.model_dump())
