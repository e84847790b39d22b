"""
Typed failures raised by the fulfillment and reporting services
"""
from typing import Optional

from sqlalchemy.exc import DisconnectionError, OperationalError


class RetailOrderError(Exception):
    """Base exception for order service errors"""
    pass


class InvalidOrderRequest(RetailOrderError, ValueError):
    """Malformed request: mismatched, empty or non-positive lines"""
    pass


class InvalidStaff(RetailOrderError):
    """Staff ID does not reference a staff member"""

    def __init__(self, staff_id: int):
        self.staff_id = staff_id
        super().__init__(f"Staff ID {staff_id} was invalid")


class InvalidDate(RetailOrderError):
    """Date is not a valid DD-Mon-YY calendar date"""

    def __init__(self, value, reason: Optional[str] = None):
        self.value = value
        self.reason = reason
        message = f"Date {value!r} was invalid"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnknownProduct(RetailOrderError):
    """Product not found"""

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Invalid product ID: {product_id}")


class UnknownOrder(RetailOrderError):
    """Order not found"""

    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found")


class InsufficientStock(RetailOrderError):
    """Requested quantity exceeds remaining stock"""

    def __init__(self, product_id: int, requested: int, available: int):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient quantity for product {product_id}: "
            f"{requested} requested but only {available} remains"
        )


class PersistenceRejected(RetailOrderError):
    """
    The store rejected a write

    ``order_id`` is set once an order identity was allocated, ``stage`` names
    the step that failed and ``lines_written`` counts order lines already
    committed when the failure happened. Nothing committed before the failing
    step is undone.
    """

    def __init__(
        self,
        message: str,
        order_id: Optional[int] = None,
        stage: Optional[str] = None,
        lines_written: int = 0
    ):
        self.order_id = order_id
        self.stage = stage
        self.lines_written = lines_written
        super().__init__(message)


class ConnectionLost(PersistenceRejected):
    """The store connection failed mid-operation"""
    pass


def from_store_error(
    error: Exception,
    message: str,
    order_id: Optional[int] = None,
    stage: Optional[str] = None,
    lines_written: int = 0
) -> PersistenceRejected:
    """
    Translate a SQLAlchemy error into a typed failure

    The store's own error text is kept on ``__cause__`` for logs and never
    copied into the message.
    """
    if isinstance(error, (OperationalError, DisconnectionError)):
        failure_cls = ConnectionLost
        message = f"{message} (store connection lost)"
    else:
        failure_cls = PersistenceRejected
    return failure_cls(message, order_id=order_id, stage=stage, lines_written=lines_written)
