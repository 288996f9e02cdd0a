from decimal import Decimal

from coffeeshop.models.database import OrderStatus
from coffeeshop.services.exceptions import InvalidInputError

CENT = Decimal("0.01")


def require_quantity(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidInputError("Quantity must be a positive integer")
    return value


def require_order_status(value) -> OrderStatus:
    try:
        return value if isinstance(value, OrderStatus) else OrderStatus(value)
    except ValueError:
        raise InvalidInputError(f"Unknown order status: {value}")
