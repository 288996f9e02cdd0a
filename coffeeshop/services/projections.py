"""Read views joining carts and orders with their products and owners."""

from typing import Optional

from coffeeshop.models.database import CartItem, Order
from coffeeshop.models.schemas import CartItemWithProductSchema, OrderWithItemsSchema

_cart_items_schema = CartItemWithProductSchema(many=True)
_order_schema = OrderWithItemsSchema()
_orders_schema = OrderWithItemsSchema(many=True)


def cart_view(user_id: int) -> list:
    """Cart lines for a user, each carrying the product's current record."""
    items = CartItem.query.filter_by(user_id=user_id).order_by(CartItem.id).all()
    return _cart_items_schema.dump(items)


def order_view(order: Order) -> dict:
    """An order with its owner and its items in id order, each with its product."""
    return _order_schema.dump(order)


def find_order(order_id: int, user_id: Optional[int] = None) -> Optional[dict]:
    """Look up one order; a ``user_id`` that does not own it reads as absent."""
    query = Order.query.filter_by(id=order_id)
    if user_id is not None:
        query = query.filter_by(user_id=user_id)
    order = query.first()
    return order_view(order) if order else None


def list_orders(user_id: Optional[int] = None) -> list:
    """All orders, most recent first, optionally restricted to one user."""
    query = Order.query
    if user_id is not None:
        query = query.filter_by(user_id=user_id)
    orders = query.order_by(Order.created_at.desc(), Order.id.desc()).all()
    return _orders_schema.dump(orders)
