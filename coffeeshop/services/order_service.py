import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import lazyload

from coffeeshop.models.database import (
    db,
    CartItem,
    CoffeeProduct,
    Order,
    OrderItem,
    OrderStatus,
    User,
    utcnow,
)
from coffeeshop.services import projections
from coffeeshop.services.exceptions import (
    CartChangedError,
    EmptyCartError,
    InsufficientStockError,
    NotFoundError,
)
from coffeeshop.services.validation import CENT, require_order_status

logger = logging.getLogger(__name__)


def _lock_cart(user_id: int) -> list:
    """Cart lines for ``user_id``, locked until the transaction ends."""
    return (
        CartItem.query.filter_by(user_id=user_id)
        .options(lazyload(CartItem.product))
        .order_by(CartItem.id)
        .with_for_update()
        .populate_existing()
        .all()
    )


def _lock_products(product_ids: list) -> dict:
    """Products by id, locked in id order and refreshed from the database."""
    return {
        product.id: product
        for product in CoffeeProduct.query
        .filter(CoffeeProduct.id.in_(product_ids))
        .order_by(CoffeeProduct.id)
        .with_for_update()
        .populate_existing()
        .all()
    }


class OrderService:
    """Handles order business logic."""

    @staticmethod
    def create_order(user_id: int) -> dict:
        """Turn the user's cart into a pending order.

        Stock checks, the order and its items, the stock decrement and the
        cart clear are committed together or not at all. The cart lines and
        then the product rows (in id order) stay locked until commit, and the
        order is refused if the cart cleared is not the cart that was priced.
        """
        user = db.session.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")

        try:
            cart_items = _lock_cart(user_id)
            if not cart_items:
                raise EmptyCartError("Cart is empty")

            products = _lock_products([item.product_id for item in cart_items])

            total = Decimal("0.00")
            for item in cart_items:
                product = products[item.product_id]
                if item.quantity > product.stock_quantity:
                    raise InsufficientStockError(f"Insufficient stock for product: {product.name}")
                total += product.price * item.quantity

            order = Order(
                user_id=user_id,
                total_amount=total.quantize(CENT),
                status=OrderStatus.PENDING,
            )
            db.session.add(order)

            now = utcnow()
            for item in cart_items:
                product = products[item.product_id]
                order.items.append(OrderItem(
                    product_id=product.id,
                    quantity=item.quantity,
                    price_at_time=product.price,
                ))
                product.stock_quantity -= item.quantity
                product.updated_at = now

            deleted = CartItem.query.filter_by(user_id=user_id).delete()
            if deleted != len(cart_items):
                raise CartChangedError("Cart changed while the order was being placed")
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            logger.warning("Order creation for user %s rolled back: %s", user_id, e)
            raise

        logger.info("Placed order %s for user %s totalling %s", order.id, user_id, order.total_amount)
        return projections.order_view(order)

    @staticmethod
    def update_order_status(order_id: int, status) -> Order:
        """Overwrite an order's status. Any status may follow any other."""
        status = require_order_status(status)
        order = db.session.get(Order, order_id)
        if not order:
            raise NotFoundError(f"Order with id {order_id} not found")

        previous = order.status
        order.status = status
        order.updated_at = utcnow()
        db.session.commit()
        logger.info("Order %s status %s -> %s", order_id, previous.value, status.value)
        return order

    @staticmethod
    def get_order(order_id: int, user_id: Optional[int] = None) -> Optional[dict]:
        return projections.find_order(order_id, user_id)

    @staticmethod
    def list_orders(user_id: Optional[int] = None) -> list:
        return projections.list_orders(user_id)
