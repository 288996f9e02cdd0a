import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from coffeeshop.models.database import db, CartItem, CoffeeProduct, User
from coffeeshop.services import projections
from coffeeshop.services.exceptions import InsufficientStockError, NotFoundError
from coffeeshop.services.validation import require_quantity

logger = logging.getLogger(__name__)


def _find_line(user_id: int, product_id: int) -> Optional[CartItem]:
    return CartItem.query.filter_by(user_id=user_id, product_id=product_id).first()


def _merge(item: CartItem, product: CoffeeProduct, quantity: int) -> None:
    combined = item.quantity + quantity
    if combined > product.stock_quantity:
        logger.warning(
            "Cart merge refused for user %s product %s: %s > %s in stock",
            item.user_id, product.id, combined, product.stock_quantity,
        )
        raise InsufficientStockError("Insufficient stock for requested quantity")
    item.quantity = combined


class CartService:
    """Per-user cart lines, one per (user, product) pair."""

    @staticmethod
    def add_to_cart(user_id: int, product_id: int, quantity: int) -> CartItem:
        """Add a product to the cart, merging into an existing line for the same product."""
        require_quantity(quantity)

        if not db.session.get(User, user_id):
            raise NotFoundError("User not found")
        product = db.session.get(CoffeeProduct, product_id)
        if not product:
            raise NotFoundError("Product not found")
        if quantity > product.stock_quantity:
            raise InsufficientStockError("Insufficient stock")

        item = _find_line(user_id, product_id)
        if item:
            _merge(item, product, quantity)
            db.session.commit()
            return item

        item = CartItem(user_id=user_id, product_id=product_id, quantity=quantity)
        db.session.add(item)
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            # a concurrent request inserted the line first
            item = _find_line(user_id, product_id)
            if not item:
                raise
            logger.info("Cart line for user %s product %s created concurrently, merging", user_id, product_id)
            _merge(item, product, quantity)
            db.session.commit()
        return item

    @staticmethod
    def update_cart_item(cart_item_id: int, quantity: int) -> CartItem:
        require_quantity(quantity)
        item = db.session.get(CartItem, cart_item_id)
        if not item:
            raise NotFoundError(f"Cart item with id {cart_item_id} not found")

        item.quantity = quantity
        db.session.commit()
        return item

    @staticmethod
    def remove_from_cart(cart_item_id: int) -> None:
        CartItem.query.filter_by(id=cart_item_id).delete()
        db.session.commit()

    @staticmethod
    def clear_cart(user_id: int) -> None:
        CartItem.query.filter_by(user_id=user_id).delete()
        db.session.commit()

    @staticmethod
    def list_cart_items(user_id: int) -> list:
        return projections.cart_view(user_id)
