from coffeeshop.api.products import products_bp
from coffeeshop.api.users import users_bp
from coffeeshop.api.cart import cart_bp
from coffeeshop.api.orders import orders_bp

__all__ = ["products_bp", "users_bp", "cart_bp", "orders_bp"]
