from flask import Blueprint, request, jsonify

from coffeeshop.models.schemas import AddToCartSchema, CartArgsSchema, CartItemSchema, UpdateCartItemSchema
from coffeeshop.services.cart_service import CartService

cart_bp = Blueprint("cart", __name__, url_prefix="/api/cart")

cart_item_schema = CartItemSchema()


@cart_bp.route("", methods=["POST"])
def add_to_cart():
    """Add a product to a user's cart."""
    schema = AddToCartSchema()
    errors = schema.validate(request.json or {})
    if errors:
        return jsonify({"errors": errors}), 400

    data = schema.load(request.json)
    item = CartService.add_to_cart(data["user_id"], data["product_id"], data["quantity"])
    return jsonify(cart_item_schema.dump(item)), 201


@cart_bp.route("", methods=["GET"])
def list_cart_items():
    """List a user's cart lines with their products."""
    user_id = CartArgsSchema().load(request.args)["user_id"]
    return jsonify(CartService.list_cart_items(user_id))


@cart_bp.route("/<int:cart_item_id>", methods=["PATCH"])
def update_cart_item(cart_item_id):
    schema = UpdateCartItemSchema()
    errors = schema.validate(request.json or {})
    if errors:
        return jsonify({"errors": errors}), 400

    data = schema.load(request.json)
    item = CartService.update_cart_item(cart_item_id, data["quantity"])
    return jsonify(cart_item_schema.dump(item))


@cart_bp.route("/<int:cart_item_id>", methods=["DELETE"])
def remove_from_cart(cart_item_id):
    CartService.remove_from_cart(cart_item_id)
    return "", 204


@cart_bp.route("", methods=["DELETE"])
def clear_cart():
    """Empty a user's cart."""
    user_id = CartArgsSchema().load(request.args)["user_id"]
    CartService.clear_cart(user_id)
    return "", 204
