from flask import Blueprint, request, jsonify

from coffeeshop.models.schemas import (
    CreateOrderSchema,
    OrderSchema,
    UpdateOrderStatusSchema,
    UserFilterArgsSchema,
)
from coffeeshop.services.order_service import OrderService

orders_bp = Blueprint("orders", __name__, url_prefix="/api/orders")


@orders_bp.route("", methods=["POST"])
def create_order():
    """Place an order from the user's cart."""
    schema = CreateOrderSchema()
    errors = schema.validate(request.json or {})
    if errors:
        return jsonify({"errors": errors}), 400

    data = schema.load(request.json)
    order = OrderService.create_order(data["user_id"])
    return jsonify(order), 201


@orders_bp.route("", methods=["GET"])
def list_orders():
    """List orders, newest first, optionally for one user."""
    user_id = UserFilterArgsSchema().load(request.args)["user_id"]
    return jsonify(OrderService.list_orders(user_id))


@orders_bp.route("/<int:order_id>", methods=["GET"])
def get_order(order_id):
    """Get a specific order, or null if it is missing or owned by someone else."""
    user_id = UserFilterArgsSchema().load(request.args)["user_id"]
    return jsonify(OrderService.get_order(order_id, user_id))


@orders_bp.route("/<int:order_id>/status", methods=["PATCH"])
def update_order_status(order_id):
    schema = UpdateOrderStatusSchema()
    errors = schema.validate(request.json or {})
    if errors:
        return jsonify({"errors": errors}), 400

    data = schema.load(request.json)
    order = OrderService.update_order_status(order_id, data["status"])
    return jsonify(OrderSchema().dump(order))
