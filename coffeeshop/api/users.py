from flask import Blueprint, request, jsonify

from coffeeshop.models.database import UserRole
from coffeeshop.models.schemas import UserSchema
from coffeeshop.services.user_service import UserService

users_bp = Blueprint("users", __name__, url_prefix="/api/users")

user_schema = UserSchema()


@users_bp.route("", methods=["POST"])
def create_user():
    """Register a new customer or admin."""
    data = request.json or {}
    user = UserService.create_user(
        data.get("email"),
        data.get("name"),
        data.get("role", UserRole.CUSTOMER.value),
    )
    return jsonify(user_schema.dump(user)), 201


@users_bp.route("/<int:user_id>", methods=["GET"])
def get_user(user_id):
    user = UserService.get_user(user_id)
    return jsonify(user_schema.dump(user) if user else None)
