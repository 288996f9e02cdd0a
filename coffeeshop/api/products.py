from flask import Blueprint, request, jsonify

from coffeeshop.models.schemas import CoffeeProductSchema
from coffeeshop.services.catalog_service import CatalogService

products_bp = Blueprint("products", __name__, url_prefix="/api/products")

product_schema = CoffeeProductSchema()


@products_bp.route("", methods=["GET"])
def list_products():
    """List the whole catalog."""
    return jsonify(CoffeeProductSchema(many=True).dump(CatalogService.list_products()))


@products_bp.route("/<int:product_id>", methods=["GET"])
def get_product(product_id):
    """Get one product, or null when it does not exist."""
    product = CatalogService.get_product(product_id)
    return jsonify(product_schema.dump(product) if product else None)


@products_bp.route("", methods=["POST"])
def create_product():
    """Add a product to the catalog."""
    product = CatalogService.create_product(request.json or {})
    return jsonify(product_schema.dump(product)), 201


@products_bp.route("/<int:product_id>", methods=["PATCH"])
def update_product(product_id):
    """Change some of a product's fields."""
    product = CatalogService.update_product(product_id, request.json or {})
    return jsonify(product_schema.dump(product))


@products_bp.route("/<int:product_id>", methods=["DELETE"])
def delete_product(product_id):
    """Remove a product that no order refers to."""
    CatalogService.delete_product(product_id)
    return "", 204
