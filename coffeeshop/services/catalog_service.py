import logging
from typing import Optional

from coffeeshop.models.database import db, CartItem, CoffeeProduct, OrderItem, utcnow
from coffeeshop.models.schemas import CreateProductSchema
from coffeeshop.services.exceptions import NotFoundError, ProductInUseError

logger = logging.getLogger(__name__)

product_input = CreateProductSchema()
product_changes = CreateProductSchema(partial=True)


class CatalogService:
    """Coffee product catalog.

    Writes take raw field mappings and load them through the product schema,
    so malformed input raises ``marshmallow.ValidationError``.
    """

    @staticmethod
    def list_products() -> list:
        return CoffeeProduct.query.order_by(CoffeeProduct.id).all()

    @staticmethod
    def get_product(product_id: int) -> Optional[CoffeeProduct]:
        return db.session.get(CoffeeProduct, product_id)

    @staticmethod
    def create_product(data: dict) -> CoffeeProduct:
        """Validate and insert a new product."""
        product = CoffeeProduct(**product_input.load(data))
        db.session.add(product)
        db.session.commit()
        logger.info("Created product %s (%s)", product.id, product.name)
        return product

    @staticmethod
    def update_product(product_id: int, data: dict) -> CoffeeProduct:
        """Apply a partial update; fields missing from ``data`` are left alone."""
        product = db.session.get(CoffeeProduct, product_id)
        if not product:
            raise NotFoundError(f"Product with id {product_id} not found")

        for key, value in product_changes.load(data).items():
            setattr(product, key, value)
        product.updated_at = utcnow()

        db.session.commit()
        return product

    @staticmethod
    def delete_product(product_id: int) -> None:
        """Delete a product and its cart lines unless an order references it."""
        product = db.session.get(CoffeeProduct, product_id)
        if not product:
            raise NotFoundError(f"Product with id {product_id} not found")

        referenced = db.session.query(
            OrderItem.query.filter_by(product_id=product_id).exists()
        ).scalar()
        if referenced:
            logger.warning("Refusing to delete product %s referenced by orders", product_id)
            raise ProductInUseError("Cannot delete product that is referenced in orders")

        try:
            CartItem.query.filter_by(product_id=product_id).delete()
            db.session.delete(product)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        logger.info("Deleted product %s", product_id)
