import logging
from decimal import Decimal

import click

from coffeeshop.models.database import db, CoffeeProduct, RoastType

logger = logging.getLogger(__name__)

STARTER_CATALOG = [
    {
        "name": "Ethiopian Yirgacheffe",
        "description": "Floral and bright with notes of jasmine and lemon.",
        "price": Decimal("18.50"),
        "origin": "Ethiopia",
        "roast_type": RoastType.LIGHT,
        "stock_quantity": 40,
    },
    {
        "name": "Colombian Supremo",
        "description": "Balanced body with caramel sweetness and a nutty finish.",
        "price": Decimal("15.99"),
        "origin": "Colombia",
        "roast_type": RoastType.MEDIUM,
        "stock_quantity": 50,
    },
    {
        "name": "Sumatra Mandheling",
        "description": "Earthy and full-bodied with low acidity.",
        "price": Decimal("17.25"),
        "origin": "Indonesia",
        "roast_type": RoastType.DARK,
        "stock_quantity": 30,
    },
    {
        "name": "Italian Espresso Blend",
        "description": "Smoky, bittersweet and intense, made for espresso.",
        "price": Decimal("14.75"),
        "origin": "Brazil",
        "roast_type": RoastType.EXTRA_DARK,
        "stock_quantity": 60,
    },
]


def register_commands(app):
    """Attach database maintenance commands to the Flask CLI."""

    @app.cli.command("init-db")
    def init_db():
        """Create all tables."""
        db.create_all()
        click.echo("Database initialized.")

    @app.cli.command("seed-catalog")
    def seed_catalog():
        """Insert the starter coffees into an empty catalog."""
        if CoffeeProduct.query.first():
            click.echo("Catalog already has products, skipping.")
            return

        for entry in STARTER_CATALOG:
            db.session.add(CoffeeProduct(**entry))
        db.session.commit()
        logger.info("Seeded %d products", len(STARTER_CATALOG))
        click.echo(f"Added {len(STARTER_CATALOG)} products.")
