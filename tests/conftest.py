"""Shared pytest fixtures for the coffee shop tests."""

from decimal import Decimal

import pytest

from coffeeshop.app import create_app
from coffeeshop.config.settings import TestConfig
from coffeeshop.models.database import db, CoffeeProduct, RoastType, User, UserRole


@pytest.fixture
def app():
    """Application bound to a fresh in-memory database."""
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def customer(app):
    user = User(email="ana@example.com", name="Ana", role=UserRole.CUSTOMER)
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def other_customer(app):
    user = User(email="ben@example.com", name="Ben", role=UserRole.CUSTOMER)
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def make_product(app):
    """Factory for catalog products with sensible defaults."""

    def _make(**overrides):
        fields = {
            "name": "Colombian Supremo",
            "description": "Caramel and nuts.",
            "price": Decimal("15.99"),
            "origin": "Colombia",
            "roast_type": RoastType.MEDIUM,
            "stock_quantity": 50,
        }
        fields.update(overrides)
        product = CoffeeProduct(**fields)
        db.session.add(product)
        db.session.commit()
        return product

    return _make


@pytest.fixture
def product(make_product):
    return make_product()
