import logging
from datetime import datetime, timezone
from decimal import Decimal

from flask import Flask, jsonify
from flask.json.provider import DefaultJSONProvider
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from coffeeshop.config.settings import Config
from coffeeshop.models.database import db
from coffeeshop.api import products_bp, users_bp, cart_bp, orders_bp
from coffeeshop.middleware.error_handler import register_error_handlers
from coffeeshop.cli import register_commands


class ShopJSONProvider(DefaultJSONProvider):
    """Render money as JSON numbers instead of strings."""

    @staticmethod
    def default(o):
        if isinstance(o, Decimal):
            return float(o)
        return DefaultJSONProvider.default(o)


def create_app(config_object=Config) -> Flask:
    """Application factory."""
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.json = ShopJSONProvider(app)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize extensions
    db.init_app(app)

    CORS(app, origins=app.config["CORS_ORIGINS"])

    Limiter(
        app=app,
        key_func=get_remote_address,
        default_limits=[app.config["RATE_LIMIT_DEFAULT"]],
    )

    # Register blueprints
    app.register_blueprint(products_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(cart_bp)
    app.register_blueprint(orders_bp)

    @app.route("/api/health", methods=["GET"])
    def healthcheck():
        return jsonify({"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()})

    # Register error handlers
    register_error_handlers(app)
    register_commands(app)

    return app
