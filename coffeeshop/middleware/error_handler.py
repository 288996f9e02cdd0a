import logging

from flask import jsonify
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

from coffeeshop.models.database import db
from coffeeshop.services.exceptions import ShopError

logger = logging.getLogger(__name__)


def register_error_handlers(app):
    """Map service and transport failures to JSON responses."""

    @app.errorhandler(ShopError)
    def handle_shop_error(error):
        return jsonify({"error": error.message}), error.status_code

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        return jsonify({"errors": error.messages}), 400

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception("Unhandled error while serving request")
        db.session.rollback()
        return jsonify({"error": "Internal server error"}), 500
