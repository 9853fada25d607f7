import logging

from flask import Flask, jsonify

from wellbeing.commands import CommandHandler
from wellbeing.config import config, configure_logging
from wellbeing.errors import (
    ConstraintViolation,
    DataIntegrityError,
    StoreUnavailable,
    ValidationError,
)
from wellbeing.store import Store, create_store

logger = logging.getLogger(__name__)


def create_app(store: Store = None) -> Flask:
    """Application factory."""
    configure_logging()
    app = Flask(__name__)

    if store is None:
        store = create_store(config)
    logger.info("Using %s", type(store).__name__)

    app.store = store
    app.command_handler = CommandHandler.for_store(store)

    # Register blueprints
    from wellbeing.api.commands import bp as commands_bp

    app.register_blueprint(commands_bp, url_prefix="/command")

    @app.route("/api/health")
    def health():
        return {"status": "ok"}

    register_error_handlers(app)
    return app


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def validation_error(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(ConstraintViolation)
    def constraint_violation(e):
        return jsonify({"error": str(e)}), 409

    @app.errorhandler(StoreUnavailable)
    def store_unavailable(e):
        logger.error("Store unavailable: %s", e)
        return jsonify({"error": "Data store unavailable"}), 503

    @app.errorhandler(DataIntegrityError)
    def data_integrity_error(e):
        logger.error("Data integrity error: %s", e)
        return jsonify({"error": str(e)}), 500
