"""Rent vs Buy Planner Flask Application Factory."""

import logging
from typing import Optional

from flask import Flask

from rent_vs_buy.config import Settings, get_global_settings
from rent_vs_buy.services.projection_service import ProjectionService


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        settings: Settings to use instead of the global environment settings

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)

    # Configuration from Pydantic Settings
    if settings is None:
        settings = get_global_settings()
    if settings.secret_key:
        app.config["SECRET_KEY"] = settings.secret_key
    app.config["ENV"] = settings.app_env
    app.config["DEBUG"] = settings.app_env == "development"
    app.config["TESTING"] = settings.app_env == "testing"

    app.logger.setLevel(settings.log_level)
    logging.getLogger("rent_vs_buy").setLevel(settings.log_level)

    app.extensions["projection_service"] = ProjectionService(
        horizon_policy=settings.horizon_policy(),
        currency_symbol=settings.currency_symbol,
    )

    # Register blueprints
    from rent_vs_buy.blueprints.health import health_bp
    from rent_vs_buy.blueprints.projections import projections_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(projections_bp)

    return app
