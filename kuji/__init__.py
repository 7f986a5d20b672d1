"""Flask application package for the kuji box simulator."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from flask import Flask


def create_app(overrides: Mapping[str, Any] | None = None) -> Flask:
    """Application factory.

    Args:
        overrides: Config values applied on top of the environment config.

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from kuji.config import get_config
    from kuji.error_handlers import register_error_handlers
    from kuji.logging_config import configure_logging
    from kuji.routes.advice import advice_bp
    from kuji.routes.health import health_bp
    from kuji.routes.simulation import simulation_bp
    from kuji.store import init_store

    app = Flask(__name__)
    app.config.from_object(get_config())
    if overrides:
        app.config.update(overrides)

    configure_logging(app)
    init_store(app)
    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(simulation_bp)
    app.register_blueprint(advice_bp)

    return app
