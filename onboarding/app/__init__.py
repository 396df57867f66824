"""Application factory for the onboarding frontend."""
from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from onboarding.config import get_config
from onboarding.app.middleware import register_submission_logging
from onboarding.extensions import jwt


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application."""

    app = Flask(__name__)
    config_cls = get_config(config_name or app.config.get("ENV"))
    app.config.from_object(config_cls)

    register_extensions(app)
    register_blueprints(app)
    register_submission_logging(app)

    CORS(app)
    return app


def register_extensions(app: Flask) -> None:
    """Initialize Flask extensions."""

    jwt.init_app(app)


def register_blueprints(app: Flask) -> None:
    """Register application blueprints."""

    from onboarding.app.frontend import frontend_bp

    app.register_blueprint(frontend_bp)
