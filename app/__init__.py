"""Application factory for the crossorigin demo service."""

from __future__ import annotations

from flask import Flask
from flask_smorest import Api

from config import get_config
from crossorigin import Policy

from .cli import register_cli
from .cors import init_cors
from .logging import init_request_logging


def create_app(config_name: str | None = None, cors_policy: Policy | None = None) -> Flask:
    """Application factory adhering to the Flask app factory pattern.

    ``cors_policy`` overrides the policy otherwise built from ``CORS_*`` settings,
    which is the only way to install an origin predicate.
    """

    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    init_request_logging(app)
    init_cors(app, cors_policy)

    _configure_api(app)
    api = Api(app)
    app.extensions["smorest_api"] = api
    _register_blueprints(app, api)
    _register_error_handlers(app)

    register_cli(app)
    return app


def _configure_api(app: Flask) -> None:
    app.config.setdefault("API_TITLE", "crossorigin API")
    app.config.setdefault("API_VERSION", "v1")
    app.config.setdefault("OPENAPI_VERSION", "3.0.3")
    app.config.setdefault("OPENAPI_URL_PREFIX", "/docs")
    app.config.setdefault("OPENAPI_SWAGGER_UI_PATH", "/")
    app.config.setdefault(
        "OPENAPI_SWAGGER_UI_URL",
        "https://cdn.jsdelivr.net/npm/swagger-ui-dist/",
    )


def _register_blueprints(app: Flask, api: Api) -> None:
    """Register Flask blueprints."""

    from .health import blp as health_blp
    from .policy import blp as policy_blp

    api.register_blueprint(health_blp, url_prefix="/health")
    api.register_blueprint(policy_blp, url_prefix="/cors")


def _register_error_handlers(app: Flask) -> None:
    """Register global error handlers."""

    from .errors import register_error_handlers

    register_error_handlers(app)
