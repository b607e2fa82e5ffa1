"""Application configuration classes."""

from __future__ import annotations

import os

from crossorigin.defaults import SIMPLE_METHODS, SIMPLE_REQUEST_HEADERS, SIMPLE_RESPONSE_HEADERS


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "crossorigin"
    SECRET_KEY = _get_env("SECRET_KEY", "change-me")
    LOG_LEVEL = _get_env("LOG_LEVEL", "INFO")
    LOG_JSON_ENABLED = _get_env("LOG_JSON_ENABLED", "false").lower() == "true"
    LOG_FORMAT = _get_env("LOG_FORMAT", "%(asctime)s %(levelname)s [%(name)s] %(message)s")
    CORS_ORIGINS = _get_env("CORS_ORIGINS", "*")
    CORS_METHODS = _get_env("CORS_METHODS", ",".join(SIMPLE_METHODS))
    CORS_REQUEST_HEADERS = _get_env("CORS_REQUEST_HEADERS", ",".join(SIMPLE_REQUEST_HEADERS))
    CORS_RESPONSE_HEADERS = _get_env("CORS_RESPONSE_HEADERS", ",".join(SIMPLE_RESPONSE_HEADERS))
    CORS_SUPPORTS_CREDENTIALS = _get_env("CORS_SUPPORTS_CREDENTIALS", "false").lower() == "true"
    CORS_MAX_AGE = _get_env("CORS_MAX_AGE", "")
    CORS_END_PREFLIGHT_REQUESTS = (
        _get_env("CORS_END_PREFLIGHT_REQUESTS", "true").lower() == "true"
    )


class DevelopmentConfig(BaseConfig):
    """Configuration for local development."""

    DEBUG = True
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration used by the test suite."""

    DEBUG = False
    TESTING = True


class ProductionConfig(BaseConfig):
    """Configuration for production deployments."""

    DEBUG = False
    TESTING = False


CONFIG_BY_ENV = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config(config_name: str | None = None) -> type[BaseConfig]:
    """Return the config class for the requested environment.

    Args:
        config_name: Optional explicit config identifier. If omitted, the
            APP_ENV environment variable is consulted.

    Raises:
        KeyError: If the requested configuration is not defined.
    """

    env_candidate = config_name if config_name is not None else os.getenv("APP_ENV", "development")
    env_name = (env_candidate or "development").lower()
    try:
        return CONFIG_BY_ENV[env_name]
    except KeyError as exc:
        raise KeyError(f"Unknown APP_ENV '{env_name}'") from exc
