from __future__ import annotations

import pytest

from app.cors import CORS_EXTENSION, policy_from_config
from config import DevelopmentConfig, ProductionConfig, TestingConfig, get_config


def test_get_config_by_name():
    assert get_config("production") is ProductionConfig
    assert get_config("TESTING") is TestingConfig


def test_get_config_defaults_to_app_env(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)
    assert get_config() is DevelopmentConfig
    monkeypatch.setenv("APP_ENV", "production")
    assert get_config() is ProductionConfig


def test_get_config_rejects_unknown_env():
    with pytest.raises(KeyError):
        get_config("staging")


def test_app_builds_policy_from_config(app):
    engine = app.extensions[CORS_EXTENSION]
    assert engine.policy == policy_from_config(app.config)
