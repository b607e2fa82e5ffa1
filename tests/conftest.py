"""Shared pytest fixtures."""

from __future__ import annotations

import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from crossorigin import BufferedResponse, HeaderMapRequest, Policy  # noqa: E402


@pytest.fixture(scope="session")
def app() -> Iterator:
    """Session-wide Flask application using the default, unrestricted policy."""

    flask_app = create_app("testing")
    yield flask_app


@pytest.fixture()
def client(app):
    """Provide a Flask test client."""

    with app.test_client() as client:
        yield client


@pytest.fixture()
def make_client() -> Callable[..., object]:
    """Build a test client for an app running with a specific CORS policy."""

    def _factory(**options):
        flask_app = create_app("testing", cors_policy=Policy(**options))

        @flask_app.route("/echo", methods=["GET", "POST", "PUT"])
        def echo():  # pragma: no cover - invoked via test client
            return {"ok": True}

        return flask_app.test_client()

    return _factory


@pytest.fixture()
def response() -> BufferedResponse:
    return BufferedResponse()


@pytest.fixture()
def make_request() -> Callable[..., HeaderMapRequest]:
    def _factory(method: str = "GET", **headers: str) -> HeaderMapRequest:
        return HeaderMapRequest(method, {name.replace("_", "-"): value for name, value in headers.items()})

    return _factory
