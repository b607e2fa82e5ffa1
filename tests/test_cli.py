from __future__ import annotations

from app import create_app
from crossorigin import Policy


def test_cors_check_actual_request(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["cors-check", "--origin", "https://a.test"])
    assert result.exit_code == 0
    assert "Request: actual (origin allowed)" in result.output
    assert "Access-Control-Allow-Origin: *" in result.output
    assert "passes through" in result.output


def test_cors_check_preflight_is_ended(app):
    runner = app.test_cli_runner()
    result = runner.invoke(
        args=[
            "cors-check",
            "--origin",
            "https://a.test",
            "--method",
            "OPTIONS",
            "--request-method",
            "POST",
        ]
    )
    assert result.exit_code == 0
    assert "Access-Control-Allow-Methods: GET,HEAD,POST" in result.output
    assert "Exchange ended with status 204." in result.output


def test_cors_check_without_origin(app):
    result = app.test_cli_runner().invoke(args=["cors-check"])
    assert result.exit_code == 0
    assert "No CORS headers emitted." in result.output


def test_cors_check_reports_predicate_failure():
    app = create_app(
        "testing",
        cors_policy=Policy(origins=lambda origin, callback: callback("registry down")),
    )
    result = app.test_cli_runner().invoke(args=["cors-check", "--origin", "https://a.test"])
    assert result.exit_code != 0
    assert "Origin check failed: registry down" in result.output
