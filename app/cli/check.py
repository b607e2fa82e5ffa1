"""CLI command for evaluating the configured CORS policy against a synthetic request."""

from __future__ import annotations

import click
from flask import current_app
from flask.cli import with_appcontext

from app.cors import CORS_EXTENSION
from crossorigin import BufferedResponse, CorsEngine, HeaderMapRequest, apply_decision
from crossorigin.defaults import ORIGIN, REQUEST_HEADERS, REQUEST_METHOD


@click.command("cors-check")
@click.option("--origin", default=None, help="Value of the Origin request header.")
@click.option("--method", default="GET", show_default=True, help="HTTP method of the request.")
@click.option("--request-method", default=None, help="Access-Control-Request-Method header value.")
@click.option("--request-headers", default=None, help="Access-Control-Request-Headers header value.")
@with_appcontext
def cors_check(
    origin: str | None,
    method: str,
    request_method: str | None,
    request_headers: str | None,
) -> None:
    """Show which CORS headers the service would emit for a request."""

    headers: dict[str, str] = {}
    if origin is not None:
        headers[ORIGIN] = origin
    if request_method is not None:
        headers[REQUEST_METHOD] = request_method
    if request_headers is not None:
        headers[REQUEST_HEADERS] = request_headers

    engine: CorsEngine = current_app.extensions[CORS_EXTENSION]
    verdict = engine.evaluate(HeaderMapRequest(method, headers)).result()
    if verdict.outcome.is_failed:
        raise click.ClickException(f"Origin check failed: {verdict.error}")

    response = BufferedResponse()
    if verdict.kind is not None:
        apply_decision(verdict.headers, verdict.kind, verdict.outcome, engine.policy, response)

    kind = verdict.kind.value if verdict.kind else "not-cors"
    click.echo(f"Request: {kind} (origin {verdict.outcome.status.value})")
    if not response.headers:
        click.echo("No CORS headers emitted.")
    for name, value in response.headers.items():
        click.echo(f"{name}: {value}")
    if response.ended:
        click.echo(f"Exchange ended with status {response.status}.")
    else:
        click.echo("Request passes through to the application.")
