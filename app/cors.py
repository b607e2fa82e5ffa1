"""Flask integration for the crossorigin CORS engine."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from flask import Flask, Request, Response, g, make_response, request

from crossorigin import ANY_ORIGIN, CorsEngine, Policy, PolicyError, RequestView
from crossorigin.defaults import (
    ALLOW_ORIGIN,
    PREFLIGHT_STATUS,
    SIMPLE_METHODS,
    SIMPLE_REQUEST_HEADERS,
    SIMPLE_RESPONSE_HEADERS,
)

from .errors import OriginCheckError
from .logging import cors_log_extra

CORS_EXTENSION = "cors_engine"
CORS_CONFIG_FLAG = "_cors_configured"


class FlaskRequestView(RequestView):
    """Expose a Flask request to the engine."""

    def __init__(self, flask_request: Request) -> None:
        self.method = flask_request.method
        self._headers = flask_request.headers

    def get_header(self, name: str) -> str | None:
        return self._headers.get(name)


def init_cors(app: Flask, policy: Policy | None = None) -> CorsEngine:
    """Install CORS handling on ``app``.

    Successful preflights are answered directly with an empty ``204`` when the
    policy ends preflights; every other response gets the decided headers
    once the view has run.
    """

    if app.config.get(CORS_CONFIG_FLAG):
        return app.extensions[CORS_EXTENSION]

    engine = CorsEngine(policy if policy is not None else policy_from_config(app.config))
    app.extensions[CORS_EXTENSION] = engine

    @app.before_request
    def evaluate_cors():
        verdict = engine.evaluate(FlaskRequestView(request)).result()
        if verdict.outcome.origin is None:
            return None

        app.logger.debug(
            "CORS decision",
            extra=cors_log_extra(
                origin=verdict.outcome.origin,
                kind=verdict.kind.value if verdict.kind else None,
                outcome=verdict.outcome.status.value,
                headers=verdict.headers,
                ended=verdict.ends_exchange,
                error=str(verdict.error) if verdict.error is not None else None,
            ),
        )
        if verdict.outcome.is_failed:
            raise OriginCheckError.wrap(verdict.error)

        if verdict.ends_exchange:
            response = make_response("", PREFLIGHT_STATUS)
            _apply_headers(response, verdict.headers)
            return response

        g.cors_headers = verdict.headers
        return None

    @app.after_request
    def apply_cors(response: Response):
        headers = g.pop("cors_headers", None)
        if headers:
            _apply_headers(response, headers)
        if not engine.policy.allows_any_origin:
            _add_vary_origin(response)
        return response

    app.config[CORS_CONFIG_FLAG] = True
    return engine


def policy_from_config(config: Mapping[str, Any]) -> Policy:
    """Build a :class:`Policy` from ``CORS_*`` settings."""

    raw_origins = config.get("CORS_ORIGINS", "*")
    if callable(raw_origins):
        origins: Any = raw_origins
    else:
        entries = _normalize_entries(raw_origins or ())
        origins = ANY_ORIGIN if "*" in entries else entries

    return Policy(
        origins=origins,
        methods=_normalize_entries(config.get("CORS_METHODS", SIMPLE_METHODS)),
        request_headers=_normalize_entries(
            config.get("CORS_REQUEST_HEADERS", SIMPLE_REQUEST_HEADERS)
        ),
        response_headers=_normalize_entries(
            config.get("CORS_RESPONSE_HEADERS", SIMPLE_RESPONSE_HEADERS)
        ),
        supports_credentials=_as_bool(config.get("CORS_SUPPORTS_CREDENTIALS", False)),
        max_age=_as_max_age(config.get("CORS_MAX_AGE")),
        end_preflight_requests=_as_bool(config.get("CORS_END_PREFLIGHT_REQUESTS", True)),
    )


def describe_policy(policy: Policy) -> dict[str, Any]:
    """Render a policy as plain JSON-friendly data."""

    if policy.allows_any_origin:
        origins: Any = "*"
    elif policy.origin_predicate is not None:
        origins = "<predicate>"
    else:
        origins = list(policy.origins)

    return {
        "origins": origins,
        "methods": list(policy.methods),
        "request_headers": list(policy.request_headers),
        "response_headers": list(policy.response_headers),
        "exposed_headers": list(policy.exposed_headers),
        "supports_credentials": policy.supports_credentials,
        "max_age": policy.max_age,
        "end_preflight_requests": policy.end_preflight_requests,
    }


def _apply_headers(response: Response, headers: Mapping[str, str]) -> None:
    for name, value in headers.items():
        response.headers[name] = value
    allow_origin = headers.get(ALLOW_ORIGIN)
    if allow_origin and allow_origin != "*":
        _add_vary_origin(response)


def _add_vary_origin(response: Response) -> None:
    response.headers["Vary"] = _merge_vary_header(response.headers.get("Vary"), "Origin")


def _merge_vary_header(existing: str | None, value: str) -> str:
    if not existing:
        return value
    items = [item.strip() for item in existing.split(",") if item.strip()]
    if value.lower() not in {item.lower() for item in items}:
        items.append(value)
    return ", ".join(items)


def _normalize_entries(raw: str | Iterable[str]) -> tuple[str, ...]:
    candidates = raw.split(",") if isinstance(raw, str) else list(raw)
    return tuple(item for item in ((value or "").strip() for value in candidates) if item)


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def _as_max_age(value: Any) -> int | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise PolicyError(f"CORS_MAX_AGE must be an integer, got {value!r}") from exc
