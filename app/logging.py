"""Logging setup, JSON formatting and request correlation for the CORS service."""

from __future__ import annotations

import json
import logging
import time
import uuid
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from flask import Flask, g, has_request_context, request
from werkzeug.exceptions import HTTPException

REQUEST_ID_HEADER = "X-Request-ID"

LOGGING_CONFIG_FLAG = "_logging_configured"
REQUEST_LOGGING_CONFIG_FLAG = "_request_logging_configured"

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class JSONLogFormatter(logging.Formatter):
    """Render each record as a single-line JSON object, extras included."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = record.stack_info

        for key, value in record.__dict__.items():
            if key in _STANDARD_ATTRS or key.startswith("_"):
                continue
            payload[key] = value

        return json.dumps(_json_safe(payload), separators=(",", ":"))


def setup_logging(app: Flask) -> None:
    """Install a single stream handler on the root logger per ``LOG_*`` settings."""

    if app.config.get(LOGGING_CONFIG_FLAG):
        return

    level = _resolve_level(app.config.get("LOG_LEVEL", "INFO"))
    handler = logging.StreamHandler()
    handler.setLevel(level)
    if _to_bool(app.config.get("LOG_JSON_ENABLED", False)):
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(app.config.get("LOG_FORMAT", DEFAULT_FORMAT)))

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    for name in ("werkzeug", "crossorigin"):
        library_logger = logging.getLogger(name)
        library_logger.setLevel(level)
        library_logger.handlers = []
    app.logger.handlers = []
    app.logger.setLevel(level)
    app.logger.propagate = True

    app.config[LOGGING_CONFIG_FLAG] = True


def init_request_logging(app: Flask) -> None:
    """Log one record per request, correlated through ``X-Request-ID``."""

    if app.config.get(REQUEST_LOGGING_CONFIG_FLAG):
        return

    @app.before_request
    def _start_request_logging():
        g.request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        g.request_start = time.perf_counter()
        g._request_logged = False

    @app.after_request
    def _log_request(response):
        request_id = getattr(g, "request_id", None)
        if request_id:
            response.headers.setdefault(REQUEST_ID_HEADER, request_id)
        app.logger.info(
            "Request handled",
            extra=_request_log_extra("request.completed", response.status_code),
        )
        g._request_logged = True
        return response

    @app.teardown_request
    def _log_teardown(exc: BaseException | None):
        if exc is None or getattr(g, "_request_logged", False):
            return
        status = exc.code if isinstance(exc, HTTPException) and exc.code else 500
        app.logger.error(
            "Request failed",
            extra=_request_log_extra("request.failed", status, error=str(exc)),
        )
        g._request_logged = True

    app.config[REQUEST_LOGGING_CONFIG_FLAG] = True


def cors_log_extra(
    *,
    origin: str | None,
    kind: str | None,
    outcome: str,
    headers: Iterable[str],
    ended: bool,
    error: str | None = None,
) -> dict[str, Any]:
    """Structured fields describing one CORS decision."""

    payload: dict[str, Any] = {
        "event": "cors.decision",
        "origin": origin,
        "kind": kind,
        "outcome": outcome,
        "headers": sorted(headers),
        "ended": ended,
        "request_id": _current_request_id(),
        "error": error,
    }
    return {key: value for key, value in payload.items() if value is not None}


def _request_log_extra(event: str, status: int, *, error: str | None = None) -> dict[str, Any]:
    start = getattr(g, "request_start", None)
    duration_ms = (time.perf_counter() - start) * 1000 if isinstance(start, float) else None
    payload: dict[str, Any] = {
        "event": event,
        "route": request.url_rule.rule if request.url_rule else request.path,
        "method": request.method,
        "status": status,
        "duration_ms": round(duration_ms, 3) if duration_ms is not None else None,
        "request_id": getattr(g, "request_id", None),
        "origin": request.headers.get("Origin"),
        "client_ip": request.remote_addr,
        "error": error,
    }
    return {key: value for key, value in payload.items() if value is not None}


def _current_request_id() -> str | None:
    if not has_request_context():
        return None
    return getattr(g, "request_id", None)


def _json_safe(value: Any) -> Any:
    if isinstance(value, str | int | float | bool) or value is None:
        return value
    if isinstance(value, dict):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, list | tuple | set | frozenset):
        return [_json_safe(item) for item in value]
    return str(value)


def _resolve_level(level_name: Any) -> int:
    if isinstance(level_name, int):
        return level_name
    if not level_name:
        return logging.INFO
    return getattr(logging, str(level_name).upper(), logging.INFO)


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in {"1", "true", "yes", "on"}
