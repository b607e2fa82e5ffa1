"""Application-wide error utilities and handlers."""

from __future__ import annotations

import logging
from typing import Any

from flask import Flask, jsonify

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base class for API-level errors."""

    status_code: int = 400

    def __init__(
        self, message: str, *, status_code: int | None = None, payload: dict[str, Any] | None = None
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.payload = payload or {}


class OriginCheckError(APIError):
    """Raised when the origin predicate of the CORS policy reports an error."""

    status_code = 500

    def __init__(self, error: Any):
        detail = str(error) if error is not None else None
        super().__init__("Origin check failed.", payload={"detail": detail} if detail else None)
        self.error = error

    @classmethod
    def wrap(cls, error: Any) -> "OriginCheckError":
        wrapped = cls(error)
        if isinstance(error, BaseException):
            wrapped.__cause__ = error
        return wrapped


DEFAULT_STATUS_MESSAGES: dict[int, str] = {
    400: "Request could not be processed.",
    404: "Resource not found.",
    500: "Internal server error.",
}


def register_error_handlers(app: Flask) -> None:
    """Attach error handlers to the Flask application."""

    @app.errorhandler(APIError)
    def handle_api_error(error: APIError):
        message = error.message or DEFAULT_STATUS_MESSAGES.get(error.status_code, "Request failed.")
        if error.status_code >= 500:
            logger.error(
                message,
                exc_info=error,
                extra={"event": "api.error", "status": error.status_code},
            )

        response = {"message": message}
        if error.payload:
            response.update(error.payload)
        return jsonify(response), error.status_code
