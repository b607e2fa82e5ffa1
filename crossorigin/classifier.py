"""Tell actual CORS requests apart from preflight requests."""

from __future__ import annotations

from enum import Enum

from .defaults import ORIGIN, REQUEST_HEADERS, REQUEST_METHOD
from .policy import Policy
from .views import RequestView


class RequestKind(str, Enum):
    ACTUAL = "actual"
    PREFLIGHT = "preflight"
    REJECTED_PREFLIGHT = "rejected_preflight"


def parse_header_list(value: str | None) -> list[str]:
    """Split a comma-separated header list into trimmed, non-empty names."""

    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def classify(request: RequestView, policy: Policy) -> RequestKind:
    """Classify ``request`` and validate preflight requests against ``policy``.

    Any ``OPTIONS`` request is treated as a preflight. One without a usable
    ``Access-Control-Request-Method`` header, or whose requested method or headers
    the policy does not permit, is rejected.
    """

    if request.method.upper() != "OPTIONS":
        return RequestKind.ACTUAL

    requested_method = request.get_header(REQUEST_METHOD)
    if requested_method is None:
        return RequestKind.REJECTED_PREFLIGHT
    if requested_method.strip() not in policy.methods:
        return RequestKind.REJECTED_PREFLIGHT

    origin_key = ORIGIN.lower()
    for name in parse_header_list(request.get_header(REQUEST_HEADERS)):
        if name.lower() == origin_key:
            continue
        if not policy.accepts_request_header(name):
            return RequestKind.REJECTED_PREFLIGHT

    return RequestKind.PREFLIGHT
