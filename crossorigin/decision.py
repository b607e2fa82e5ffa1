"""Build the set of CORS response headers for a classified request."""

from __future__ import annotations

from .classifier import RequestKind
from .defaults import (
    ALLOW_CREDENTIALS,
    ALLOW_HEADERS,
    ALLOW_METHODS,
    ALLOW_ORIGIN,
    EXPOSE_HEADERS,
    MAX_AGE,
)
from .matcher import MatchOutcome
from .policy import Policy


def decide(kind: RequestKind, outcome: MatchOutcome, policy: Policy) -> dict[str, str]:
    """Return the headers to emit, in emission order.

    Nothing is emitted unless the origin matched and the request is not a
    rejected preflight.
    """

    if not outcome.is_allowed or kind is RequestKind.REJECTED_PREFLIGHT:
        return {}

    headers: dict[str, str] = {}
    if policy.allows_any_origin and not policy.supports_credentials:
        headers[ALLOW_ORIGIN] = "*"
    else:
        headers[ALLOW_ORIGIN] = outcome.origin or ""
    if policy.supports_credentials:
        headers[ALLOW_CREDENTIALS] = "true"

    if kind is RequestKind.ACTUAL:
        if policy.exposed_headers:
            headers[EXPOSE_HEADERS] = ",".join(policy.exposed_headers)
        return headers

    if policy.max_age is not None:
        headers[MAX_AGE] = str(policy.max_age)
    headers[ALLOW_METHODS] = ",".join(policy.methods)
    headers[ALLOW_HEADERS] = ",".join(policy.request_headers)
    return headers
