"""Methods and headers that never need explicit CORS negotiation.

Policies extend these by concatenation, e.g.
``SIMPLE_RESPONSE_HEADERS + ("X-Request-ID",)``.
"""

from __future__ import annotations

SIMPLE_METHODS: tuple[str, ...] = ("GET", "HEAD", "POST")

SIMPLE_REQUEST_HEADERS: tuple[str, ...] = (
    "Accept",
    "Accept-Language",
    "Content-Language",
    "Content-Type",
    "Last-Event-ID",
)

SIMPLE_RESPONSE_HEADERS: tuple[str, ...] = (
    "Cache-Control",
    "Content-Language",
    "Content-Type",
    "Expires",
    "Last-Modified",
    "Pragma",
)

ORIGIN = "Origin"
REQUEST_METHOD = "Access-Control-Request-Method"
REQUEST_HEADERS = "Access-Control-Request-Headers"

ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"
EXPOSE_HEADERS = "Access-Control-Expose-Headers"
MAX_AGE = "Access-Control-Max-Age"
ALLOW_METHODS = "Access-Control-Allow-Methods"
ALLOW_HEADERS = "Access-Control-Allow-Headers"

PREFLIGHT_STATUS = 204
