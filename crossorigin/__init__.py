"""CORS decision engine: origin matching, preflight handling and header emission."""

from __future__ import annotations

from .classifier import RequestKind, classify
from .decision import decide
from .defaults import SIMPLE_METHODS, SIMPLE_REQUEST_HEADERS, SIMPLE_RESPONSE_HEADERS
from .engine import CorsEngine, Verdict, create
from .errors import CorsError, PolicyError
from .finalizer import apply_decision
from .matcher import MatchOutcome, match_origin
from .policy import ANY_ORIGIN, Policy
from .views import BufferedResponse, HeaderMapRequest, RequestView, ResponseView

__all__ = [
    "ANY_ORIGIN",
    "BufferedResponse",
    "CorsEngine",
    "CorsError",
    "HeaderMapRequest",
    "MatchOutcome",
    "Policy",
    "PolicyError",
    "RequestKind",
    "RequestView",
    "ResponseView",
    "SIMPLE_METHODS",
    "SIMPLE_REQUEST_HEADERS",
    "SIMPLE_RESPONSE_HEADERS",
    "Verdict",
    "apply_decision",
    "classify",
    "create",
    "decide",
    "match_origin",
]
