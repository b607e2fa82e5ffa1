"""Write a decision onto a response and end successful preflights."""

from __future__ import annotations

from collections.abc import Mapping

from .classifier import RequestKind
from .defaults import PREFLIGHT_STATUS
from .matcher import MatchOutcome
from .policy import Policy
from .views import ResponseView


def ends_exchange(kind: RequestKind, outcome: MatchOutcome, policy: Policy) -> bool:
    return (
        kind is RequestKind.PREFLIGHT
        and outcome.is_allowed
        and policy.end_preflight_requests
    )


def apply_decision(
    headers: Mapping[str, str],
    kind: RequestKind,
    outcome: MatchOutcome,
    policy: Policy,
    response: ResponseView,
) -> bool:
    """Set ``headers`` on ``response``; return ``True`` if the exchange was ended."""

    for name, value in headers.items():
        response.set_header(name, value)

    if ends_exchange(kind, outcome, policy):
        response.end(PREFLIGHT_STATUS)
        return True
    return False
