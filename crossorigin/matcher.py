"""Resolve whether a request origin is admitted by a policy."""

from __future__ import annotations

import logging
from concurrent.futures import Future
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .policy import Policy

logger = logging.getLogger(__name__)


class MatchStatus(str, Enum):
    ALLOWED = "allowed"
    DENIED = "denied"
    FAILED = "failed"


@dataclass(frozen=True)
class MatchOutcome:
    """Per-request result of checking the ``Origin`` header."""

    status: MatchStatus
    origin: str | None = None
    error: Any = None

    @classmethod
    def allowed(cls, origin: str) -> "MatchOutcome":
        return cls(MatchStatus.ALLOWED, origin=origin)

    @classmethod
    def denied(cls, origin: str | None = None) -> "MatchOutcome":
        return cls(MatchStatus.DENIED, origin=origin)

    @classmethod
    def failed(cls, error: Any, origin: str | None = None) -> "MatchOutcome":
        return cls(MatchStatus.FAILED, origin=origin, error=error)

    @property
    def is_allowed(self) -> bool:
        return self.status is MatchStatus.ALLOWED

    @property
    def is_failed(self) -> bool:
        return self.status is MatchStatus.FAILED


def match_origin(origin: str | None, policy: Policy) -> "Future[MatchOutcome]":
    """Check ``origin`` against ``policy``.

    The returned future is already resolved for unrestricted and static
    policies. For a predicate it resolves whenever the predicate calls back,
    which may happen before or after the predicate returns.
    """

    future: Future[MatchOutcome] = Future()

    if origin is None:
        future.set_result(MatchOutcome.denied())
        return future

    if policy.allows_any_origin:
        future.set_result(MatchOutcome.allowed(origin))
        return future

    predicate = policy.origin_predicate
    if predicate is None:
        if origin in policy.origins:
            future.set_result(MatchOutcome.allowed(origin))
        else:
            future.set_result(MatchOutcome.denied(origin))
        return future

    def callback(error: Any = None, result: Any = None) -> None:
        if future.done():
            logger.warning(
                "Origin predicate called back more than once",
                extra={"event": "cors.predicate_repeat", "origin": origin},
            )
            return
        if error is not None:
            logger.warning(
                "Origin predicate failed",
                extra={"event": "cors.predicate_failed", "origin": origin, "error": str(error)},
            )
            future.set_result(MatchOutcome.failed(error, origin))
        elif result is True:
            future.set_result(MatchOutcome.allowed(origin))
        else:
            future.set_result(MatchOutcome.denied(origin))

    try:
        predicate(origin, callback)
    except Exception as exc:
        callback(exc)

    return future
