"""Request listener tying origin matching, classification and header emission together."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass, field, fields
from typing import Any

from .classifier import RequestKind, classify
from .decision import decide
from .defaults import ORIGIN
from .errors import PolicyError
from .finalizer import apply_decision, ends_exchange
from .matcher import MatchOutcome, match_origin
from .policy import Policy
from .views import RequestView, ResponseView

logger = logging.getLogger(__name__)

NextStep = Callable[..., Any]


@dataclass(frozen=True)
class Verdict:
    """Everything decided about one request; discarded once applied."""

    outcome: MatchOutcome
    kind: RequestKind | None = None
    headers: dict[str, str] = field(default_factory=dict)
    ends_exchange: bool = False

    @property
    def error(self) -> Any:
        return self.outcome.error if self.outcome.is_failed else None


class CorsEngine:
    """Apply a :class:`Policy` to incoming requests.

    Calling the engine follows the middleware convention
    ``engine(request, response, next_step)``: headers are written to the
    response, then ``next_step()`` is invoked once, or ``next_step(error)``
    if the origin predicate failed. A successful preflight under a policy
    that ends preflights is answered with ``204`` and ``next_step`` is not
    called.
    """

    def __init__(self, policy: Policy | None = None) -> None:
        self.policy = policy if policy is not None else Policy()

    def evaluate(self, request: RequestView) -> "Future[Verdict]":
        """Return a future resolving to the verdict for ``request``."""

        verdict: Future[Verdict] = Future()
        matched = match_origin(request.get_header(ORIGIN), self.policy)

        def resolve(done: "Future[MatchOutcome]") -> None:
            try:
                verdict.set_result(self._build_verdict(request, done.result()))
            except Exception as exc:
                verdict.set_exception(exc)

        matched.add_done_callback(resolve)
        return verdict

    async def evaluate_async(self, request: RequestView) -> Verdict:
        return await asyncio.wrap_future(self.evaluate(request))

    def __call__(
        self,
        request: RequestView,
        response: ResponseView,
        next_step: NextStep | None = None,
    ) -> None:
        pending = self.evaluate(request)
        continued = False

        def proceed(*args: Any) -> None:
            nonlocal continued
            continued = True
            if next_step is not None:
                next_step(*args)

        def finish(done: "Future[Verdict]") -> None:
            verdict = done.result()
            if verdict.outcome.is_failed:
                proceed(verdict.error)
                return
            if verdict.kind is not None:
                ended = apply_decision(
                    verdict.headers, verdict.kind, verdict.outcome, self.policy, response
                )
                if ended:
                    return
            proceed()

        def finish_deferred(done: "Future[Verdict]") -> None:
            # Done-callbacks swallow exceptions, so report them here instead.
            try:
                finish(done)
            except Exception as exc:
                logger.exception(
                    "CORS processing failed after deferred origin check",
                    extra={"event": "cors.continuation_failed"},
                )
                if continued:
                    return
                try:
                    proceed(exc)
                except Exception:
                    logger.exception(
                        "CORS continuation failed while reporting an error",
                        extra={"event": "cors.continuation_failed"},
                    )

        # Resolved futures finish inline so continuation errors reach the caller.
        if pending.done():
            finish(pending)
        else:
            pending.add_done_callback(finish_deferred)

    def _build_verdict(self, request: RequestView, outcome: MatchOutcome) -> Verdict:
        if outcome.origin is None or outcome.is_failed:
            return Verdict(outcome=outcome)

        kind = classify(request, self.policy)
        headers = decide(kind, outcome, self.policy)
        verdict = Verdict(
            outcome=outcome,
            kind=kind,
            headers=headers,
            ends_exchange=ends_exchange(kind, outcome, self.policy),
        )
        logger.debug(
            "CORS decision",
            extra={
                "event": "cors.decision",
                "origin": outcome.origin,
                "kind": kind.value,
                "outcome": outcome.status.value,
                "headers": sorted(headers),
            },
        )
        return verdict


_POLICY_OPTIONS = frozenset(item.name for item in fields(Policy) if item.init)


def create(**options: Any) -> CorsEngine:
    """Build an engine from keyword options, e.g. ``create(origins=["https://a.test"])``."""

    unknown = set(options) - _POLICY_OPTIONS
    if unknown:
        raise PolicyError(f"Unknown CORS option(s): {', '.join(sorted(unknown))}")
    return CorsEngine(Policy(**options))
