from __future__ import annotations

from crossorigin import MatchOutcome, Policy, RequestKind, decide

ORIGIN = "https://app.test"


def test_denied_origin_yields_nothing():
    assert decide(RequestKind.ACTUAL, MatchOutcome.denied(ORIGIN), Policy()) == {}


def test_rejected_preflight_yields_nothing():
    assert decide(RequestKind.REJECTED_PREFLIGHT, MatchOutcome.allowed(ORIGIN), Policy()) == {}


def test_actual_request_with_static_origins():
    policy = Policy(origins=[ORIGIN], response_headers=("X-Request-ID", "Content-Type"))

    headers = decide(RequestKind.ACTUAL, MatchOutcome.allowed(ORIGIN), policy)

    assert headers == {
        "Access-Control-Allow-Origin": ORIGIN,
        "Access-Control-Expose-Headers": "x-request-id",
    }


def test_expose_headers_joined_without_spaces():
    policy = Policy(response_headers=("X-One", "X-Two"))
    headers = decide(RequestKind.ACTUAL, MatchOutcome.allowed(ORIGIN), policy)
    assert headers["Access-Control-Expose-Headers"] == "x-one,x-two"


def test_preflight_emits_full_lists_in_order():
    policy = Policy(
        origins=[ORIGIN],
        methods=("GET", "PUT", "DELETE"),
        request_headers=("Content-Type", "X-Api-Key"),
        supports_credentials=True,
        max_age=600,
    )

    headers = decide(RequestKind.PREFLIGHT, MatchOutcome.allowed(ORIGIN), policy)

    assert list(headers.items()) == [
        ("Access-Control-Allow-Origin", ORIGIN),
        ("Access-Control-Allow-Credentials", "true"),
        ("Access-Control-Max-Age", "600"),
        ("Access-Control-Allow-Methods", "GET,PUT,DELETE"),
        ("Access-Control-Allow-Headers", "Content-Type,X-Api-Key"),
    ]


def test_max_age_zero_is_emitted():
    headers = decide(RequestKind.PREFLIGHT, MatchOutcome.allowed(ORIGIN), Policy(max_age=0))
    assert headers["Access-Control-Max-Age"] == "0"


def test_wildcard_without_credentials():
    headers = decide(RequestKind.PREFLIGHT, MatchOutcome.allowed(ORIGIN), Policy())
    assert headers["Access-Control-Allow-Origin"] == "*"
    assert "Access-Control-Allow-Credentials" not in headers
