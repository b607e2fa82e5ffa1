from __future__ import annotations

import pytest

from crossorigin import HeaderMapRequest, Policy, RequestKind, classify
from crossorigin.classifier import parse_header_list


def _request(method, **headers):
    return HeaderMapRequest(method, {name.replace("_", "-"): value for name, value in headers.items()})


@pytest.mark.parametrize("method", ["GET", "POST", "PUT", "DELETE", "HEAD"])
def test_non_options_requests_are_actual(method):
    request = _request(method, Access_Control_Request_Method="GET")
    assert classify(request, Policy()) is RequestKind.ACTUAL


def test_options_with_request_method_is_preflight():
    assert classify(_request("OPTIONS", Access_Control_Request_Method="POST"), Policy()) is (
        RequestKind.PREFLIGHT
    )


def test_options_without_request_method_is_rejected():
    assert classify(_request("OPTIONS"), Policy()) is RequestKind.REJECTED_PREFLIGHT


def test_method_match_is_case_sensitive():
    request = _request("OPTIONS", Access_Control_Request_Method="get")
    assert classify(request, Policy()) is RequestKind.REJECTED_PREFLIGHT


def test_configured_method_is_accepted():
    policy = Policy(methods=("GET", "PUT"))
    request = _request("OPTIONS", Access_Control_Request_Method="PUT")
    assert classify(request, policy) is RequestKind.PREFLIGHT


def test_every_requested_header_must_be_allowed():
    policy = Policy(request_headers=("Content-Type", "X-Api-Key"))

    allowed = _request(
        "OPTIONS",
        Access_Control_Request_Method="GET",
        Access_Control_Request_Headers="x-api-key, CONTENT-TYPE",
    )
    blocked = _request(
        "OPTIONS",
        Access_Control_Request_Method="GET",
        Access_Control_Request_Headers="Content-Type, Authorization",
    )

    assert classify(allowed, policy) is RequestKind.PREFLIGHT
    assert classify(blocked, policy) is RequestKind.REJECTED_PREFLIGHT


@pytest.mark.parametrize("requested", ["Origin", "origin", "Accept, ORIGIN"])
def test_origin_never_blocks_preflight(requested):
    request = _request(
        "OPTIONS", Access_Control_Request_Method="GET", Access_Control_Request_Headers=requested
    )
    assert classify(request, Policy()) is RequestKind.PREFLIGHT


def test_empty_request_headers_value_is_ignored():
    request = _request(
        "OPTIONS", Access_Control_Request_Method="GET", Access_Control_Request_Headers=" , "
    )
    assert classify(request, Policy()) is RequestKind.PREFLIGHT


def test_parse_header_list():
    assert parse_header_list(None) == []
    assert parse_header_list("") == []
    assert parse_header_list(" Accept ,,X-One,") == ["Accept", "X-One"]
