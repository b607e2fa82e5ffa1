"""Immutable access-control policy shared by every request."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Union

from .defaults import SIMPLE_METHODS, SIMPLE_REQUEST_HEADERS, SIMPLE_RESPONSE_HEADERS
from .errors import PolicyError


class _AnyOrigin:
    """Sentinel marking a policy that admits every origin."""

    _instance: "_AnyOrigin | None" = None

    def __new__(cls) -> "_AnyOrigin":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ANY_ORIGIN"


ANY_ORIGIN = _AnyOrigin()

OriginCallback = Callable[..., None]
OriginPredicate = Callable[[str, OriginCallback], Any]
Origins = Union[_AnyOrigin, tuple[str, ...], OriginPredicate]


def _normalize_names(value: Iterable[str], *, option: str) -> tuple[str, ...]:
    if isinstance(value, (str, bytes)):
        raise PolicyError(f"{option} must be a sequence of names, not a single string")
    try:
        items = tuple(value)
    except TypeError as exc:
        raise PolicyError(f"{option} must be iterable, got {type(value).__name__}") from exc
    for item in items:
        if not isinstance(item, str) or not item.strip():
            raise PolicyError(f"{option} entries must be non-empty strings: {item!r}")
    return items


def _normalize_origins(value: Any) -> Origins:
    if value is None or value is ANY_ORIGIN:
        return ANY_ORIGIN
    if callable(value):
        return value
    return _normalize_names(value, option="origins")


@dataclass(frozen=True)
class Policy:
    """Access-control rules captured once and reused across requests.

    ``origins`` is ``ANY_ORIGIN`` (or ``None``), an ordered collection of exact,
    case-sensitive origin strings, or a predicate ``predicate(origin, callback)``
    that reports its answer through ``callback(error, result)``.
    """

    origins: Origins = ANY_ORIGIN
    methods: tuple[str, ...] = SIMPLE_METHODS
    request_headers: tuple[str, ...] = SIMPLE_REQUEST_HEADERS
    response_headers: tuple[str, ...] = SIMPLE_RESPONSE_HEADERS
    supports_credentials: bool = False
    max_age: int | None = None
    end_preflight_requests: bool = True

    _request_header_keys: frozenset[str] = field(init=False, repr=False, compare=False)
    _exposed_headers: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "origins", _normalize_origins(self.origins))
        object.__setattr__(self, "methods", _normalize_names(self.methods, option="methods"))
        object.__setattr__(
            self,
            "request_headers",
            _normalize_names(self.request_headers, option="request_headers"),
        )
        object.__setattr__(
            self,
            "response_headers",
            _normalize_names(self.response_headers, option="response_headers"),
        )

        if not isinstance(self.supports_credentials, bool):
            raise PolicyError("supports_credentials must be a boolean")
        if not isinstance(self.end_preflight_requests, bool):
            raise PolicyError("end_preflight_requests must be a boolean")
        if self.max_age is not None:
            if isinstance(self.max_age, bool) or not isinstance(self.max_age, int):
                raise PolicyError("max_age must be an integer number of seconds")
            if self.max_age < 0:
                raise PolicyError("max_age must not be negative")

        object.__setattr__(
            self,
            "_request_header_keys",
            frozenset(name.lower() for name in self.request_headers),
        )
        simple = {name.lower() for name in SIMPLE_RESPONSE_HEADERS}
        exposed: list[str] = []
        for name in self.response_headers:
            key = name.lower()
            if key not in simple and key not in exposed:
                exposed.append(key)
        object.__setattr__(self, "_exposed_headers", tuple(exposed))

    @property
    def allows_any_origin(self) -> bool:
        return self.origins is ANY_ORIGIN

    @property
    def origin_predicate(self) -> OriginPredicate | None:
        if callable(self.origins):
            return self.origins
        return None

    @property
    def exposed_headers(self) -> tuple[str, ...]:
        """Lower-cased response headers exposed beyond the simple set."""

        return self._exposed_headers

    def accepts_request_header(self, name: str) -> bool:
        return name.lower() in self._request_header_keys
