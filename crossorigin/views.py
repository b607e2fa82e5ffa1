"""Abstract request/response seams the engine reads from and writes to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping


class RequestView(ABC):
    """Read-only access to an incoming request's method and headers."""

    method: str

    @abstractmethod
    def get_header(self, name: str) -> str | None:
        """Return the header value for ``name`` (case-insensitive) or ``None``."""


class ResponseView(ABC):
    """Write-only access to an outgoing response."""

    @abstractmethod
    def set_header(self, name: str, value: str) -> None:
        """Set a response header, replacing any previous value."""

    @abstractmethod
    def end(self, status: int) -> None:
        """Finalize the exchange with ``status`` and no body."""


class HeaderMapRequest(RequestView):
    """Request view over a plain mapping of header names to values."""

    def __init__(self, method: str = "GET", headers: Mapping[str, str] | None = None) -> None:
        self.method = method.upper()
        self._headers = {name.lower(): value for name, value in (headers or {}).items()}

    def get_header(self, name: str) -> str | None:
        return self._headers.get(name.lower())

    def __repr__(self) -> str:
        return f"HeaderMapRequest(method={self.method!r}, headers={self._headers!r})"


class BufferedResponse(ResponseView):
    """Response view that records what was written to it."""

    def __init__(self) -> None:
        self.headers: dict[str, str] = {}
        self.status: int | None = None
        self.ended = False

    def set_header(self, name: str, value: str) -> None:
        self.headers[name] = value

    def end(self, status: int) -> None:
        self.status = status
        self.ended = True

    def get_header(self, name: str) -> str | None:
        key = name.lower()
        for header, value in self.headers.items():
            if header.lower() == key:
                return value
        return None
