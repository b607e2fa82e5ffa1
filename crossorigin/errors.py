"""Exceptions raised by the CORS engine."""

from __future__ import annotations


class CorsError(Exception):
    """Base class for errors raised by this package."""


class PolicyError(CorsError, ValueError):
    """Raised when a policy is created with invalid options."""
