"""Exception types for the Bullhorn client.

Every failure along the authenticate-then-call chain surfaces as one of
these. Nothing is retried; the first error encountered is raised to the
caller.
"""

from __future__ import annotations

from typing import Any


class BullhornError(Exception):
    """Base exception for all Bullhorn client errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class TransportError(BullhornError):
    """Network-level failure on an HTTP call."""


class AuthError(BullhornError):
    """Missing or malformed data at an authentication hop."""


class AuthTransportError(AuthError, TransportError):
    """Network failure while authenticating.

    Catchable both as :class:`AuthError` and as :class:`TransportError`.
    """


class LoginError(AuthError):
    """The platform login call answered, but not with a usable session."""


class DomainError(BullhornError):
    """A REST call failed after a valid session was obtained."""
