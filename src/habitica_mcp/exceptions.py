"""
Habitica MCP Exceptions.

All errors raised by this package derive from HabiticaError. Transport
failures (httpx.HTTPError) and input validation failures (pydantic
ValidationError) are left to propagate with their native types.
"""

from __future__ import annotations

from typing import Any


class HabiticaError(Exception):
    """Base class for all Habitica MCP errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class HabiticaConfigurationError(HabiticaError):
    """Required configuration is missing or invalid. Fatal at startup."""


class HabiticaAPIError(HabiticaError):
    """
    The Habitica API reported a failure.

    Raised for non-2xx responses and for envelopes carrying success=false.
    The message is the one Habitica supplied whenever it supplied one.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class HabiticaAuthenticationError(HabiticaAPIError):
    """Habitica rejected the credentials (HTTP 401)."""


class HabiticaNotFoundError(HabiticaAPIError):
    """The requested resource does not exist (HTTP 404)."""
