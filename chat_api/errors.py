"""Failure taxonomy surfaced by the API layer."""
from __future__ import annotations

from typing import Optional


class ChatApiError(Exception):
    """Base class for every failure raised by the API client."""


class TransportError(ChatApiError):
    """The request never produced a response (DNS, connect, timeout, TLS)."""


class HttpStatusError(ChatApiError):
    """The backend answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str, *, body: Optional[str] = None) -> None:
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.body = body


class AuthenticationError(HttpStatusError):
    """Missing, invalid or expired bearer token."""


class DecodeError(ChatApiError):
    """The response body was not JSON or did not match the expected record."""
