"""Failures raised by cursor transports and reported by the cursor clients."""

from typing import Any


class CursorFailure(Exception):
    """Base class for every failure surfaced by the pager."""

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message)


class TransportFailure(CursorFailure):
    """The backend could not be reached, answered with an error status or sent a malformed response.

    Attributes:
        body: The nested error payload, normally ``{"message": ...}``. May be empty.
        status_code: The HTTP status code, or None when no response was received.
    """

    def __init__(self, message: str = "", body: dict[str, Any] | None = None, status_code: int | None = None):
        super().__init__(message)
        self.body = body or {}
        self.status_code = status_code


class ApplicationFailure(CursorFailure):
    """The backend processed the request but reported an application error."""


class UnknownFailure(CursorFailure):
    """Wraps anything that does not fit the other failure kinds."""

    def __init__(self, original: Any):
        super().__init__("")
        self.original = original
