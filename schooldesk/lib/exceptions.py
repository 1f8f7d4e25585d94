"""Error types raised across SchoolDesk."""

from __future__ import annotations

from typing import Any


class SchoolDeskError(Exception):
    """Base class for errors the dashboard reports to the user."""


class ValidationError(SchoolDeskError):
    """Raised when form input fails a client-side check.

    Attributes:
        field: Name of the offending field, or None for form-level errors.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class AuthenticationError(SchoolDeskError):
    """Raised when an action needs an auth token and none is available."""


class ApiError(SchoolDeskError):
    """Raised when the backend answers with a non-2xx status or cannot be reached.

    Attributes:
        status: HTTP status code, or None for transport failures.
        payload: Decoded response body when there was one.
    """

    def __init__(self, message: str, status: int | None = None, payload: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload
