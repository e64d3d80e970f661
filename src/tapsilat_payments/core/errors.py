"""
Exception hierarchy shared by the Tapsilat client helpers.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

__all__ = [
    "ApiError",
    "ErrorKind",
    "OrderAPIError",
    "OrderCreationError",
    "OrderError",
    "OrderNotFoundError",
    "OrderValidationError",
    "RetryExhaustedError",
    "TapsilatError",
    "UnexpectedOrderError",
]


class TapsilatError(Exception):
    """Base class for every error raised by this package."""


class ErrorKind(str, Enum):
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    OTHER_STATUS = "other_status"
    INVALID_RESPONSE = "invalid_response"


class ApiError(TapsilatError):
    """
    Raised by :class:`TapsilatClient` when the API answers with a non-2xx status.

    ``kind`` is assigned once at the HTTP boundary so callers never have to
    inspect the message text.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


class OrderError(TapsilatError):
    """Base class for failures surfaced by the order operations."""


class OrderValidationError(OrderError):
    """The caller supplied order data that cannot be sent."""


class OrderCreationError(OrderError):
    """The API refused to create the order."""


class OrderNotFoundError(OrderError):
    def __init__(self, message: str, *, order_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.order_id = order_id


class OrderAPIError(OrderError):
    """An :class:`ApiError` re-raised with the context of the failing operation."""

    def __init__(self, message: str, *, kind: Optional[ErrorKind] = None) -> None:
        super().__init__(message)
        self.kind = kind


class RetryExhaustedError(OrderError):
    def __init__(self, attempts: int, last_error: BaseException) -> None:
        super().__init__(
            f"Max retry attempts ({attempts}) exceeded. Last error: {last_error}"
        )
        self.attempts = attempts
        self.last_error = last_error


class UnexpectedOrderError(OrderError):
    """Wraps any failure the order operations could not classify."""
