"""
Retry helper for transient network failures.
"""

from __future__ import annotations

import logging
import socket
import time
from typing import Callable, Tuple, Type, TypeVar

import requests

from .errors import RetryExhaustedError

__all__ = [
    "DEFAULT_BASE_DELAY",
    "DEFAULT_MAX_ATTEMPTS",
    "NON_RETRYABLE_ERRORS",
    "RETRYABLE_ERRORS",
    "is_retryable",
    "with_retry",
]

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY = 1.0

# ApiError (HTTP status failures) is never retried.
RETRYABLE_ERRORS: Tuple[Type[BaseException], ...] = (
    requests.RequestException,
    ConnectionResetError,
    ConnectionRefusedError,
    socket.gaierror,
    socket.timeout,
)

# Malformed requests fail the same way on every attempt.
NON_RETRYABLE_ERRORS: Tuple[Type[BaseException], ...] = (
    requests.exceptions.InvalidURL,
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.InvalidHeader,
    requests.exceptions.InvalidJSONError,
    requests.exceptions.URLRequired,
    requests.exceptions.TooManyRedirects,
    requests.exceptions.HTTPError,
)


def is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, RETRYABLE_ERRORS) and not isinstance(
        exc, NON_RETRYABLE_ERRORS
    )


def with_retry(
    operation: Callable[[], T],
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    base_delay: float = DEFAULT_BASE_DELAY,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Run ``operation`` until it succeeds or ``max_attempts`` retryable failures occur.

    The whole operation is re-run from scratch after sleeping
    ``base_delay * attempt`` seconds. Non-retryable exceptions propagate
    unchanged on the first occurrence.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    attempt = 0
    while True:
        attempt += 1
        try:
            return operation()
        except RETRYABLE_ERRORS as exc:
            if isinstance(exc, NON_RETRYABLE_ERRORS):
                raise
            if attempt >= max_attempts:
                raise RetryExhaustedError(max_attempts, exc) from exc
            delay = base_delay * attempt
            logging.info(
                "Transient failure on attempt %d/%d (%s); retrying in %.1fs",
                attempt,
                max_attempts,
                exc,
                delay,
            )
            sleep(delay)
