"""
Order operations: create, fetch and list orders through a :class:`TapsilatClient`.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional, TypeVar

from requests.utils import quote

from .errors import (
    ApiError,
    ErrorKind,
    OrderAPIError,
    OrderCreationError,
    OrderError,
    OrderNotFoundError,
    OrderValidationError,
    UnexpectedOrderError,
)
from .payloads import build_order
from .responses import OrderListResponse, OrderResponse
from .retry import with_retry
from .status import status_text
from .validation import validate_order_data

if TYPE_CHECKING:
    from .client import TapsilatClient

__all__ = ["Orders", "build_list_params"]

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10

_CREATE_API_ERRORS = {
    ErrorKind.UNAUTHORIZED: "Invalid API credentials",
    ErrorKind.NOT_FOUND: "Invalid endpoint",
    ErrorKind.SERVER_ERROR: "Server error",
}


def build_list_params(
    *,
    page: Optional[int] = None,
    per_page: Optional[int] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    organization_id: Optional[str] = None,
    related_reference_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Query string for ``GET /orders/list``; unset filters are left out."""
    params = {
        "page": DEFAULT_PAGE if page is None else page,
        "per_page": DEFAULT_PER_PAGE if per_page is None else per_page,
        "start_date": start_date,
        "end_date": end_date,
        "organization_id": organization_id,
        "related_reference_id": related_reference_id,
    }
    return {key: value for key, value in params.items() if value is not None}


def _creation_error_message(body: Any) -> str:
    if isinstance(body, Mapping):
        message = body.get("message") or body.get("error_message")
        if message:
            return str(message)
    return "Order creation failed"


class Orders:
    """
    Order endpoints of the Tapsilat API.

    Every network round-trip goes through :func:`with_retry` using the attempt
    count and delay from the client's configuration.
    """

    def __init__(
        self,
        client: "TapsilatClient",
        *,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        self.client = client
        self._sleep = sleep

    @staticmethod
    def status_text(status_code: Any) -> str:
        return status_text(status_code)

    @staticmethod
    def build_order(**order_fields: Any) -> Dict[str, Any]:
        """Preview the ``POST /orders`` body without validating or sending it."""
        return build_order(**order_fields)

    def _with_retry(self, operation: Callable[[], T]) -> T:
        config = self.client.config
        kwargs: Dict[str, Any] = {
            "max_attempts": config.max_attempts,
            "base_delay": config.retry_delay,
        }
        if self._sleep is not None:
            kwargs["sleep"] = self._sleep
        return with_retry(operation, **kwargs)

    def create(self, order_data: Mapping[str, Any]) -> OrderResponse:
        """
        Validate ``order_data``, build the payload and ``POST /orders``.

        Transient network failures are retried. Order creation is not idempotent
        on the API side, so a timeout after the server accepted the order can
        produce a duplicate on retry.
        """
        try:
            validated = validate_order_data(order_data)
            try:
                body = json.dumps(build_order(**validated), allow_nan=False)
            except (TypeError, ValueError) as exc:
                raise OrderValidationError(
                    f"Invalid order data - JSON serialization failed: {exc}"
                ) from exc

            logging.info("Submitting order to %s", self.client.url_for("/orders"))
            response = self._with_retry(lambda: self.client.post("/orders", body=body))
            if not response or (
                isinstance(response, Mapping) and response.get("status") == "error"
            ):
                raise OrderCreationError(_creation_error_message(response))
            return OrderResponse(response)
        except ApiError as exc:
            context = _CREATE_API_ERRORS.get(exc.kind)
            if context is None:
                raise OrderCreationError(f"Order creation failed: {exc}") from exc
            raise OrderAPIError(
                f"Order creation failed - {context}: {exc}", kind=exc.kind
            ) from exc
        except OrderError:
            raise
        except Exception as exc:
            raise UnexpectedOrderError(
                f"Unexpected error during order creation: {exc}"
            ) from exc

    def get(self, order_id: Any) -> OrderResponse:
        if order_id is None or not str(order_id).strip():
            raise OrderValidationError("Order ID cannot be nil or empty")

        try:
            logging.info("Fetching order %s", order_id)
            path = f"/orders/{quote(str(order_id), safe='')}"
            response = self._with_retry(lambda: self.client.get(path))
            return OrderResponse(response or {})
        except ApiError as exc:
            if exc.kind is ErrorKind.NOT_FOUND:
                raise OrderNotFoundError(
                    f"Order with ID '{order_id}' not found", order_id=str(order_id)
                ) from exc
            if exc.kind is ErrorKind.UNAUTHORIZED:
                raise OrderAPIError(
                    f"Failed to fetch order - Invalid API credentials: {exc}",
                    kind=exc.kind,
                ) from exc
            raise OrderAPIError(f"Failed to fetch order: {exc}", kind=exc.kind) from exc
        except OrderError:
            raise
        except Exception as exc:
            raise UnexpectedOrderError(
                f"Unexpected error while fetching order: {exc}"
            ) from exc

    def list(
        self,
        *,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        organization_id: Optional[str] = None,
        related_reference_id: Optional[str] = None,
    ) -> OrderListResponse:
        params = build_list_params(
            page=page,
            per_page=per_page,
            start_date=start_date,
            end_date=end_date,
            organization_id=organization_id,
            related_reference_id=related_reference_id,
        )

        try:
            logging.info("Listing orders with %s", params)
            response = self._with_retry(
                lambda: self.client.get("/orders/list", params=params)
            )
            return OrderListResponse(response or {})
        except ApiError as exc:
            if exc.kind is ErrorKind.UNAUTHORIZED:
                raise OrderAPIError(
                    f"Failed to list orders - Invalid API credentials: {exc}",
                    kind=exc.kind,
                ) from exc
            raise OrderAPIError(f"Failed to list orders: {exc}", kind=exc.kind) from exc
        except OrderError:
            raise
        except Exception as exc:
            raise UnexpectedOrderError(
                f"Unexpected error while listing orders: {exc}"
            ) from exc
