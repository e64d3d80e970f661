"""
Read-only views over order payloads returned by the Tapsilat API.
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from .errors import OrderError
from .status import (
    CANCELLED_STATUSES,
    COMPLETED_STATUSES,
    FAILED_STATUSES,
    PAID_STATUSES,
    PENDING_PAYMENT_STATUSES,
    REFUNDED_STATUSES,
    status_text,
)

__all__ = [
    "OrderListResponse",
    "OrderResponse",
]

ResponseData = Union[str, Mapping[str, Any]]


def _decode(payload: Any) -> Mapping[str, Any]:
    if isinstance(payload, str):
        try:
            decoded = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise OrderError(f"Invalid JSON response: {exc}") from exc
        if not isinstance(decoded, dict):
            raise OrderError(
                f"Invalid response data type: {type(decoded).__name__}"
            )
        return MappingProxyType(decoded)
    if isinstance(payload, Mapping):
        return MappingProxyType(copy.deepcopy(dict(payload)))
    raise OrderError(f"Invalid response data type: {type(payload).__name__}")


def _float_or_none(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _int_or_none(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class OrderResponse:
    """
    Wraps a single order returned by the API.

    ``data`` may be given as a JSON string or an already decoded mapping. It is
    decoded (or deep-copied) once here and exposed read-only; accessors that
    return nested containers hand out copies.
    """

    data: Mapping[str, Any]

    # Wraps mutable JSON, so views are unhashable even though they are frozen.
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", _decode(self.data))

    @classmethod
    def from_response(cls, payload: ResponseData) -> "OrderResponse":
        return cls(payload)  # type: ignore[arg-type]

    def _copy(self, key: str) -> Any:
        return copy.deepcopy(self.data.get(key))

    @property
    def locale(self) -> Optional[str]:
        return self.data.get("locale")

    @property
    def reference_id(self) -> Optional[str]:
        return self.data.get("reference_id")

    @property
    def external_reference_id(self) -> Optional[str]:
        return self.data.get("external_reference_id")

    @property
    def conversation_id(self) -> Optional[str]:
        return self.data.get("conversation_id")

    @property
    def amount(self) -> Optional[float]:
        return _float_or_none(self.data.get("amount"))

    @property
    def total(self) -> Optional[float]:
        return _float_or_none(self.data.get("total"))

    @property
    def paid_amount(self) -> Optional[float]:
        return _float_or_none(self.data.get("paid_amount"))

    @property
    def refunded_amount(self) -> Optional[float]:
        return _float_or_none(self.data.get("refunded_amount"))

    @property
    def created_at(self) -> Optional[str]:
        return self.data.get("created_at")

    @property
    def currency(self) -> Optional[str]:
        return self.data.get("currency")

    @property
    def status(self) -> Optional[int]:
        return _int_or_none(self.data.get("status"))

    @property
    def status_text(self) -> str:
        return status_text(self.status)

    @property
    def status_enum(self) -> Optional[str]:
        return self.data.get("status_enum")

    @property
    def buyer(self) -> Optional[Dict[str, Any]]:
        return self._copy("buyer")

    @property
    def shipping_address(self) -> Optional[Dict[str, Any]]:
        return self._copy("shipping_address")

    @property
    def billing_address(self) -> Optional[Dict[str, Any]]:
        return self._copy("billing_address")

    @property
    def basket_items(self) -> List[Dict[str, Any]]:
        return self._copy("basket_items") or []

    @property
    def checkout_design(self) -> Optional[Dict[str, Any]]:
        return self._copy("checkout_design")

    @property
    def payment_terms(self) -> List[Dict[str, Any]]:
        return self._copy("payment_terms") or []

    @property
    def payment_failure_url(self) -> Optional[str]:
        return self.data.get("payment_failure_url")

    @property
    def payment_success_url(self) -> Optional[str]:
        return self.data.get("payment_success_url")

    @property
    def checkout_url(self) -> Optional[str]:
        return self.data.get("checkout_url")

    @property
    def payment_options(self) -> List[str]:
        return self._copy("payment_options") or []

    @property
    def metadata(self) -> List[Dict[str, Any]]:
        return self._copy("metadata") or []

    @property
    def is_paid(self) -> bool:
        return self.status in PAID_STATUSES

    @property
    def is_cancelled(self) -> bool:
        return self.status in CANCELLED_STATUSES

    @property
    def is_completed(self) -> bool:
        return self.status in COMPLETED_STATUSES

    @property
    def is_refunded(self) -> bool:
        return self.status in REFUNDED_STATUSES

    @property
    def is_pending_payment(self) -> bool:
        return self.status in PENDING_PAYMENT_STATUSES

    @property
    def is_failed(self) -> bool:
        return self.status in FAILED_STATUSES

    def _sum_items(self, field: str) -> float:
        total = 0.0
        for item in self.basket_items:
            value = _float_or_none(item.get(field)) if isinstance(item, Mapping) else None
            total += value if value is not None else 0.0
        return total

    @property
    def total_refundable_amount(self) -> float:
        return self._sum_items("refundable_amount")

    @property
    def total_paid_amount_from_items(self) -> float:
        return self._sum_items("paid_amount")

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(dict(self.data))

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


@dataclass(frozen=True)
class OrderListResponse:
    """
    Wraps one page of ``GET /orders/list``.

    Missing pagination fields fall back to ``page=1``, ``per_page=10`` and ``0``
    for ``total``/``total_pages``.
    """

    data: Mapping[str, Any]

    # Wraps mutable JSON, so views are unhashable even though they are frozen.
    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", _decode(self.data))

    @classmethod
    def from_response(cls, payload: ResponseData) -> "OrderListResponse":
        return cls(payload)  # type: ignore[arg-type]

    @property
    def rows(self) -> List[OrderResponse]:
        return [OrderResponse(row) for row in self.data.get("rows") or []]

    def _int_field(self, key: str, default: int) -> int:
        value = _int_or_none(self.data.get(key))
        return default if value is None else value

    @property
    def total(self) -> int:
        return self._int_field("total", 0)

    @property
    def page(self) -> int:
        return self._int_field("page", 1)

    @property
    def per_page(self) -> int:
        return self._int_field("per_page", 10)

    @property
    def total_pages(self) -> int:
        return self._int_field("total_pages", 0)

    @property
    def is_first_page(self) -> bool:
        return self.page == 1

    @property
    def is_last_page(self) -> bool:
        return self.page >= self.total_pages

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1

    @property
    def next_page(self) -> Optional[int]:
        return self.page + 1 if self.has_next_page else None

    @property
    def previous_page(self) -> Optional[int]:
        return self.page - 1 if self.has_previous_page else None

    def orders_with_status(self, status_code: int) -> List[OrderResponse]:
        return [order for order in self.rows if order.status == status_code]

    @property
    def paid_orders(self) -> List[OrderResponse]:
        return [order for order in self.rows if order.is_paid]

    @property
    def pending_orders(self) -> List[OrderResponse]:
        return [order for order in self.rows if order.is_pending_payment]

    @property
    def cancelled_orders(self) -> List[OrderResponse]:
        return [order for order in self.rows if order.is_cancelled]

    @property
    def total_amount(self) -> float:
        return sum((order.amount or 0.0 for order in self.rows), 0.0)

    @property
    def total_paid_amount(self) -> float:
        return sum((order.paid_amount or 0.0 for order in self.rows), 0.0)

    @property
    def is_empty(self) -> bool:
        return not self.data.get("rows")

    @property
    def count(self) -> int:
        return len(self.data.get("rows") or [])

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(dict(self.data))

    def to_json(self) -> str:
        return json.dumps(self.to_dict())
