"""
Pre-flight checks run on order data before anything is sent to the API.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any, Dict, Mapping, Sequence

from .errors import OrderValidationError

__all__ = [
    "REQUIRED_BUYER_FIELDS",
    "REQUIRED_ITEM_FIELDS",
    "REQUIRED_ORDER_FIELDS",
    "VALID_CURRENCIES",
    "validate_order_data",
]

REQUIRED_ORDER_FIELDS = (
    "locale",
    "amount",
    "currency",
    "buyer",
    "billing_address",
    "basket_items",
)
REQUIRED_BUYER_FIELDS = ("name", "surname", "email")
REQUIRED_ITEM_FIELDS = ("id", "name", "price", "quantity")
VALID_CURRENCIES = ("TRY", "USD", "EUR", "GBP")

_EMAIL_PATTERN = re.compile(
    r"[\w+\-.]+@[a-z\d\-]+(\.[a-z\d\-]+)*\.[a-z]+",
    re.IGNORECASE | re.ASCII,
)


def _is_positive_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return False
    if isinstance(value, Decimal) and not value.is_finite():
        return False
    if isinstance(value, float) and not math.isfinite(value):
        return False
    return value > 0


def _is_positive_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _validate_amount(amount: Any) -> None:
    if not _is_positive_number(amount):
        raise OrderValidationError("Amount must be a positive number")


def _validate_currency(currency: Any) -> None:
    if str(currency).upper() not in VALID_CURRENCIES:
        raise OrderValidationError(
            f"Invalid currency. Must be one of: {', '.join(VALID_CURRENCIES)}"
        )


def _require_mapping(value: Any, description: str, *, optional: bool = False) -> None:
    if optional and value is None:
        return
    if not isinstance(value, Mapping):
        raise OrderValidationError(f"{description} must be a mapping")


def _validate_buyer(buyer: Any) -> None:
    if not isinstance(buyer, Mapping):
        raise OrderValidationError("Buyer must be a mapping of buyer fields")
    for field in REQUIRED_BUYER_FIELDS:
        if buyer.get(field) is None:
            raise OrderValidationError(f"Missing required buyer field: {field}")

    email = buyer["email"]
    if not isinstance(email, str) or not _EMAIL_PATTERN.fullmatch(email):
        raise OrderValidationError("Invalid email format")


def _validate_basket_items(basket_items: Any) -> None:
    if isinstance(basket_items, (str, bytes)) or not isinstance(basket_items, Sequence):
        raise OrderValidationError("Basket items must be a list of items")
    if not basket_items:
        raise OrderValidationError("Basket items cannot be empty")

    for index, item in enumerate(basket_items, start=1):
        if not isinstance(item, Mapping):
            raise OrderValidationError(f"Basket item {index}: must be a mapping")
        for field in REQUIRED_ITEM_FIELDS:
            if item.get(field) is None:
                raise OrderValidationError(
                    f"Basket item {index}: missing required field '{field}'"
                )
        if not _is_positive_number(item["price"]):
            raise OrderValidationError(
                f"Basket item {index}: price must be a positive number"
            )
        if not _is_positive_integer(item["quantity"]):
            raise OrderValidationError(
                f"Basket item {index}: quantity must be a positive integer"
            )
        _require_mapping(
            item.get("payer"), f"Basket item {index}: payer", optional=True
        )


def validate_order_data(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Check ``data`` and return a shallow copy of it.

    Validation stops at the first problem found and raises
    :class:`OrderValidationError` with a message naming the offending field.
    """
    if not isinstance(data, Mapping):
        raise OrderValidationError(
            f"Order data must be a mapping, got {type(data).__name__}"
        )

    for field in REQUIRED_ORDER_FIELDS:
        if data.get(field) is None:
            raise OrderValidationError(f"Missing required field: {field}")

    _validate_amount(data["amount"])
    _validate_currency(data["currency"])
    _validate_buyer(data["buyer"])
    _require_mapping(data["billing_address"], "Billing address")
    _require_mapping(data.get("shipping_address"), "Shipping address", optional=True)
    _require_mapping(data.get("pf_sub_merchant"), "Sub-merchant", optional=True)
    _validate_basket_items(data["basket_items"])

    return dict(data)
