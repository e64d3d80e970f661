"""
Helpers for constructing the JSON payloads sent to ``POST /orders``.

Every object is assembled from ``(key, value)`` pairs and passed through
:func:`compact`, so optional fields the caller did not set never reach the wire
(not even as ``null``). Explicit falsy values such as ``False`` or ``0`` are kept.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

__all__ = [
    "build_basket_item",
    "build_billing_address",
    "build_buyer",
    "build_order",
    "build_payer",
    "build_pf_sub_merchant",
    "build_shipping_address",
    "compact",
]

_BUYER_FIELDS = (
    "id",
    "name",
    "surname",
    "email",
    "gsm_number",
    "identity_number",
    "registration_date",
    "registration_address",
    "last_login_date",
    "city",
    "country",
    "zip_code",
    "ip",
    "birth_date",
    "title",
)

_SHIPPING_ADDRESS_FIELDS = (
    "address",
    "zip_code",
    "city",
    "country",
    "contact_name",
    "tracking_code",
    "shipping_date",
)

_BILLING_ADDRESS_FIELDS = (
    "citizenship",
    "vat_number",
    "city",
    "district",
    "country",
    "address",
    "zip_code",
    "contact_name",
    "contact_phone",
    "title",
    "tax_office",
)

_PAYER_FIELDS = ("title", "address", "vat", "tax_office", "reference_id")

_PF_SUB_MERCHANT_FIELDS = (
    "id",
    "name",
    "postal_code",
    "city",
    "country",
    "mcc",
    "terminal_no",
    "org_id",
    "country_iso_code",
    "address",
    "submerchant_url",
    "submerchant_nin",
)


def compact(pairs: Iterable[Tuple[str, Any]]) -> Dict[str, Any]:
    """Build a dict from ``pairs``, dropping the ones whose value is ``None``."""
    return {key: value for key, value in pairs if value is not None}


def _default(value: Any, fallback: Any) -> Any:
    return fallback if value is None else value


def _to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    return float(value)


def _to_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, str):
        return int(Decimal(value.strip()))
    return int(value)


def _pick(data: Mapping[str, Any], fields: Sequence[str]) -> List[Tuple[str, Any]]:
    return [(field, data.get(field)) for field in fields]


def build_buyer(buyer: Mapping[str, Any]) -> Dict[str, Any]:
    return compact(_pick(buyer, _BUYER_FIELDS))


def build_shipping_address(shipping: Mapping[str, Any]) -> Dict[str, Any]:
    return compact(_pick(shipping, _SHIPPING_ADDRESS_FIELDS))


def build_billing_address(billing: Mapping[str, Any]) -> Dict[str, Any]:
    """Normalise a billing address; ``billing_type`` defaults to ``PERSONAL``."""
    return compact(
        [("billing_type", _default(billing.get("billing_type"), "PERSONAL"))]
        + _pick(billing, _BILLING_ADDRESS_FIELDS)
    )


def build_payer(payer: Mapping[str, Any]) -> Dict[str, Any]:
    return compact(
        [("type", _default(payer.get("type"), "PERSONAL"))]
        + _pick(payer, _PAYER_FIELDS)
    )


def build_pf_sub_merchant(sub_merchant: Mapping[str, Any]) -> Dict[str, Any]:
    return compact(_pick(sub_merchant, _PF_SUB_MERCHANT_FIELDS))


def build_basket_item(item: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Normalise one basket line.

    ``price`` and the other monetary fields become floats, ``quantity`` an int.
    ``quantity_float`` falls back to the integer quantity when not given.
    """
    quantity = _to_int(item.get("quantity"))
    quantity_float = _to_float(item.get("quantity_float"))
    if quantity_float is None and quantity is not None:
        quantity_float = float(quantity)
    payer = item.get("payer")

    return compact(
        [
            ("id", item.get("id")),
            ("price", _to_float(item.get("price"))),
            ("quantity", quantity),
            ("name", item.get("name")),
            ("category1", item.get("category1")),
            ("category2", item.get("category2")),
            ("item_type", _default(item.get("item_type"), "PHYSICAL")),
            ("sub_merchant_key", item.get("sub_merchant_key")),
            ("sub_merchant_price", _to_float(item.get("sub_merchant_price"))),
            ("coupon", item.get("coupon")),
            ("coupon_discount", _default(_to_float(item.get("coupon_discount")), 0.0)),
            ("quantity_float", quantity_float),
            ("quantity_unit", _default(item.get("quantity_unit"), "unit")),
            ("paid_amount", _default(_to_float(item.get("paid_amount")), 0.0)),
            ("data", item.get("data")),
            ("payer", build_payer(payer) if payer is not None else None),
            (
                "commission_amount",
                _default(_to_float(item.get("commission_amount")), 0.0),
            ),
        ]
    )


def build_order(
    *,
    locale: str,
    amount: Any,
    currency: str,
    buyer: Mapping[str, Any],
    billing_address: Mapping[str, Any],
    basket_items: Sequence[Mapping[str, Any]],
    payment_success_url: Optional[str] = None,
    payment_failure_url: Optional[str] = None,
    **options: Any,
) -> Dict[str, Any]:
    """
    Build the ``POST /orders`` body.

    No validation or network I/O happens here, so the helper can be used to
    preview a payload. Unknown keyword options are ignored.
    """
    shipping_address = options.get("shipping_address")
    pf_sub_merchant = options.get("pf_sub_merchant")

    return compact(
        [
            ("locale", locale),
            ("amount", _to_float(amount)),
            ("paid_amount", _default(_to_float(options.get("paid_amount")), 0.0)),
            ("tax_amount", _default(_to_float(options.get("tax_amount")), 0.0)),
            ("currency", currency),
            ("three_d_force", _default(options.get("three_d_force"), False)),
            ("enabled_installments", _default(options.get("enabled_installments"), [1])),
            ("external_reference_id", options.get("external_reference_id")),
            ("conversation_id", options.get("conversation_id")),
            ("buyer", build_buyer(buyer)),
            (
                "shipping_address",
                build_shipping_address(shipping_address)
                if shipping_address is not None
                else None,
            ),
            ("billing_address", build_billing_address(billing_address)),
            ("basket_items", [build_basket_item(item) for item in basket_items]),
            ("submerchants", _default(options.get("submerchants"), [])),
            ("payment_terms", _default(options.get("payment_terms"), [])),
            ("payment_methods", _default(options.get("payment_methods"), True)),
            ("payment_failure_url", payment_failure_url),
            ("payment_success_url", payment_success_url),
            ("order_vpos_id", options.get("order_vpos_id")),
            ("order_cards", _default(options.get("order_cards"), [])),
            ("partial_payment", _default(options.get("partial_payment"), False)),
            (
                "pf_sub_merchant",
                build_pf_sub_merchant(pf_sub_merchant)
                if pf_sub_merchant is not None
                else None,
            ),
            ("metadata", _default(options.get("metadata"), [])),
            ("payment_options", _default(options.get("payment_options"), ["credit_card"])),
        ]
    )
