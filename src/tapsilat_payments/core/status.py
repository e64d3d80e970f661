"""
Order lifecycle status codes reported by the Tapsilat API.
"""

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType
from typing import Any, Mapping

__all__ = [
    "CANCELLED_STATUSES",
    "FAILED_STATUSES",
    "ORDER_STATUS",
    "OrderStatus",
    "PAID_STATUSES",
    "PENDING_PAYMENT_STATUSES",
    "REFUNDED_STATUSES",
    "COMPLETED_STATUSES",
    "status_text",
]


class OrderStatus(IntEnum):
    RECEIVED = 1
    UNPAID = 2
    PAID = 3
    PROCESSING = 4
    SHIPPED = 5
    ON_HOLD = 6
    WAITING_FOR_PAYMENT = 7
    CANCELLED = 8
    COMPLETED = 9
    REFUNDED = 10
    FRAUD = 11
    REJECTED = 12
    FAILURE = 13
    RETRYING = 14
    PARTIALLY_REFUNDED = 15
    SUB_MERCHANT_PAYMENT_APPROVED = 16
    SUB_MERCHANT_PAYMENT_DISAPPROVED = 17
    SUB_MERCHANT_PAYMENT_ERRORED = 18
    UNPAID_INSTALLMENTS = 19
    UNPAID_TERMS = 20
    EXPIRED = 21
    UNPAID_SUB_MERCHANT_PAYMENTS = 22
    PARTIALLY_PAID = 23
    TERMINATED = 24

    @property
    def label(self) -> str:
        return ORDER_STATUS[self.value]


ORDER_STATUS: Mapping[int, str] = MappingProxyType(
    {
        1: "Received",
        2: "Unpaid",
        3: "Paid",
        4: "Processing",
        5: "Shipped",
        6: "On hold",
        7: "Waiting for payment",
        8: "Cancelled",
        9: "Completed",
        10: "Refunded",
        11: "Fraud",
        12: "Rejected",
        13: "Failure",
        14: "Retrying",
        15: "Partially refunded",
        16: "Sub merchant payment approved",
        17: "Sub merchant payment disapproved",
        18: "Sub merchant payment errored",
        19: "Still has unpaid installments",
        20: "Still has unpaid terms",
        21: "Expired",
        22: "Still has unpaid sub merchant payments",
        23: "Partially Paid",
        24: "Terminated",
    }
)

PAID_STATUSES = frozenset({OrderStatus.PAID})
CANCELLED_STATUSES = frozenset({OrderStatus.CANCELLED})
COMPLETED_STATUSES = frozenset({OrderStatus.COMPLETED})
REFUNDED_STATUSES = frozenset({OrderStatus.REFUNDED, OrderStatus.PARTIALLY_REFUNDED})
PENDING_PAYMENT_STATUSES = frozenset({OrderStatus.UNPAID, OrderStatus.WAITING_FOR_PAYMENT})
FAILED_STATUSES = frozenset(
    {OrderStatus.FRAUD, OrderStatus.REJECTED, OrderStatus.FAILURE}
)


def status_text(status_code: Any) -> str:
    """Return the label for ``status_code``, or ``"Unknown"``."""
    try:
        return ORDER_STATUS.get(status_code, "Unknown")
    except TypeError:
        # unhashable input
        return "Unknown"
