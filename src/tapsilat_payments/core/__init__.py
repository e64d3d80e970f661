"""
Core primitives for validating, sending and reading Tapsilat orders.
"""

from .client import TapsilatClient
from .config import ClientConfig, ConfigError, load_client_config
from .environment import ClientEnvironment, build_environment, load_env_file
from .errors import (
    ApiError,
    ErrorKind,
    OrderAPIError,
    OrderCreationError,
    OrderError,
    OrderNotFoundError,
    OrderValidationError,
    RetryExhaustedError,
    TapsilatError,
    UnexpectedOrderError,
)
from .orders import Orders, build_list_params
from .payloads import build_order, compact
from .responses import OrderListResponse, OrderResponse
from .retry import RETRYABLE_ERRORS, with_retry
from .status import ORDER_STATUS, OrderStatus, status_text
from .validation import VALID_CURRENCIES, validate_order_data

__all__ = [
    "ApiError",
    "ClientConfig",
    "ClientEnvironment",
    "ConfigError",
    "ErrorKind",
    "ORDER_STATUS",
    "OrderAPIError",
    "OrderCreationError",
    "OrderError",
    "OrderListResponse",
    "OrderNotFoundError",
    "OrderResponse",
    "OrderStatus",
    "OrderValidationError",
    "Orders",
    "RETRYABLE_ERRORS",
    "RetryExhaustedError",
    "TapsilatClient",
    "TapsilatError",
    "UnexpectedOrderError",
    "VALID_CURRENCIES",
    "build_environment",
    "build_list_params",
    "build_order",
    "compact",
    "load_client_config",
    "load_env_file",
    "status_text",
    "validate_order_data",
    "with_retry",
]
