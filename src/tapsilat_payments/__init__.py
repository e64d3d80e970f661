"""
Public facade for the Tapsilat order client.

The most useful pieces are re-exported here so integrators can
``from tapsilat_payments import ...`` without navigating the package.
"""

from .api import create_client, create_order
from .core import (
    ApiError,
    ClientConfig,
    ClientEnvironment,
    ConfigError,
    ErrorKind,
    ORDER_STATUS,
    OrderAPIError,
    OrderCreationError,
    OrderError,
    OrderListResponse,
    OrderNotFoundError,
    OrderResponse,
    OrderStatus,
    OrderValidationError,
    Orders,
    RetryExhaustedError,
    TapsilatClient,
    TapsilatError,
    UnexpectedOrderError,
    build_environment,
    build_order,
    load_client_config,
    load_env_file,
    status_text,
    validate_order_data,
    with_retry,
)

__version__ = "0.1.0"

__all__ = (
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
    "RetryExhaustedError",
    "TapsilatClient",
    "TapsilatError",
    "UnexpectedOrderError",
    "build_environment",
    "build_order",
    "create_client",
    "create_order",
    "load_client_config",
    "load_env_file",
    "status_text",
    "validate_order_data",
    "with_retry",
)
