"""
Public, high-level helpers for talking to the Tapsilat order API.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import requests

from .core.client import TapsilatClient
from .core.config import ClientConfig, load_client_config
from .core.responses import OrderResponse

__all__ = [
    "create_client",
    "create_order",
]


def create_client(
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    base_url: Optional[str] = None,
    api_token: Optional[str] = None,
    timeout_seconds: Optional[float | str] = None,
    max_attempts: Optional[int | str] = None,
    retry_delay: Optional[float | str] = None,
) -> TapsilatClient:
    """
    Construct a :class:`TapsilatClient`.

    Callers either pass a ready-made :class:`ClientConfig` or let the helper
    assemble one from ``TAPSILAT_*`` environment data and keyword arguments.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            base_url,
            api_token,
            timeout_seconds,
            max_attempts,
            retry_delay,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ClientConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_client_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            base_url=base_url,
            api_token=api_token,
            timeout_seconds=timeout_seconds,
            max_attempts=max_attempts,
            retry_delay=retry_delay,
        )
    return TapsilatClient(cfg, session=session)


def create_order(
    order_data: Mapping[str, Any],
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
) -> OrderResponse:
    """
    One-shot helper: build a client and submit ``order_data`` through it.
    """
    client = create_client(config=config, session=session, env_file=env_file)
    return client.orders.create(order_data)
