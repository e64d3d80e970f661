"""
Minimal script that uses the public API to create a Tapsilat order.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from tapsilat_payments import (
    ConfigError,
    OrderError,
    create_client,
    load_client_config,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a Tapsilat order using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing TAPSILAT_* settings",
    )
    parser.add_argument(
        "--base-url",
        help="Override the API base URL (TAPSILAT_BASE_URL)",
    )
    parser.add_argument(
        "--api-token",
        help="Provide the bearer token without relying on environment data",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Print the request body and stop without calling the API",
    )
    return parser.parse_args()


def sample_order() -> dict:
    return {
        "locale": "tr",
        "amount": 100.0,
        "currency": "TRY",
        "buyer": {
            "name": "John",
            "surname": "Doe",
            "email": "john@doe.com",
            "gsm_number": "905350000000",
            "city": "Istanbul",
            "country": "Turkey",
        },
        "billing_address": {
            "city": "Istanbul",
            "country": "TR",
            "address": "Uskudar/Istanbul",
            "contact_name": "John Doe",
        },
        "basket_items": [
            {"id": "BI101", "name": "Test Product", "price": 100.0, "quantity": 1},
        ],
    }


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_client_config(
            env_file=args.env_file,
            base_url=args.base_url,
            api_token=args.api_token,
        )
        client = create_client(config=config)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    order_data = sample_order()
    if args.preview:
        print(json.dumps(client.orders.build_order(**order_data), indent=2))
        return 0

    try:
        order = client.orders.create(order_data)
    except OrderError as exc:
        logging.error("Order creation failed: %s", exc)
        return 1

    logging.info(
        "Created order %s (%s). Checkout URL: %s",
        order.reference_id,
        order.status_text,
        order.checkout_url,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
