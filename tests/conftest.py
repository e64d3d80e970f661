"""
Shared fixtures for the tapsilat_payments test-suite.
"""

import json
from typing import Any, Dict, List
from unittest.mock import MagicMock

import pytest
import requests

from tapsilat_payments import ClientConfig, Orders, TapsilatClient

BASE_URL = "https://api.tapsilat.test/api/v1"
API_TOKEN = "test-token"


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(base_url=BASE_URL, api_token=API_TOKEN)


@pytest.fixture
def make_response():
    """Factory building real ``requests.Response`` objects with a canned body."""

    def _make(status_code: int = 200, body: Any = None) -> requests.Response:
        response = requests.Response()
        response.status_code = status_code
        if body is None:
            content = b""
        elif isinstance(body, bytes):
            content = body
        elif isinstance(body, str):
            content = body.encode("utf-8")
        else:
            content = json.dumps(body).encode("utf-8")
        response._content = content
        response.encoding = "utf-8"
        response.url = BASE_URL
        return response

    return _make


@pytest.fixture
def session() -> MagicMock:
    fake = MagicMock()
    fake.headers = {}
    return fake


@pytest.fixture
def client(config, session) -> TapsilatClient:
    return TapsilatClient(config, session=session)


@pytest.fixture
def sleeps() -> List[float]:
    return []


@pytest.fixture
def orders(client, sleeps) -> Orders:
    return Orders(client, sleep=sleeps.append)


@pytest.fixture
def order_data() -> Dict[str, Any]:
    return {
        "locale": "tr",
        "amount": 100.0,
        "currency": "TRY",
        "buyer": {
            "id": "BY789",
            "name": "John",
            "surname": "Doe",
            "email": "john@doe.com",
            "gsm_number": "905350000000",
            "identity_number": "74300864791",
            "city": "Istanbul",
            "country": "Turkey",
            "zip_code": "34732",
            "ip": "127.0.0.1",
        },
        "billing_address": {
            "billing_type": "PERSONAL",
            "citizenship": "TR",
            "city": "Istanbul",
            "district": "Uskudar",
            "country": "TR",
            "address": "Uskudar/Istanbul",
            "zip_code": "34732",
            "contact_name": "John Doe",
            "contact_phone": "+905350000000",
        },
        "basket_items": [
            {
                "id": "BI101",
                "price": 100.0,
                "quantity": 1,
                "name": "Test Product",
                "category1": "Electronics",
                "category2": "Phones",
                "item_type": "PHYSICAL",
            }
        ],
    }
