import json

import pytest
import requests

from tapsilat_payments import (
    ErrorKind,
    OrderAPIError,
    OrderCreationError,
    OrderError,
    OrderListResponse,
    OrderNotFoundError,
    OrderResponse,
    OrderValidationError,
    RetryExhaustedError,
    UnexpectedOrderError,
)
from tapsilat_payments.core.orders import build_list_params

from .conftest import BASE_URL


class TestCreate:
    def test_posts_built_payload(self, orders, session, make_response, order_data):
        session.request.return_value = make_response(
            200, {"reference_id": "ref-1", "order_id": "o-1", "status": 1}
        )

        response = orders.create(order_data)

        assert isinstance(response, OrderResponse)
        assert response.reference_id == "ref-1"
        args, kwargs = session.request.call_args
        assert args == ("POST", f"{BASE_URL}/orders")
        sent = json.loads(kwargs["data"])
        assert sent == orders.build_order(**order_data)
        assert sent["payment_options"] == ["credit_card"]

    @pytest.mark.parametrize(
        "invalid, message",
        [
            ({"locale": "tr"}, "Missing required field"),
            ({"amount": -10}, "Amount must be a positive number"),
            ({"currency": "INVALID"}, "Invalid currency"),
            (
                {"buyer": {"name": "John", "surname": "Doe", "email": "invalid-email"}},
                "Invalid email format",
            ),
            ({"basket_items": []}, "Basket items cannot be empty"),
            ({"amount": float("nan")}, "Amount must be a positive number"),
            ({"billing_address": "Istanbul"}, "Billing address must be a mapping"),
        ],
    )
    def test_validation_errors_short_circuit(
        self, orders, session, order_data, invalid, message
    ):
        data = invalid if set(invalid) == {"locale"} else {**order_data, **invalid}

        with pytest.raises(OrderValidationError, match=message):
            orders.create(data)

        session.request.assert_not_called()

    def test_unserialisable_payload(self, orders, session, order_data):
        order_data["metadata"] = [{"key": "when", "value": object()}]

        with pytest.raises(OrderValidationError, match="JSON serialization failed"):
            orders.create(order_data)

        session.request.assert_not_called()

    @pytest.mark.parametrize(
        "body, message",
        [
            ({"status": "error", "message": "Duplicate reference"}, "Duplicate reference"),
            ({"status": "error", "error_message": "Bad buyer"}, "Bad buyer"),
            ({"status": "error"}, "Order creation failed"),
            (None, "Order creation failed"),
        ],
    )
    def test_error_body_with_success_status(
        self, orders, session, make_response, order_data, body, message
    ):
        session.request.return_value = make_response(200, body)

        with pytest.raises(OrderCreationError) as excinfo:
            orders.create(order_data)

        assert str(excinfo.value) == message

    @pytest.mark.parametrize(
        "status, kind, message",
        [
            (
                401,
                ErrorKind.UNAUTHORIZED,
                "Order creation failed - Invalid API credentials: Unauthorized: Invalid API token",
            ),
            (
                404,
                ErrorKind.NOT_FOUND,
                "Order creation failed - Invalid endpoint: Resource not found",
            ),
            (500, ErrorKind.SERVER_ERROR, "Order creation failed - Server error: Server error"),
        ],
    )
    def test_api_errors_are_retagged(
        self, orders, session, make_response, order_data, status, kind, message
    ):
        session.request.return_value = make_response(status, {})

        with pytest.raises(OrderAPIError) as excinfo:
            orders.create(order_data)

        assert excinfo.value.kind is kind
        assert str(excinfo.value) == message
        assert session.request.call_count == 1

    def test_other_status_is_creation_error(
        self, orders, session, make_response, order_data
    ):
        session.request.return_value = make_response(422, {})

        with pytest.raises(OrderCreationError, match="Order creation failed: Request failed with status 422"):
            orders.create(order_data)

    def test_retries_transient_failures(
        self, orders, session, make_response, order_data, sleeps
    ):
        session.request.side_effect = [
            requests.ConnectionError("connection reset"),
            requests.ReadTimeout("read timed out"),
            make_response(200, {"reference_id": "ref-2", "status": 2}),
        ]

        response = orders.create(order_data)

        assert response.is_pending_payment
        assert session.request.call_count == 3
        assert sleeps == [1.0, 2.0]

    def test_gives_up_after_max_attempts(self, orders, session, order_data, sleeps):
        session.request.side_effect = requests.ConnectTimeout("connect timed out")

        with pytest.raises(RetryExhaustedError, match=r"Max retry attempts \(3\) exceeded"):
            orders.create(order_data)

        assert session.request.call_count == 3
        assert sleeps == [1.0, 2.0]

    def test_unexpected_errors_are_wrapped(self, orders, session, order_data):
        session.request.side_effect = RuntimeError("boom")

        with pytest.raises(UnexpectedOrderError) as excinfo:
            orders.create(order_data)

        assert str(excinfo.value) == "Unexpected error during order creation: boom"
        assert isinstance(excinfo.value.__cause__, RuntimeError)


class TestGet:
    @pytest.mark.parametrize("order_id", [None, "", "   "])
    def test_rejects_blank_id(self, orders, session, order_id):
        with pytest.raises(OrderValidationError, match="Order ID cannot be nil or empty"):
            orders.get(order_id)
        session.request.assert_not_called()

    def test_fetches_order(self, orders, session, make_response):
        session.request.return_value = make_response(
            200, {"reference_id": "ref-1", "amount": 100.0, "status": 9}
        )

        response = orders.get("ref-1")

        assert response.is_completed
        assert response.status_text == "Completed"
        assert session.request.call_args[0] == ("GET", f"{BASE_URL}/orders/ref-1")

    @pytest.mark.parametrize(
        "order_id, segment",
        [
            ("1/../list", "1%2F..%2Flist"),
            ("ref 1?x=2#frag", "ref%201%3Fx%3D2%23frag"),
            (42, "42"),
        ],
    )
    def test_order_id_is_a_single_path_segment(
        self, orders, session, make_response, order_id, segment
    ):
        session.request.return_value = make_response(200, {"status": 1})

        orders.get(order_id)

        assert session.request.call_args[0] == ("GET", f"{BASE_URL}/orders/{segment}")

    def test_not_found(self, orders, session, make_response):
        session.request.return_value = make_response(404, {})

        with pytest.raises(OrderNotFoundError) as excinfo:
            orders.get("missing-1")

        assert str(excinfo.value) == "Order with ID 'missing-1' not found"
        assert excinfo.value.order_id == "missing-1"

    def test_unauthorized(self, orders, session, make_response):
        session.request.return_value = make_response(401, {})

        with pytest.raises(OrderAPIError, match="Failed to fetch order - Invalid API credentials"):
            orders.get("ref-1")

    def test_other_api_errors(self, orders, session, make_response):
        session.request.return_value = make_response(500, {})

        with pytest.raises(OrderAPIError, match="Failed to fetch order: Server error"):
            orders.get("ref-1")

    def test_malformed_body_is_an_order_error(self, orders, session, make_response):
        session.request.return_value = make_response(200, [1, 2])

        with pytest.raises(OrderError, match="Invalid response data type: list"):
            orders.get("ref-1")

    def test_unexpected_errors_are_wrapped(self, orders, session):
        session.request.side_effect = KeyError("session gone")

        with pytest.raises(UnexpectedOrderError, match="Unexpected error while fetching order"):
            orders.get("ref-1")


class TestList:
    def test_default_query(self):
        assert build_list_params() == {"page": 1, "per_page": 10}

    def test_filters_are_sent_only_when_set(self):
        assert build_list_params(page=2, start_date="2024-01-01", organization_id="org") == {
            "page": 2,
            "per_page": 10,
            "start_date": "2024-01-01",
            "organization_id": "org",
        }

    def test_lists_orders(self, orders, session, make_response):
        session.request.return_value = make_response(
            200,
            {"rows": [{"status": 3, "amount": 10}], "total": 1, "page": 1, "total_pages": 1},
        )

        response = orders.list(per_page=5, related_reference_id="rel-1")

        assert isinstance(response, OrderListResponse)
        assert response.total_amount == 10.0
        args, kwargs = session.request.call_args
        assert args == ("GET", f"{BASE_URL}/orders/list")
        assert kwargs["params"] == {"page": 1, "per_page": 5, "related_reference_id": "rel-1"}

    def test_unauthorized(self, orders, session, make_response):
        session.request.return_value = make_response(401, {})

        with pytest.raises(OrderAPIError, match="Failed to list orders - Invalid API credentials"):
            orders.list()

    def test_other_api_errors(self, orders, session, make_response):
        session.request.return_value = make_response(503, {})

        with pytest.raises(OrderAPIError, match="Failed to list orders: Request failed with status 503"):
            orders.list()

    def test_retry_exhaustion_is_not_rewrapped(self, orders, session, sleeps):
        session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(RetryExhaustedError):
            orders.list()

        assert session.request.call_count == 3
