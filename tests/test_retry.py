import socket

import pytest
import requests

from tapsilat_payments import ApiError, ErrorKind, RetryExhaustedError, with_retry
from tapsilat_payments.core.retry import is_retryable


class FlakyOperation:
    def __init__(self, failures, result="ok"):
        self.failures = list(failures)
        self.result = result
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.failures:
            raise self.failures.pop(0)
        return self.result


def test_succeeds_on_third_attempt_with_increasing_delays():
    sleeps = []
    operation = FlakyOperation(
        [requests.ConnectionError("reset"), requests.ReadTimeout("slow")]
    )

    result = with_retry(operation, max_attempts=3, base_delay=1.0, sleep=sleeps.append)

    assert result == "ok"
    assert operation.calls == 3
    assert sleeps == [1.0, 2.0]


def test_exhausts_after_max_attempts():
    sleeps = []
    operation = FlakyOperation([requests.ConnectTimeout("t%d" % i) for i in range(10)])

    with pytest.raises(RetryExhaustedError) as excinfo:
        with_retry(operation, max_attempts=4, base_delay=0.5, sleep=sleeps.append)

    assert operation.calls == 4
    assert sleeps == [0.5, 1.0, 1.5]
    assert excinfo.value.attempts == 4
    assert isinstance(excinfo.value.last_error, requests.ConnectTimeout)
    assert str(excinfo.value) == "Max retry attempts (4) exceeded. Last error: t3"


def test_non_retryable_error_propagates_immediately():
    sleeps = []
    error = ApiError("Server error", kind=ErrorKind.SERVER_ERROR, status_code=500)
    operation = FlakyOperation([error])

    with pytest.raises(ApiError) as excinfo:
        with_retry(operation, sleep=sleeps.append)

    assert excinfo.value is error
    assert operation.calls == 1
    assert sleeps == []


def test_single_attempt_does_not_sleep():
    sleeps = []
    operation = FlakyOperation([ConnectionRefusedError("refused")])

    with pytest.raises(RetryExhaustedError):
        with_retry(operation, max_attempts=1, sleep=sleeps.append)

    assert sleeps == []


def test_rejects_zero_attempts():
    with pytest.raises(ValueError):
        with_retry(lambda: None, max_attempts=0)


@pytest.mark.parametrize(
    "exc",
    [
        requests.ConnectionError(),
        requests.ConnectTimeout(),
        requests.ReadTimeout(),
        requests.exceptions.ChunkedEncodingError(),
        requests.exceptions.ContentDecodingError(),
        requests.exceptions.SSLError(),
        requests.exceptions.ProxyError(),
        requests.RequestException("connection aborted"),
        ConnectionResetError(),
        ConnectionRefusedError(),
        socket.gaierror(),
        socket.timeout(),
    ],
)
def test_network_faults_are_retryable(exc):
    assert is_retryable(exc)


@pytest.mark.parametrize(
    "exc",
    [
        ApiError("Unauthorized", kind=ErrorKind.UNAUTHORIZED, status_code=401),
        ValueError("bad"),
        KeyError("x"),
        requests.exceptions.InvalidURL("http://"),
        requests.exceptions.MissingSchema("no scheme"),
        requests.exceptions.InvalidHeader("bad header"),
        requests.exceptions.TooManyRedirects(),
        requests.HTTPError("500"),
    ],
)
def test_other_errors_are_not_retryable(exc):
    assert not is_retryable(exc)


def test_generic_transport_error_is_retried():
    sleeps = []
    operation = FlakyOperation(
        [requests.exceptions.ContentDecodingError("bad gzip stream")]
    )

    assert with_retry(operation, sleep=sleeps.append) == "ok"
    assert operation.calls == 2
    assert sleeps == [1.0]


def test_malformed_request_is_not_retried():
    sleeps = []
    error = requests.exceptions.InvalidURL("Invalid URL 'http://': No host supplied")
    operation = FlakyOperation([error])

    with pytest.raises(requests.exceptions.InvalidURL) as excinfo:
        with_retry(operation, sleep=sleeps.append)

    assert excinfo.value is error
    assert operation.calls == 1
    assert sleeps == []
