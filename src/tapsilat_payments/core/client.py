"""
HTTP client for the Tapsilat API.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping, Optional, Union

import requests

from .config import ClientConfig, ConfigError
from .errors import ApiError, ErrorKind
from .orders import Orders

__all__ = ["TapsilatClient"]

Body = Union[str, Mapping[str, Any], None]


def _encode_body(body: Body) -> Optional[str]:
    if body is None or isinstance(body, str):
        return body
    return json.dumps(body)


def _handle_response(response: requests.Response) -> Any:
    status = response.status_code
    if 200 <= status < 300:
        if not response.content or not response.text.strip():
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(
                f"Failed to parse JSON from {response.url}: {response.text}",
                kind=ErrorKind.INVALID_RESPONSE,
                status_code=status,
            ) from exc
    if status == 401:
        raise ApiError(
            "Unauthorized: Invalid API token",
            kind=ErrorKind.UNAUTHORIZED,
            status_code=status,
        )
    if status == 404:
        raise ApiError(
            "Resource not found", kind=ErrorKind.NOT_FOUND, status_code=status
        )
    if status == 500:
        raise ApiError("Server error", kind=ErrorKind.SERVER_ERROR, status_code=status)
    raise ApiError(
        f"Request failed with status {status}",
        kind=ErrorKind.OTHER_STATUS,
        status_code=status,
    )


class TapsilatClient:
    """
    Thin wrapper around :class:`requests.Session` bound to one API endpoint.

    Credentials travel with each request rather than on the session, so one
    session may be shared by clients with different tokens.

    Non-2xx answers are raised as :class:`ApiError`; network faults raised by
    ``requests`` propagate untouched so the retry helper can see them.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not config.configured:
            raise ConfigError("Tapsilat not configured")
        self.config = config
        self.session = session or requests.Session()
        self._orders: Optional[Orders] = None

    @property
    def base_url(self) -> str:
        return str(self.config.base_url)

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    @property
    def orders(self) -> Orders:
        if self._orders is None:
            self._orders = Orders(self)
        return self._orders

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        body: Body = None,
    ) -> Any:
        url = self.url_for(path)
        logging.info("%s %s", method, url)
        response = self.session.request(
            method,
            url,
            params=params,
            data=_encode_body(body),
            headers=self.headers,
            timeout=self.config.timeout_seconds,
        )
        return _handle_response(response)

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self._request("GET", path, params=params)

    def post(self, path: str, body: Body = None) -> Any:
        return self._request("POST", path, body=body)

    def put(self, path: str, body: Body = None) -> Any:
        return self._request("PUT", path, body=body)

    def delete(self, path: str) -> Any:
        return self._request("DELETE", path)
