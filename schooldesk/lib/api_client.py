"""HTTP client for the school-management REST API.

Every backend endpoint answers with a ``{success, data, message}`` envelope.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

import requests

from schooldesk.lib.exceptions import ApiError

DEFAULT_TIMEOUT = 10
JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


@dataclass
class ApiResponse:
    """Decoded response envelope."""

    status: int
    success: bool
    data: Any = None
    message: str | None = None


class ApiClient:
    """Thin wrapper over ``requests.Session`` returning :class:`ApiResponse` objects.

    Non-2xx answers and transport failures raise :class:`ApiError`.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
        token: str | None = None,
        on_unauthorized: Callable[[], None] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._token = token
        self._on_unauthorized = on_unauthorized

    @property
    def token(self) -> str | None:
        return self._token

    def with_token(self, token: str) -> ApiClient:
        """Return a client sharing this one's session that sends a bearer token."""
        return ApiClient(
            self.base_url,
            timeout=self.timeout,
            session=self._session,
            token=token,
            on_unauthorized=self._on_unauthorized,
        )

    def _headers(self) -> dict[str, str]:
        headers = dict(JSON_HEADERS)
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        data: Any = None,
    ) -> ApiResponse:
        url = self._url(path)
        logging.debug(f"{method} {url}")
        try:
            response = self._session.request(
                method,
                url,
                params=params,
                json=data,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            logging.warning(f"API request timed out: {method} {url}")
            raise ApiError("The server took too long to respond")
        except requests.exceptions.RequestException as e:
            logging.error(f"API request failed: {method} {url}: {e}")
            raise ApiError("Could not reach the server")

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code == 401 and self._token and self._on_unauthorized:
            logging.warning("API rejected the auth token, signing out")
            self._on_unauthorized()

        if not 200 <= response.status_code < 300:
            message = _message_from(body) or f"Request failed with status {response.status_code}"
            logging.error(f"API returned {response.status_code} for {method} {url}: {message}")
            raise ApiError(message, status=response.status_code, payload=body)

        return _parse_envelope(response.status_code, body)

    def get(self, path: str, params: dict[str, Any] | None = None) -> ApiResponse:
        return self.request("GET", path, params=params)

    def post(self, path: str, data: Any = None) -> ApiResponse:
        return self.request("POST", path, data=data)

    def put(self, path: str, data: Any = None) -> ApiResponse:
        return self.request("PUT", path, data=data)

    def patch(self, path: str, data: Any = None) -> ApiResponse:
        return self.request("PATCH", path, data=data)

    def delete(self, path: str) -> ApiResponse:
        return self.request("DELETE", path)


def _message_from(body: Any) -> str | None:
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None


def _parse_envelope(status: int, body: Any) -> ApiResponse:
    if isinstance(body, dict) and "success" in body:
        return ApiResponse(
            status=status,
            success=bool(body["success"]),
            data=body.get("data"),
            message=body.get("message"),
        )
    # Not an envelope: a 2xx answer with the payload as the body
    return ApiResponse(status=status, success=True, data=body)
