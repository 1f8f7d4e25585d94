"""Single source of the backend auth token and the signed-in user's profile."""

from __future__ import annotations

import logging
from typing import Any

from schooldesk.lib.api_client import ApiClient
from schooldesk.lib.exceptions import AuthenticationError


class AuthContext:
    """Holds the bearer token and profile for the dashboard session.

    Created once at the root and passed to pages, forms and workflows. Only the
    auth routes and the API client's 401 hook change it; everything else reads.
    """

    def __init__(self, token: str | None = None, user_data: dict[str, Any] | None = None) -> None:
        self._token = token or None
        self._user_data = dict(user_data) if user_data else {}

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def user_data(self) -> dict[str, Any]:
        return dict(self._user_data)

    @property
    def is_authenticated(self) -> bool:
        return self._token is not None

    def require_token(self) -> str:
        if self._token is None:
            raise AuthenticationError("Please log in to perform this action")
        return self._token

    def client(self, api: ApiClient) -> ApiClient:
        """Return ``api`` bound to the current token. Raises AuthenticationError if signed out."""
        return api.with_token(self.require_token())

    def sign_in(self, token: str, user_data: dict[str, Any] | None = None) -> None:
        self._token = token
        self._user_data = dict(user_data) if user_data else {}
        logging.info(f"Signed in as {self._user_data.get('email') or self._user_data.get('name') or 'user'}")

    def sign_out(self) -> None:
        if self._token is not None:
            logging.info("Signed out, auth token cleared")
        self._token = None
        self._user_data = {}
