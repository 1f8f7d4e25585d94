"""Tests for AuthContext."""

from unittest.mock import MagicMock

import pytest

from schooldesk.lib.auth_context import AuthContext
from schooldesk.lib.exceptions import AuthenticationError


def test_require_token_when_signed_out():
    with pytest.raises(AuthenticationError):
        AuthContext().require_token()


def test_empty_token_counts_as_signed_out():
    assert AuthContext(token="").is_authenticated is False


def test_client_binds_token():
    api = MagicMock()
    auth = AuthContext(token="abc")

    auth.client(api)

    api.with_token.assert_called_once_with("abc")


def test_client_when_signed_out_makes_no_client():
    api = MagicMock()
    with pytest.raises(AuthenticationError):
        AuthContext().client(api)
    api.with_token.assert_not_called()


def test_sign_in_and_out():
    auth = AuthContext()
    auth.sign_in("abc", {"email": "a@b.c"})
    assert auth.token == "abc"
    assert auth.user_data == {"email": "a@b.c"}

    auth.sign_out()
    assert auth.is_authenticated is False
    assert auth.user_data == {}


def test_user_data_is_a_copy():
    auth = AuthContext("abc", {"email": "a@b.c"})
    auth.user_data["email"] = "changed"
    assert auth.user_data == {"email": "a@b.c"}
