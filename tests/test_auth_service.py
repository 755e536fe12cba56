from __future__ import annotations

import pytest

from coinboard.core.errors import InvalidCredentialsError, UnauthenticatedError
from coinboard.core.tokens import TokenCodec
from coinboard.services.auth_service import AuthService
from coinboard.services.user_service import UserService

SECRET = "auth-service-test-secret-0123456789abcdef"


@pytest.fixture()
def auth(temp_db):
    return AuthService(codec=TokenCodec(SECRET))


def test_login_returns_token_for_user(auth):
    user = UserService().register("a@x.com", "A", "p")

    token = auth.login("a@x.com", "p")

    assert TokenCodec(SECRET).decode(token) == user.id
    assert auth.identify(f"Bearer {token}") == user.id


@pytest.mark.parametrize("email,password", [("a@x.com", "wrong"), ("b@x.com", "p"), ("", "p")])
def test_login_rejects_bad_credentials(auth, email, password):
    UserService().register("a@x.com", "A", "p")
    with pytest.raises(InvalidCredentialsError):
        auth.login(email, password)


def test_login_of_deleted_user_is_rejected(auth):
    users = UserService()
    user = users.register("a@x.com", "A", "p")
    users.soft_delete(user.id)

    with pytest.raises(InvalidCredentialsError):
        auth.login("a@x.com", "p")


def test_identify_without_header_is_anonymous(auth):
    assert auth.identify(None) is None
    assert auth.identify("  ") is None


@pytest.mark.parametrize("header", ["Bearer not.a.jwt", "Basic abc", "Bearer"])
def test_identify_rejects_bad_headers(auth, header):
    with pytest.raises(UnauthenticatedError):
        auth.identify(header)
