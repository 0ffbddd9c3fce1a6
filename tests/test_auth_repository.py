"""
Tests for `repositories/auth_repository.py` with a stubbed Supabase auth client.
"""

from __future__ import annotations

from types import SimpleNamespace

import httpx
import pytest
from supabase import AuthError

from domain.errors import StoreUnavailable
import repositories.auth_repository as auth_repository
from repositories.auth_repository import (
    AuthenticationFailed,
    OperatorContext,
    release_operator,
    resolve_operator,
    sign_in,
    sign_out,
)


class StubAuthError(AuthError):
    def __init__(self, message: str) -> None:
        Exception.__init__(self, message)
        self.message = message


class StubAuth:
    def __init__(self) -> None:
        self.sign_in_error = None
        self.outage = None
        self.user = SimpleNamespace(id="user-1", email="ops@example.com")
        self.signed_out = []
        self.admin = SimpleNamespace(sign_out=self._admin_sign_out)

    def sign_in_with_password(self, credentials):
        if self.outage is not None:
            raise self.outage
        if self.sign_in_error is not None:
            raise self.sign_in_error
        return SimpleNamespace(
            user=self.user,
            session=SimpleNamespace(access_token="access-1", refresh_token="refresh-1"),
        )

    def get_user(self, jwt):
        if self.outage is not None:
            raise self.outage
        if jwt != "access-1":
            raise StubAuthError("invalid JWT")
        return SimpleNamespace(user=self.user)

    def _admin_sign_out(self, jwt, scope="global"):
        if self.outage is not None:
            raise self.outage
        if jwt != "access-1":
            raise StubAuthError("session not found")
        self.signed_out.append((jwt, scope))


@pytest.fixture
def stub_auth(monkeypatch) -> StubAuth:
    auth = StubAuth()
    monkeypatch.setattr(auth_repository, "get_supabase", lambda: SimpleNamespace(auth=auth))
    monkeypatch.setattr(
        auth_repository, "create_operator_client", lambda token: SimpleNamespace(token=token)
    )
    return auth


def test_sign_in_returns_session(stub_auth) -> None:
    session = sign_in("ops@example.com", "secret")

    assert session.access_token == "access-1"
    assert session.refresh_token == "refresh-1"
    assert session.user_id == "user-1"
    assert session.email == "ops@example.com"


@pytest.mark.parametrize(
    "provider_message, expected",
    [
        ("Invalid login credentials", "Invalid email or password."),
        ("Email not confirmed", "Account is not confirmed."),
        ("Service unavailable", "Sign-in failed. Please try again."),
    ],
)
def test_sign_in_maps_provider_errors(stub_auth, provider_message, expected) -> None:
    stub_auth.sign_in_error = StubAuthError(provider_message)

    with pytest.raises(AuthenticationFailed) as excinfo:
        sign_in("ops@example.com", "wrong")

    assert str(excinfo.value) == expected


def test_resolve_operator_builds_context_for_valid_token(stub_auth) -> None:
    ctx = resolve_operator("access-1")

    assert ctx is not None
    assert ctx.operator_id == "user-1"
    assert ctx.email == "ops@example.com"
    assert ctx.client.token == "access-1"


def test_resolve_operator_returns_none_for_invalid_token(stub_auth) -> None:
    assert resolve_operator("expired") is None


def test_sign_out_revokes_session_and_tolerates_inactive_tokens(stub_auth) -> None:
    sign_out("access-1")
    sign_out("expired")

    assert stub_auth.signed_out == [("access-1", "local")]


@pytest.mark.parametrize(
    "call",
    [
        lambda: sign_in("ops@example.com", "secret"),
        lambda: resolve_operator("access-1"),
        lambda: sign_out("access-1"),
    ],
)
def test_auth_provider_transport_errors_are_store_unavailable(stub_auth, call) -> None:
    stub_auth.outage = httpx.ConnectError("connection refused")

    with pytest.raises(StoreUnavailable):
        call()


def test_release_operator_closes_postgrest_session() -> None:
    session = SimpleNamespace(closed=False)
    session.close = lambda: setattr(session, "closed", True)
    client = SimpleNamespace(postgrest=SimpleNamespace(session=session))

    release_operator(OperatorContext(client=client, operator_id="user-1"))

    assert session.closed is True
