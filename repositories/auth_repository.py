"""
Operator authentication against Supabase Auth.

Sessions are never held in module state. Callers receive an access token from
`sign_in` and trade it for an `OperatorContext` with `resolve_operator`; the
context is then passed explicitly to every inventory operation and handed back
to `release_operator` when the caller is done with it.

Transport failures while talking to the auth provider are reported as
StoreUnavailable, the same as inventory store failures.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx
from supabase import AuthError  # type: ignore[import-not-found]

from domain.errors import StoreUnavailable
from repositories.client import close_operator_client, create_operator_client, get_supabase

logger = logging.getLogger(__name__)


class AuthenticationFailed(Exception):
    """Raised when the auth provider rejects a sign-in."""
    pass


@dataclass(frozen=True, slots=True)
class OperatorSession:
    """Tokens returned by a successful sign-in."""

    access_token: str
    refresh_token: str
    user_id: str
    email: Optional[str]


@dataclass(frozen=True, slots=True)
class OperatorContext:
    """
    Capability handed to the inventory repository.

    `client` is a Supabase client (or anything exposing `.table()`) whose
    requests are authorized as this operator.
    """

    client: Any
    operator_id: str
    email: Optional[str] = None


def _login_error_message(error: AuthError) -> str:
    message = str(getattr(error, "message", None) or error)
    if "Invalid login credentials" in message:
        return "Invalid email or password."
    if "not confirmed" in message:
        return "Account is not confirmed."
    return "Sign-in failed. Please try again."


def _auth_unavailable(failure: str, error: httpx.HTTPError) -> StoreUnavailable:
    logger.error(failure, extra={"auth_error": str(error)})
    return StoreUnavailable(f"{failure}: {error}")


def sign_in(email: str, password: str) -> OperatorSession:
    """
    Sign an operator in with email and password.

    Raises:
        AuthenticationFailed: credentials rejected or account unconfirmed
        StoreUnavailable: the auth provider could not be reached
    """

    try:
        response = get_supabase().auth.sign_in_with_password(
            {"email": email, "password": password}
        )
    except AuthError as e:
        logger.warning(
            "Operator sign-in rejected",
            extra={"email": email, "auth_error": str(e)},
        )
        raise AuthenticationFailed(_login_error_message(e)) from e
    except httpx.HTTPError as e:
        raise _auth_unavailable("Failed to reach auth provider for sign-in", e) from e

    session = getattr(response, "session", None)
    user = getattr(response, "user", None)
    if session is None or user is None:
        raise AuthenticationFailed("Sign-in failed. Please try again.")

    logger.info("Operator signed in", extra={"user_id": str(user.id)})
    return OperatorSession(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        user_id=str(user.id),
        email=getattr(user, "email", None),
    )


def resolve_operator(access_token: str) -> Optional[OperatorContext]:
    """
    Look up the operator owning `access_token`.

    Returns:
    - OperatorContext, or None when the token is invalid or expired

    Raises:
    - StoreUnavailable: the auth provider could not be reached
    """

    try:
        response = get_supabase().auth.get_user(access_token)
    except AuthError as e:
        logger.info("Access token rejected", extra={"auth_error": str(e)})
        return None
    except httpx.HTTPError as e:
        raise _auth_unavailable("Failed to reach auth provider for user lookup", e) from e

    user = getattr(response, "user", None) if response is not None else None
    if user is None:
        return None

    return OperatorContext(
        client=create_operator_client(access_token),
        operator_id=str(user.id),
        email=getattr(user, "email", None),
    )


def release_operator(ctx: OperatorContext) -> None:
    """Close the connections held by a context from resolve_operator()."""

    close_operator_client(ctx.client)


def sign_out(access_token: str) -> None:
    """
    Revoke the session behind `access_token`.

    Raises:
    - StoreUnavailable: the auth provider could not be reached
    """

    try:
        get_supabase().auth.admin.sign_out(access_token, "local")
    except AuthError as e:
        logger.info("Sign-out on an inactive session", extra={"auth_error": str(e)})
    except httpx.HTTPError as e:
        raise _auth_unavailable("Failed to reach auth provider for sign-out", e) from e


__all__ = [
    "AuthenticationFailed",
    "OperatorSession",
    "OperatorContext",
    "sign_in",
    "resolve_operator",
    "release_operator",
    "sign_out",
]
