"""
Auth API Endpoints.

Sign-in, sign-out and session lookup for inventory operators.
"""

from fastapi import APIRouter, Depends, HTTPException, Response

from api.dependencies import require_access_token, require_operator
from api.models import ErrorResponse, LoginRequest, LoginResponse, OperatorResponse
from domain.errors import StoreUnavailable
from repositories.auth_repository import (
    AuthenticationFailed,
    OperatorContext,
    sign_in,
    sign_out,
)

router = APIRouter()


def _auth_unavailable(e: StoreUnavailable) -> HTTPException:
    return HTTPException(status_code=503, detail=f"Auth provider unavailable: {str(e)}")


@router.post(
    "/auth/login",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    summary="Sign In",
    description="Exchange operator email and password for an access token."
)
def login(request: LoginRequest):
    """
    Sign an operator in.

    Send the returned `access_token` as `Authorization: Bearer <token>` on
    every inventory request.
    """
    try:
        session = sign_in(request.email, request.password)
    except AuthenticationFailed as e:
        raise HTTPException(status_code=401, detail=str(e))
    except StoreUnavailable as e:
        raise _auth_unavailable(e)

    return LoginResponse(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        user_id=session.user_id,
        email=session.email,
    )


@router.post(
    "/auth/logout",
    status_code=204,
    response_class=Response,
    responses={503: {"model": ErrorResponse}},
    summary="Sign Out",
)
def logout(access_token: str = Depends(require_access_token)):
    """Revoke the current session."""
    try:
        sign_out(access_token)
    except StoreUnavailable as e:
        raise _auth_unavailable(e)
    return Response(status_code=204)


@router.get(
    "/auth/session",
    response_model=OperatorResponse,
    summary="Current Session",
    description="Return the operator behind the bearer token, or 401 when not signed in."
)
def current_session(operator: OperatorContext = Depends(require_operator)):
    return OperatorResponse(user_id=operator.operator_id, email=operator.email)
