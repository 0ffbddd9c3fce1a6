"""
Shared FastAPI dependencies.

Every inventory endpoint requires a bearer token issued by `/auth/login`.
The token is resolved into an OperatorContext that is handed to the
repository functions and released once the request is finished.
"""

from typing import Iterator, Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from domain.errors import StoreUnavailable
from repositories.auth_repository import OperatorContext, release_operator, resolve_operator

_bearer = HTTPBearer(auto_error=False)


def require_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> str:
    """Return the bearer token or reject the request with 401."""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=401,
            detail="Not signed in",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials


def require_operator(access_token: str = Depends(require_access_token)) -> Iterator[OperatorContext]:
    """Resolve the bearer token into an OperatorContext, or 401 when there is no session."""
    try:
        operator = resolve_operator(access_token)
    except StoreUnavailable as e:
        raise HTTPException(status_code=503, detail=f"Auth provider unavailable: {str(e)}")

    if operator is None:
        raise HTTPException(
            status_code=401,
            detail="Session expired or invalid. Please sign in again.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        yield operator
    finally:
        release_operator(operator)
