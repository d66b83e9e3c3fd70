"""
Authentication dependencies for FastAPI.
Resolves the caller's session and the Supabase clients scoped to it.
"""

from dataclasses import dataclass
from typing import Annotated, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from supabase import Client

from finance_app.domain.models.base import AuthenticationError
from finance_app.infrastructure.auth.jwt_handler import JWTHandler
from finance_app.infrastructure.auth.supabase_client import create_user_client, create_service_client


# Security scheme; missing credentials are reported as 401 below
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthSession:
    """Authenticated caller: user id plus the token it presented."""

    user_id: str
    access_token: str


def get_jwt_handler() -> JWTHandler:
    """Dependency to get JWT handler."""
    return JWTHandler()


async def get_current_session(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    jwt_handler: Annotated[JWTHandler, Depends(get_jwt_handler)]
) -> AuthSession:
    """
    FastAPI dependency resolving the authenticated caller.

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user_id = jwt_handler.get_user_id(credentials.credentials)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    return AuthSession(user_id=user_id, access_token=credentials.credentials)


def get_user_client(
    session: Annotated[AuthSession, Depends(get_current_session)]
) -> Client:
    """Supabase client scoped to the caller's token."""
    return create_user_client(session.access_token)


def get_storage_client() -> Client:
    """Supabase client used for document storage."""
    return create_service_client()
