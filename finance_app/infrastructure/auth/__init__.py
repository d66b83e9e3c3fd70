"""
Authentication infrastructure module.
Handles JWT validation and the per-request Supabase clients.
"""

from .jwt_handler import JWTHandler
from .dependencies import (
    AuthSession,
    get_current_session,
    get_jwt_handler,
    get_user_client,
    get_storage_client
)

__all__ = [
    "JWTHandler",
    "AuthSession",
    "get_current_session",
    "get_jwt_handler",
    "get_user_client",
    "get_storage_client"
]
