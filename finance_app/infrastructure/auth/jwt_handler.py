"""
JWT token handler for Supabase authentication.
Validates JWT tokens and extracts the caller's user id.
"""

from typing import Optional, Dict, Any
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt as jose_jwt

from finance_app.config import get_settings
from finance_app.domain.models.base import AuthenticationError


class JWTHandler:
    """Handles JWT token validation and user extraction."""

    def __init__(self, jwt_secret: Optional[str] = None):
        self.jwt_secret = jwt_secret or get_settings().supabase_jwt_secret
        self.jwt_algorithm = "HS256"

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a Supabase JWT token.

        Args:
            token: JWT token string, with or without the ``Bearer`` prefix

        Returns:
            Dict containing token payload

        Raises:
            AuthenticationError: If token is invalid, expired or lacks claims
        """
        if token.startswith('Bearer '):
            token = token[7:]

        try:
            payload = jose_jwt.decode(
                token,
                self.jwt_secret,
                algorithms=[self.jwt_algorithm],
                options={"verify_exp": True, "verify_aud": False}
            )
        except JWTError as e:
            raise AuthenticationError(f"Invalid JWT token: {str(e)}") from e

        if 'sub' not in payload:
            raise AuthenticationError("Token missing user ID (sub claim)")

        if 'exp' not in payload:
            raise AuthenticationError("Token missing expiration (exp claim)")

        return payload

    def get_user_id(self, token: str) -> str:
        """Extract user ID from JWT token."""
        payload = self.verify_token(token)
        return payload['sub']

    def generate_test_token(self, user_id: str, email: str = "test@example.com", expires_minutes: int = 60) -> str:
        """
        Generate a signed token for development and tests.

        Args:
            user_id: User ID to include in token
            email: User email
            expires_minutes: Token lifetime; negative values give an expired token
        """
        now = datetime.now(timezone.utc)
        expire = now + timedelta(minutes=expires_minutes)

        payload = {
            "sub": user_id,
            "email": email,
            "role": "authenticated",
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
            "aud": "authenticated",
            "iss": "supabase"
        }

        return jose_jwt.encode(payload, self.jwt_secret, algorithm=self.jwt_algorithm)
