"""
Authentication service for JWT bearer tokens issued by the session provider.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from translation_proxy.config.config import SecurityConfig, config
from translation_proxy.utils.exceptions import AuthenticationError
from translation_proxy.utils.logging import TranslationLogger

logger = TranslationLogger(__name__, "auth-service")


class AuthService:
    """Verifies access tokens and resolves the caller's identity."""

    def __init__(self, security_config: Optional[SecurityConfig] = None):
        settings = security_config or config.security
        self.secret_key = settings.jwt_secret_key
        self.algorithm = settings.jwt_algorithm
        self.audience = settings.jwt_audience
        self.token_expiration_hours = settings.jwt_expiration_hours

    async def authenticate(self, token: str) -> Dict[str, Any]:
        """Authenticate user by JWT token."""
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                options={"verify_aud": self.audience is not None}
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected token: {str(e)}", event="token_rejected")
            raise AuthenticationError("Invalid token")

        user_id = payload.get("sub")
        if not user_id:
            raise AuthenticationError("Invalid token: missing user ID")

        return {
            "user_id": user_id,
            "email": payload.get("email"),
            "role": payload.get("role", "authenticated")
        }

    def generate_token(self, user_id: str, email: Optional[str] = None,
                       expires_in: Optional[timedelta] = None) -> str:
        """Issue a token; used by local tooling and tests in place of the session provider."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "iat": now,
            "exp": now + (expires_in if expires_in is not None else timedelta(hours=self.token_expiration_hours)),
            "role": "authenticated"
        }
        if email:
            payload["email"] = email
        if self.audience:
            payload["aud"] = self.audience

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
