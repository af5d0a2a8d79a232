"""
FastAPI dependencies for the translation proxy API.
"""

from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from translation_proxy.database.connection import get_db_session
from translation_proxy.database.repositories import ProfileRepository, TranslationRepository
from translation_proxy.services.auth_service import AuthService
from translation_proxy.services.model_registry import ModelRegistry, get_model_registry
from translation_proxy.services.model_status import ModelStatusReporter
from translation_proxy.services.translation_service import TranslationService
from translation_proxy.utils.exceptions import AuthenticationError
from translation_proxy.utils.logging import api_logger

# Security scheme; missing credentials are reported by get_current_user
security = HTTPBearer(auto_error=False)


async def get_translation_repository(session=Depends(get_db_session)) -> TranslationRepository:
    """Get translation repository dependency."""
    return TranslationRepository(session)


async def get_profile_repository(session=Depends(get_db_session)) -> ProfileRepository:
    """Get profile repository dependency."""
    return ProfileRepository(session)


async def get_auth_service() -> AuthService:
    """Get authentication service dependency."""
    return AuthService()


async def get_registry() -> ModelRegistry:
    return get_model_registry()


async def get_translation_service() -> TranslationService:
    return TranslationService()


async def get_model_status_reporter() -> ModelStatusReporter:
    return ModelStatusReporter()


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Get current authenticated user."""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return await auth_service.authenticate(credentials.credentials)
    except AuthenticationError as e:
        api_logger.warning(f"Authentication failed: {e.message}", event="authentication_failed")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[dict]:
    """Get current user if authenticated, None otherwise."""
    if not credentials:
        return None

    try:
        return await auth_service.authenticate(credentials.credentials)
    except AuthenticationError as e:
        # Anonymous translation is allowed; the bad token only loses history
        api_logger.info(f"Ignoring invalid credentials: {e.message}", event="optional_auth_rejected")
        return None


class PaginationParams:
    """Pagination parameters."""

    def __init__(
        self,
        page: int = 1,
        per_page: int = 50
    ):
        if page < 1:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Page number must be >= 1"
            )

        if per_page < 1 or per_page > 100:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Items per page must be between 1 and 100"
            )

        self.page = page
        self.per_page = per_page
        self.offset = (page - 1) * per_page


def get_pagination_params(
    page: int = 1,
    per_page: int = 50
) -> PaginationParams:
    """Get pagination parameters."""
    return PaginationParams(page=page, per_page=per_page)
