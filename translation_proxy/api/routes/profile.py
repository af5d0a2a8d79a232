"""
User profile routes holding default language preferences.
"""

from fastapi import APIRouter, Depends

from translation_proxy.api.dependencies import get_current_user, get_profile_repository
from translation_proxy.api.models import ProfileModel, ProfileUpdateModel
from translation_proxy.config.config import config
from translation_proxy.database.models import UserProfile
from translation_proxy.database.repositories import ProfileRepository

router = APIRouter(prefix="/profile", tags=["profile"])


def _to_model(user_id: str, profile: UserProfile = None) -> ProfileModel:
    defaults = config.profile_defaults
    if profile is None:
        return ProfileModel(
            id=user_id,
            preferred_source_language=defaults.source_language,
            preferred_target_language=defaults.target_language
        )

    return ProfileModel(
        id=profile.id,
        display_name=profile.display_name,
        preferred_source_language=profile.preferred_source_language or defaults.source_language,
        preferred_target_language=profile.preferred_target_language or defaults.target_language
    )


@router.get("", response_model=ProfileModel, summary="Get profile")
async def get_profile(
    current_user: dict = Depends(get_current_user),
    profile_repo: ProfileRepository = Depends(get_profile_repository)
) -> ProfileModel:
    """Return the caller's profile, with default languages when none is stored."""
    user_id = current_user["user_id"]
    return _to_model(user_id, await profile_repo.get_by_id(user_id))


@router.put("", response_model=ProfileModel, summary="Update profile")
async def update_profile(
    update: ProfileUpdateModel,
    current_user: dict = Depends(get_current_user),
    profile_repo: ProfileRepository = Depends(get_profile_repository)
) -> ProfileModel:
    user_id = current_user["user_id"]
    profile = await profile_repo.upsert(
        user_id,
        display_name=update.display_name,
        preferred_source_language=update.preferred_source_language,
        preferred_target_language=update.preferred_target_language
    )
    await profile_repo.session.commit()
    return _to_model(user_id, profile)
