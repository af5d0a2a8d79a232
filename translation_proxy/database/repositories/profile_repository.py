"""
Repository for user profiles and language preferences.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from translation_proxy.database.models import UserProfile
from translation_proxy.database.repositories.base import BaseRepository


class ProfileRepository(BaseRepository[UserProfile]):
    """Repository for per-user profiles."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, UserProfile)

    async def upsert(self, user_id: str, display_name: Optional[str] = None,
                     preferred_source_language: Optional[str] = None,
                     preferred_target_language: Optional[str] = None) -> UserProfile:
        """Create the profile or update the fields that were given."""
        profile = await self.get_by_id(user_id)

        if profile is None:
            return await self.create(UserProfile(
                id=user_id,
                display_name=display_name,
                preferred_source_language=preferred_source_language,
                preferred_target_language=preferred_target_language
            ))

        if display_name is not None:
            profile.display_name = display_name
        if preferred_source_language is not None:
            profile.preferred_source_language = preferred_source_language
        if preferred_target_language is not None:
            profile.preferred_target_language = preferred_target_language

        return await self.update(profile)

    async def remember_languages(self, user_id: str, source_lang: str, target_lang: str) -> bool:
        """Store the pair as the user's defaults; returns False when nothing changed."""
        profile = await self.get_by_id(user_id)

        if (profile is not None
                and profile.preferred_source_language == source_lang
                and profile.preferred_target_language == target_lang):
            return False

        await self.upsert(
            user_id,
            preferred_source_language=source_lang,
            preferred_target_language=target_lang
        )
        return True
