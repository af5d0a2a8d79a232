"""
Repository for saved translation history.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import desc, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from translation_proxy.database.models import Translation
from translation_proxy.database.repositories.base import BaseRepository
from translation_proxy.models.interfaces import TranslationRequest, TranslationResult
from translation_proxy.utils.exceptions import NotFoundError

LIKE_ESCAPE = "\\"


def _escape_like(value: str) -> str:
    """Make LIKE wildcards in user input match literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class TranslationRepository(BaseRepository[Translation]):
    """Repository for a user's translation history."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Translation)

    async def record(self, user_id: str, request: TranslationRequest, result: TranslationResult) -> Translation:
        """Store a completed translation for a user."""
        entity = Translation(
            user_id=user_id,
            source_text=request.source_text,
            translated_text=result.translated_text,
            source_language=request.source_lang,
            target_language=request.target_lang,
            is_favorite=False,
            model_used=result.model_used
        )
        return await self.create(entity)

    def _user_query(self, user_id: str, search: Optional[str], favorites_only: bool) -> Select:
        stmt = select(Translation).where(Translation.user_id == user_id)

        if favorites_only:
            stmt = stmt.where(Translation.is_favorite.is_(True))

        if search:
            pattern = f"%{_escape_like(search)}%"
            stmt = stmt.where(or_(
                Translation.source_text.ilike(pattern, escape=LIKE_ESCAPE),
                Translation.translated_text.ilike(pattern, escape=LIKE_ESCAPE)
            ))

        return stmt

    async def get_by_user(self, user_id: str, search: Optional[str] = None,
                          favorites_only: bool = False, limit: int = 100,
                          offset: int = 0) -> List[Translation]:
        """Get a user's translations, newest first.

        ``search`` matches case-insensitively against the source or the
        translated text.
        """
        stmt = self._user_query(user_id, search, favorites_only)
        stmt = stmt.order_by(desc(Translation.created_at)).limit(limit).offset(offset)
        return await self.fetch_all(stmt, operation="list")

    async def count_by_user(self, user_id: str, search: Optional[str] = None,
                            favorites_only: bool = False) -> int:
        return await self.count(self._user_query(user_id, search, favorites_only))

    async def get_for_user(self, translation_id: UUID, user_id: str) -> Translation:
        """Get one translation owned by the user."""
        translation = await self.get_by_id(translation_id)

        # Foreign records are reported as missing
        if translation is None or translation.user_id != user_id:
            raise NotFoundError("Translation", str(translation_id))

        return translation

    async def toggle_favorite(self, translation_id: UUID, user_id: str) -> Translation:
        """Flip the favorite flag of a user's translation."""
        translation = await self.get_for_user(translation_id, user_id)
        translation.is_favorite = not translation.is_favorite
        return await self.update(translation)

    async def delete_for_user(self, translation_id: UUID, user_id: str) -> bool:
        await self.get_for_user(translation_id, user_id)
        return await self.delete(translation_id)
