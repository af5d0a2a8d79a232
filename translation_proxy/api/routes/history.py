"""
Translation history routes: list, search, favorite and delete saved translations.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from translation_proxy.api.dependencies import (
    PaginationParams, get_current_user, get_pagination_params, get_translation_repository
)
from translation_proxy.api.models import (
    ErrorResponseModel, TranslationListResponseModel, TranslationRecordModel
)
from translation_proxy.database.repositories import TranslationRepository
from translation_proxy.utils.logging import api_logger

router = APIRouter(prefix="/translations", tags=["history"])

NOT_FOUND_RESPONSE = {404: {"model": ErrorResponseModel, "description": "Translation not found"}}


@router.get(
    "",
    response_model=TranslationListResponseModel,
    summary="List saved translations",
    description="The caller's translations, newest first, optionally filtered by text or favorites."
)
async def list_translations(
    search: Optional[str] = Query(None, max_length=500, description="Case-insensitive text filter"),
    favorites: bool = Query(False, description="Only favorites"),
    pagination: PaginationParams = Depends(get_pagination_params),
    current_user: dict = Depends(get_current_user),
    translation_repo: TranslationRepository = Depends(get_translation_repository)
) -> TranslationListResponseModel:
    user_id = current_user["user_id"]
    search = search.strip() if search else None

    translations = await translation_repo.get_by_user(
        user_id,
        search=search,
        favorites_only=favorites,
        limit=pagination.per_page,
        offset=pagination.offset
    )
    total = await translation_repo.count_by_user(user_id, search=search, favorites_only=favorites)

    return TranslationListResponseModel(
        translations=[TranslationRecordModel.model_validate(t) for t in translations],
        total=total
    )


@router.get(
    "/{translation_id}",
    response_model=TranslationRecordModel,
    responses=NOT_FOUND_RESPONSE,
    summary="Get a saved translation"
)
async def get_translation(
    translation_id: UUID,
    current_user: dict = Depends(get_current_user),
    translation_repo: TranslationRepository = Depends(get_translation_repository)
) -> TranslationRecordModel:
    translation = await translation_repo.get_for_user(translation_id, current_user["user_id"])
    return TranslationRecordModel.model_validate(translation)


@router.post(
    "/{translation_id}/favorite",
    response_model=TranslationRecordModel,
    responses=NOT_FOUND_RESPONSE,
    summary="Toggle favorite",
    description="Add the translation to favorites, or remove it if it already is one."
)
async def toggle_favorite(
    translation_id: UUID,
    current_user: dict = Depends(get_current_user),
    translation_repo: TranslationRepository = Depends(get_translation_repository)
) -> TranslationRecordModel:
    translation = await translation_repo.toggle_favorite(translation_id, current_user["user_id"])
    await translation_repo.session.commit()

    api_logger.info(
        "Added to favorites" if translation.is_favorite else "Removed from favorites",
        event="favorite_toggled",
        metadata={"translation_id": str(translation_id), "user_id": current_user["user_id"]}
    )

    return TranslationRecordModel.model_validate(translation)


@router.delete(
    "/{translation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=NOT_FOUND_RESPONSE,
    summary="Delete a saved translation"
)
async def delete_translation(
    translation_id: UUID,
    current_user: dict = Depends(get_current_user),
    translation_repo: TranslationRepository = Depends(get_translation_repository)
) -> Response:
    await translation_repo.delete_for_user(translation_id, current_user["user_id"])
    await translation_repo.session.commit()

    api_logger.info(
        "Translation deleted",
        event="translation_deleted",
        metadata={"translation_id": str(translation_id), "user_id": current_user["user_id"]}
    )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
