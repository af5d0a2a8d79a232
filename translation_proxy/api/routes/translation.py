"""
Translation API routes.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from translation_proxy.api.dependencies import get_optional_user, get_translation_service
from translation_proxy.api.models import (
    ErrorResponseModel, TranslateRequestModel, TranslateResponseModel
)
from translation_proxy.models.interfaces import TranslationRequest
from translation_proxy.services.translation_service import TranslationService
from translation_proxy.utils.exceptions import TranslationProxyException
from translation_proxy.utils.logging import api_logger

router = APIRouter(tags=["translation"])


@router.post(
    "/translate",
    response_model=TranslateResponseModel,
    responses={
        400: {"model": ErrorResponseModel, "description": "Missing required fields"},
        500: {"model": ErrorResponseModel, "description": "Upstream or internal failure"}
    },
    summary="Translate text",
    description="Translate text with the model registered for the language pair. "
                "Signed-in callers also get the result saved to their history."
)
async def translate(
    request: TranslateRequestModel,
    current_user: Optional[dict] = Depends(get_optional_user),
    translation_service: TranslationService = Depends(get_translation_service)
) -> TranslateResponseModel:
    """Translate text and return the normalized result."""
    user_id = current_user["user_id"] if current_user else None

    try:
        outcome = await translation_service.translate_and_record(
            TranslationRequest(
                source_text=request.source_text,
                source_lang=request.source_lang,
                target_lang=request.target_lang
            ),
            user_id=user_id
        )
    except TranslationProxyException:
        raise
    except Exception as e:
        api_logger.error(f"Translation error: {str(e)}", event="translation_error", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Internal server error"}
        )

    return TranslateResponseModel(
        translated_text=outcome.result.translated_text,
        model_used=outcome.result.model_used
    )
