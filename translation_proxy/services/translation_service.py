"""
Translation proxy: resolves a model for a language pair, calls the inference
endpoint and normalizes the reply.
"""

import time
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from translation_proxy.database.connection import db_manager
from translation_proxy.database.repositories import ProfileRepository, TranslationRepository
from translation_proxy.models.interfaces import (
    InferenceBackend, TranslationRequest, TranslationResult
)
from translation_proxy.services.inference_client import get_inference_client
from translation_proxy.services.model_registry import ModelRegistry, get_model_registry
from translation_proxy.utils.exceptions import UpstreamError, ValidationError
from translation_proxy.utils.logging import proxy_logger as logger

SessionFactory = Callable[[], AbstractAsyncContextManager]


@dataclass
class TranslationOutcome:
    """Result of a translation plus the fate of the advisory history save."""
    result: TranslationResult
    history_saved: bool = False


class TranslationService:
    """Service performing one translation per call."""

    def __init__(self, registry: Optional[ModelRegistry] = None,
                 backend: Optional[InferenceBackend] = None,
                 session_factory: Optional[SessionFactory] = None):
        self.registry = registry if registry is not None else get_model_registry()
        self.backend = backend if backend is not None else get_inference_client()
        self.session_factory = session_factory if session_factory is not None else db_manager.get_session

    def _validate_request(self, request: TranslationRequest):
        missing = [
            name for name, value in (
                ("sourceText", request.source_text),
                ("sourceLang", request.source_lang),
                ("targetLang", request.target_lang),
            )
            if value is None or not str(value).strip()
        ]
        if missing:
            raise ValidationError("Missing required fields", field=missing[0], details={"missing": missing})

    async def translate(self, request: TranslationRequest) -> TranslationResult:
        """Translate ``request.source_text``; raises ValidationError or UpstreamError."""
        self._validate_request(request)

        descriptor = self.registry.lookup(request.source_lang, request.target_lang)
        model_id = descriptor.model_id if descriptor else self.registry.fallback_model_id(
            request.source_lang, request.target_lang
        )

        start_time = time.time()
        try:
            reply = await self.backend.infer(model_id, request.source_text)
            try:
                translated_text = reply.text
            except ValueError as e:
                raise UpstreamError(
                    "Malformed translation response",
                    model_id=model_id,
                    details={"reason": str(e), "reply_shape": reply.shape.value}
                ) from e
        except UpstreamError as e:
            logger.translation_failed(
                model_id=model_id,
                source_lang=request.source_lang,
                target_lang=request.target_lang,
                error_message=e.message,
                processing_time_ms=round((time.time() - start_time) * 1000, 2),
                upstream_status=e.status_code
            )
            raise

        logger.translation_completed(
            model_id=model_id,
            source_lang=request.source_lang,
            target_lang=request.target_lang,
            processing_time_ms=round((time.time() - start_time) * 1000, 2),
            character_count=len(request.source_text),
            fallback_model=descriptor is None,
            reply_shape=reply.shape.value
        )

        return TranslationResult(translated_text=translated_text, model_used=model_id)

    async def translate_and_record(self, request: TranslationRequest,
                                   user_id: Optional[str] = None) -> TranslationOutcome:
        """Translate, then save history for a signed-in user.

        The save is advisory: its failure is logged and the translation is
        still returned.
        """
        result = await self.translate(request)

        if not user_id:
            return TranslationOutcome(result=result)

        saved = False
        try:
            async with self.session_factory() as session:
                await TranslationRepository(session).record(user_id, request, result)
                await session.commit()
                saved = True
                await self._remember_languages(session, user_id, request, result)
        except Exception as e:
            logger.history_save_failed(user_id=user_id, model_id=result.model_used, error_message=str(e))

        return TranslationOutcome(result=result, history_saved=saved)

    async def _remember_languages(self, session: AsyncSession, user_id: str,
                                  request: TranslationRequest, result: TranslationResult):
        # Runs after the history row is committed and never undoes it
        try:
            await ProfileRepository(session).remember_languages(
                user_id, request.source_lang, request.target_lang
            )
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.preferences_save_failed(user_id=user_id, model_id=result.model_used, error_message=str(e))
