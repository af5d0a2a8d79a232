"""
Unit tests for TranslationService.
"""

from unittest.mock import AsyncMock, patch

import httpx
import pytest
from sqlalchemy import select

from translation_proxy.database.models import Translation, UserProfile
from translation_proxy.models.interfaces import InferenceReply, ReplyShape, TranslationRequest
from translation_proxy.services.model_registry import ModelRegistry
from translation_proxy.services.translation_service import TranslationService
from translation_proxy.utils.exceptions import DatabaseError, UpstreamError, ValidationError
from tests.conftest import FALLBACK_PREFIX


def ok(payload):
    return lambda request: httpx.Response(200, json=payload)


class TestTranslate:
    """Test model resolution, upstream calls and reply normalization."""

    @pytest.mark.asyncio
    async def test_sequence_reply(self, registry, make_client):
        client, handler = make_client(ok([{"translation_text": "X"}]))
        service = TranslationService(registry, client)

        result = await service.translate(TranslationRequest("Hello", "en", "ar"))

        assert result.translated_text == "X"
        assert result.model_used == "Helsinki-NLP/opus-mt-en-ar"
        assert handler.requests[0].url.path == "/models/Helsinki-NLP/opus-mt-en-ar"

    @pytest.mark.asyncio
    async def test_object_reply(self, registry, make_client):
        client, _ = make_client(ok({"generated_text": "Y"}))
        service = TranslationService(registry, client)

        result = await service.translate(TranslationRequest("Hello", "en", "ar"))

        assert result.translated_text == "Y"

    @pytest.mark.asyncio
    async def test_sequence_takes_first_element(self, registry, make_client):
        client, _ = make_client(ok([{"translation_text": "first"}, {"translation_text": "second"}]))
        service = TranslationService(registry, client)

        result = await service.translate(TranslationRequest("Hello", "en", "hi"))

        assert result.translated_text == "first"

    @pytest.mark.asyncio
    async def test_unregistered_pair_uses_fallback_model(self, registry, make_client):
        client, handler = make_client(ok([{"translation_text": "Hallo"}]))
        service = TranslationService(registry, client)

        result = await service.translate(TranslationRequest("Hello", "en", "de"))

        assert result.model_used == f"{FALLBACK_PREFIX}-en-de"
        assert handler.requests[0].url.path == f"/models/{FALLBACK_PREFIX}-en-de"

    @pytest.mark.asyncio
    async def test_empty_registry_routes_everything_to_fallback(self, make_client):
        client, handler = make_client(ok([{"translation_text": "X"}]))
        service = TranslationService(ModelRegistry([], fallback_prefix=FALLBACK_PREFIX), client)

        result = await service.translate(TranslationRequest("Hello", "en", "ar"))

        assert len(service.registry) == 0
        assert result.model_used == f"{FALLBACK_PREFIX}-en-ar"
        assert handler.calls == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("source_text,source_lang,target_lang", [
        ("", "en", "ar"),
        ("   ", "en", "ar"),
        (None, "en", "ar"),
        ("Hello", "", "ar"),
        ("Hello", "en", None),
    ])
    async def test_missing_fields_fail_before_network(self, registry, make_client,
                                                      source_text, source_lang, target_lang):
        client, handler = make_client(ok([{"translation_text": "X"}]))
        service = TranslationService(registry, client)

        with pytest.raises(ValidationError):
            await service.translate(TranslationRequest(source_text, source_lang, target_lang))

        assert handler.calls == 0

    @pytest.mark.asyncio
    async def test_upstream_failure_is_not_retried(self, registry, make_client):
        payload = {"error": "Model is currently loading", "estimated_time": 20.0}
        client, handler = make_client(lambda request: httpx.Response(503, json=payload))
        service = TranslationService(registry, client)

        with pytest.raises(UpstreamError) as exc_info:
            await service.translate(TranslationRequest("Hello", "en", "ar"))

        assert exc_info.value.details == payload
        assert handler.calls == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        [],
        [{"summary_text": "X"}],
        {"translation_text": "X"},
    ])
    async def test_malformed_reply_is_upstream_error(self, registry, make_client, payload):
        client, _ = make_client(ok(payload))
        service = TranslationService(registry, client)

        with pytest.raises(UpstreamError):
            await service.translate(TranslationRequest("Hello", "en", "ar"))


class TestInferenceReply:
    """Test the tagged reply shapes."""

    def test_shape_is_detected_from_payload(self):
        assert InferenceReply.from_payload([{"translation_text": "a"}]).shape is ReplyShape.SEQUENCE
        assert InferenceReply.from_payload({"generated_text": "a"}).shape is ReplyShape.OBJECT

    def test_scalar_payload_rejected(self):
        with pytest.raises(ValueError):
            InferenceReply.from_payload("text")


class FailingSession:
    """Session context whose entry fails like an unreachable database."""

    async def __aenter__(self):
        raise DatabaseError("Database not initialized")

    async def __aexit__(self, exc_type, exc, tb):
        return False


class TestTranslateAndRecord:
    """Test the advisory history save after a translation."""

    @pytest.mark.asyncio
    async def test_anonymous_translation_is_not_saved(self, registry, make_client, session_factory):
        client, _ = make_client(ok([{"translation_text": "X"}]))
        service = TranslationService(registry, client, session_factory=session_factory)

        outcome = await service.translate_and_record(TranslationRequest("Hello", "en", "ar"))

        assert outcome.result.translated_text == "X"
        assert outcome.history_saved is False

        async with session_factory() as session:
            rows = (await session.execute(select(Translation))).scalars().all()
        assert rows == []

    @pytest.mark.asyncio
    async def test_signed_in_translation_is_saved(self, registry, make_client, session_factory):
        client, _ = make_client(ok([{"translation_text": "مرحبا"}]))
        service = TranslationService(registry, client, session_factory=session_factory)

        outcome = await service.translate_and_record(TranslationRequest("Hello", "en", "ar"), user_id="user-1")

        assert outcome.history_saved is True

        async with session_factory() as session:
            saved = (await session.execute(select(Translation))).scalars().one()
            profile = await session.get(UserProfile, "user-1")

        assert saved.user_id == "user-1"
        assert saved.source_text == "Hello"
        assert saved.translated_text == "مرحبا"
        assert saved.source_language == "en"
        assert saved.target_language == "ar"
        assert saved.model_used == "Helsinki-NLP/opus-mt-en-ar"
        assert saved.is_favorite is False
        assert profile.preferred_source_language == "en"
        assert profile.preferred_target_language == "ar"

    @pytest.mark.asyncio
    async def test_storage_failure_does_not_fail_translation(self, registry, make_client):
        client, _ = make_client(ok({"generated_text": "Y"}))
        service = TranslationService(registry, client, session_factory=FailingSession)

        outcome = await service.translate_and_record(TranslationRequest("Hello", "en", "ar"), user_id="user-1")

        assert outcome.result.translated_text == "Y"
        assert outcome.history_saved is False

    @pytest.mark.asyncio
    async def test_upstream_failure_skips_history(self, registry, make_client, session_factory):
        client, _ = make_client(lambda request: httpx.Response(500, json={"error": "boom"}))
        service = TranslationService(registry, client, session_factory=session_factory)

        with pytest.raises(UpstreamError):
            await service.translate_and_record(TranslationRequest("Hello", "en", "ar"), user_id="user-1")

        async with session_factory() as session:
            rows = (await session.execute(select(Translation))).scalars().all()
        assert rows == []

    @pytest.mark.asyncio
    async def test_preference_failure_keeps_history_row(self, registry, make_client, session_factory):
        client, _ = make_client(ok([{"translation_text": "X"}]))
        service = TranslationService(registry, client, session_factory=session_factory)
        failing = AsyncMock(side_effect=DatabaseError("profile write failed", operation="update"))

        with patch("translation_proxy.services.translation_service.ProfileRepository.remember_languages", failing):
            outcome = await service.translate_and_record(TranslationRequest("Hello", "en", "ar"), user_id="user-1")

        assert outcome.result.translated_text == "X"
        assert outcome.history_saved is True
        failing.assert_awaited_once()

        async with session_factory() as session:
            rows = (await session.execute(select(Translation))).scalars().all()
            profile = await session.get(UserProfile, "user-1")

        assert [row.user_id for row in rows] == ["user-1"]
        assert profile is None
