"""
Pytest configuration and fixtures for the translation proxy tests.
"""

import json
from typing import AsyncGenerator, Callable, List

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from translation_proxy.config.config import InferenceConfig
from translation_proxy.database.connection import Base
from translation_proxy.database import models  # noqa: F401  (registers tables)
from translation_proxy.database.repositories import ProfileRepository, TranslationRepository
from translation_proxy.models.interfaces import LanguagePair, ModelDescriptor
from translation_proxy.services.inference_client import HuggingFaceInferenceClient
from translation_proxy.services.model_registry import ModelRegistry


# Test database configuration
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_API_BASE_URL = "https://inference.test"
TEST_API_KEY = "hf_test_key"
FALLBACK_PREFIX = "Helsinki-NLP/opus-mt"


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def translation_repository(db_session) -> TranslationRepository:
    return TranslationRepository(db_session)


@pytest_asyncio.fixture
async def profile_repository(db_session) -> ProfileRepository:
    return ProfileRepository(db_session)


def make_descriptor(model_id: str, *pairs: str, specialization: str = "ligature") -> ModelDescriptor:
    return ModelDescriptor(
        model_id=model_id,
        supported_pairs=tuple(LanguagePair.parse(pair) for pair in pairs),
        specialization=specialization
    )


@pytest.fixture
def descriptors() -> List[ModelDescriptor]:
    return [
        make_descriptor("Helsinki-NLP/opus-mt-ar-en", "ar-en"),
        make_descriptor("Helsinki-NLP/opus-mt-en-ar", "en-ar"),
        make_descriptor("Helsinki-NLP/opus-mt-hi-en", "hi-en"),
        make_descriptor("Helsinki-NLP/opus-mt-en-hi", "en-hi"),
    ]


@pytest.fixture
def registry(descriptors) -> ModelRegistry:
    return ModelRegistry(descriptors, fallback_prefix=FALLBACK_PREFIX)


@pytest.fixture
def inference_config() -> InferenceConfig:
    return InferenceConfig(
        api_base_url=TEST_API_BASE_URL,
        api_key=TEST_API_KEY,
        request_timeout_seconds=5.0,
        probe_timeout_seconds=2.0
    )


class RecordingHandler:
    """MockTransport handler that records requests and answers from a callable."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]):
        self.respond = respond
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def json_body(self, index: int = 0):
        return json.loads(self.requests[index].content)


@pytest.fixture
def make_client(inference_config):
    """Build an inference client whose HTTP traffic goes to a handler."""
    def _make(respond: Callable[[httpx.Request], httpx.Response]):
        handler = RecordingHandler(respond)
        client = HuggingFaceInferenceClient(inference_config, transport=httpx.MockTransport(handler))
        return client, handler
    return _make
