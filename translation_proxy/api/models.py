"""
Pydantic models for API request/response validation.
"""

from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TranslateRequestModel(BaseModel):
    """Model for a translation request.

    Fields are optional at the schema level so that missing values reach the
    service and are reported as a 400 rather than a schema error.
    """

    model_config = ConfigDict(populate_by_name=True)

    source_text: Optional[str] = Field(None, alias="sourceText", description="Text to translate")
    source_lang: Optional[str] = Field(None, alias="sourceLang", description="Source language code")
    target_lang: Optional[str] = Field(None, alias="targetLang", description="Target language code")

    @field_validator('source_lang', 'target_lang')
    @classmethod
    def normalize_language_code(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class TranslateResponseModel(BaseModel):
    """Model for a translation result."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    translated_text: str = Field(..., alias="translatedText", description="Translated text")
    model_used: str = Field(..., alias="modelUsed", description="Identifier of the model that produced it")


class LanguagePairModel(BaseModel):
    source: str
    target: str


class ModelStatusModel(BaseModel):
    """Availability of one registered model."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    model_id: str = Field(..., alias="modelId")
    status: str = Field(..., description="available or error")
    details: Optional[Any] = Field(None, description="Upstream status payload")
    error: Optional[str] = Field(None, description="Probe failure message")
    supported_language_pairs: List[LanguagePairModel] = Field(..., alias="supportedLanguagePairs")
    specialization: Optional[str] = None


class ModelStatusReportModel(BaseModel):
    """Model for the aggregate model status report."""

    status: str = Field(..., description="operational or error")
    models: List[ModelStatusModel]
    timestamp: datetime


class LanguageModel(BaseModel):
    code: str
    name: str


class SupportedLanguagesResponseModel(BaseModel):
    """Languages served by registered models."""

    languages: List[LanguageModel]
    pairs: List[LanguagePairModel]


class TranslationRecordModel(BaseModel):
    """Model for a saved translation."""

    model_config = ConfigDict(from_attributes=True, protected_namespaces=())

    id: UUID
    user_id: str
    source_text: str
    translated_text: str
    source_language: str
    target_language: str
    is_favorite: bool
    model_used: Optional[str] = None
    created_at: Optional[datetime] = None


class TranslationListResponseModel(BaseModel):
    translations: List[TranslationRecordModel]
    total: int = Field(..., ge=0)


class ProfileModel(BaseModel):
    """Model for a user profile."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    display_name: Optional[str] = None
    preferred_source_language: str
    preferred_target_language: str


class ProfileUpdateModel(BaseModel):
    display_name: Optional[str] = Field(None, max_length=255)
    preferred_source_language: Optional[str] = Field(None, min_length=2, max_length=10)
    preferred_target_language: Optional[str] = Field(None, min_length=2, max_length=10)

    @field_validator('preferred_source_language', 'preferred_target_language')
    @classmethod
    def validate_language_codes(cls, v):
        if v is None:
            return v
        if not v.replace("_", "").isalpha():
            raise ValueError('Invalid language code format')
        return v.lower()


class ErrorResponseModel(BaseModel):
    """Model for error responses."""

    error: str = Field(..., description="Error message")
    code: Optional[str] = Field(None, description="Machine-readable error code")
    details: Optional[Any] = Field(None, description="Additional error details")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "error": "Translation failed",
            "code": "UPSTREAM_ERROR",
            "details": {"error": "Model Helsinki-NLP/opus-mt-xx-yy does not exist"}
        }
    })


class HealthCheckResponseModel(BaseModel):
    """Model for health check response."""

    status: str = Field(..., description="Service health status")
    timestamp: datetime = Field(..., description="Health check timestamp")
    version: str = Field(..., description="API version")
    database: str = Field(..., description="Database connection status")
    registered_models: int = Field(..., ge=0, description="Number of registered models")
    uptime_seconds: float = Field(..., ge=0, description="Service uptime in seconds")
