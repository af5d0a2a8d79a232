"""
Configuration management for the translation proxy.
Supports different environments (development, staging, production).
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum


class Environment(Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class ModelAvailability(Enum):
    AVAILABLE = "available"
    ERROR = "error"


class SystemStatus(Enum):
    OPERATIONAL = "operational"
    ERROR = "error"


@dataclass
class DatabaseConfig:
    host: str
    port: int
    database: str
    username: str
    password: str
    pool_size: int = 10
    max_overflow: int = 20
    url: Optional[str] = None
    create_tables: bool = False

    @property
    def connection_string(self) -> str:
        if self.url:
            return self.url
        return f"postgresql+asyncpg://{self.username}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class SecurityConfig:
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_audience: Optional[str] = None
    jwt_expiration_hours: int = 24


@dataclass
class MonitoringConfig:
    log_level: str = "INFO"


# Static model table. List order is lookup priority: the first entry serving
# a pair wins.
DEFAULT_MODEL_CONFIGS: List[Dict[str, Any]] = [
    {
        "model_id": "Helsinki-NLP/opus-mt-ar-en",
        "version": "1.0",
        "max_tokens": 512,
        "language_pairs": ["ar-en"],
        "specialization": "ligature"
    },
    {
        "model_id": "Helsinki-NLP/opus-mt-en-ar",
        "version": "1.0",
        "max_tokens": 512,
        "language_pairs": ["en-ar"],
        "specialization": "ligature"
    },
    {
        "model_id": "Helsinki-NLP/opus-mt-hi-en",
        "version": "1.0",
        "max_tokens": 512,
        "language_pairs": ["hi-en"],
        "specialization": "ligature"
    },
    {
        "model_id": "Helsinki-NLP/opus-mt-en-hi",
        "version": "1.0",
        "max_tokens": 512,
        "language_pairs": ["en-hi"],
        "specialization": "ligature"
    },
]


# Display names offered by the dashboard language pickers.
LANGUAGE_NAMES: Dict[str, str] = {
    "ar": "Arabic",
    "bn": "Bengali",
    "hi": "Hindi",
    "ja": "Japanese",
    "ko": "Korean",
    "ta": "Tamil",
    "th": "Thai",
    "zh": "Chinese",
    "en": "English",
    "fr": "French",
    "de": "German",
    "es": "Spanish",
    "ru": "Russian",
}


@dataclass
class InferenceConfig:
    api_base_url: str = "https://api-inference.huggingface.co"
    api_key: str = ""
    request_timeout_seconds: float = 60.0
    probe_timeout_seconds: float = 15.0
    fallback_model_prefix: str = "Helsinki-NLP/opus-mt"
    wait_for_model: bool = True
    use_cache: bool = True
    model_configs: List[Dict[str, Any]] = field(
        default_factory=lambda: [dict(entry) for entry in DEFAULT_MODEL_CONFIGS]
    )


@dataclass
class ProfileDefaults:
    source_language: str = "en"
    target_language: str = "ar"


@dataclass
class Config:
    environment: Environment
    database: DatabaseConfig
    security: SecurityConfig
    monitoring: MonitoringConfig
    inference: InferenceConfig
    profile_defaults: ProfileDefaults = field(default_factory=ProfileDefaults)


def load_config() -> Config:
    """Load configuration based on environment variables."""
    env = Environment(os.getenv("ENVIRONMENT", "development"))

    database_config = DatabaseConfig(
        host=os.getenv("DB_HOST", "localhost"),
        port=int(os.getenv("DB_PORT", "5432")),
        database=os.getenv("DB_NAME", "translation_db"),
        username=os.getenv("DB_USER", "postgres"),
        password=os.getenv("DB_PASSWORD", "password"),
        pool_size=int(os.getenv("DB_POOL_SIZE", "10")),
        max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "20")),
        url=os.getenv("DATABASE_URL"),
        create_tables=os.getenv("DB_CREATE_TABLES", "false").lower() == "true"
    )

    security_config = SecurityConfig(
        jwt_secret_key=os.getenv("JWT_SECRET_KEY", "dev-secret-key"),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        jwt_audience=os.getenv("JWT_AUDIENCE"),
        jwt_expiration_hours=int(os.getenv("JWT_EXPIRATION_HOURS", "24"))
    )

    monitoring_config = MonitoringConfig(
        log_level=os.getenv("LOG_LEVEL", "INFO")
    )

    inference_config = InferenceConfig(
        api_base_url=os.getenv("HUGGINGFACE_API_URL", "https://api-inference.huggingface.co").rstrip("/"),
        api_key=os.getenv("HUGGINGFACE_API_KEY", ""),
        request_timeout_seconds=float(os.getenv("INFERENCE_TIMEOUT_SECONDS", "60")),
        probe_timeout_seconds=float(os.getenv("PROBE_TIMEOUT_SECONDS", "15")),
        fallback_model_prefix=os.getenv("FALLBACK_MODEL_PREFIX", "Helsinki-NLP/opus-mt"),
        wait_for_model=os.getenv("INFERENCE_WAIT_FOR_MODEL", "true").lower() == "true",
        use_cache=os.getenv("INFERENCE_USE_CACHE", "true").lower() == "true"
    )

    profile_defaults = ProfileDefaults(
        source_language=os.getenv("DEFAULT_SOURCE_LANGUAGE", "en"),
        target_language=os.getenv("DEFAULT_TARGET_LANGUAGE", "ar")
    )

    return Config(
        environment=env,
        database=database_config,
        security=security_config,
        monitoring=monitoring_config,
        inference=inference_config,
        profile_defaults=profile_defaults
    )


# Global configuration instance
config = load_config()
