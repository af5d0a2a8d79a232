"""
Services package for the translation proxy.
"""

from .auth_service import AuthService
from .inference_client import HuggingFaceInferenceClient, get_inference_client
from .model_registry import ModelRegistry, get_model_registry
from .model_status import ModelStatusReporter
from .translation_service import TranslationOutcome, TranslationService

__all__ = [
    "AuthService",
    "HuggingFaceInferenceClient",
    "get_inference_client",
    "ModelRegistry",
    "get_model_registry",
    "ModelStatusReporter",
    "TranslationOutcome",
    "TranslationService"
]
