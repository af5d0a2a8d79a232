"""
Models package for the translation proxy.
"""

from .interfaces import (
    LanguagePair,
    ModelDescriptor,
    TranslationRequest,
    TranslationResult,
    ReplyShape,
    InferenceReply,
    ModelStatus,
    StatusReport,
    InferenceBackend
)

__all__ = [
    "LanguagePair",
    "ModelDescriptor",
    "TranslationRequest",
    "TranslationResult",
    "ReplyShape",
    "InferenceReply",
    "ModelStatus",
    "StatusReport",
    "InferenceBackend"
]
