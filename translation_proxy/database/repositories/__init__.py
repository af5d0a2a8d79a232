"""
Database repositories package for the translation proxy.
"""

from .base import BaseRepository
from .translation_repository import TranslationRepository
from .profile_repository import ProfileRepository

__all__ = [
    "BaseRepository",
    "TranslationRepository",
    "ProfileRepository"
]
