"""
API routes package.
"""

from .translation import router as translation_router
from .system import router as system_router
from .history import router as history_router
from .profile import router as profile_router

__all__ = [
    "translation_router",
    "system_router",
    "history_router",
    "profile_router"
]
