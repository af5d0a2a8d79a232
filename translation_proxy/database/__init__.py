"""
Database package for the translation proxy.
"""

from .connection import (
    Base,
    DatabaseManager,
    db_manager,
    init_database,
    close_database,
    get_db_session
)

from .models import (
    Translation,
    UserProfile
)

from .repositories import (
    BaseRepository,
    TranslationRepository,
    ProfileRepository
)

__all__ = [
    # Connection management
    "Base",
    "DatabaseManager",
    "db_manager",
    "init_database",
    "close_database",
    "get_db_session",

    # Models
    "Translation",
    "UserProfile",

    # Repositories
    "BaseRepository",
    "TranslationRepository",
    "ProfileRepository"
]
