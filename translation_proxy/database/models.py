"""
SQLAlchemy models for the translation proxy.
"""

from uuid import uuid4

from sqlalchemy import (
    Boolean, CheckConstraint, Column, DateTime, Index, String, Text, Uuid
)
from sqlalchemy.sql import func

from translation_proxy.database.connection import Base


class Translation(Base):
    """Model for a user's saved translation."""

    __tablename__ = "translations"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    user_id = Column(String(255), nullable=False, index=True)
    source_text = Column(Text, nullable=False)
    translated_text = Column(Text, nullable=False)
    source_language = Column(String(10), nullable=False)
    target_language = Column(String(10), nullable=False)
    is_favorite = Column(Boolean, nullable=False, default=False, index=True)
    model_used = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now(), index=True)

    # Constraints
    __table_args__ = (
        CheckConstraint("LENGTH(user_id) > 0", name='check_user_id_not_empty'),
        Index('idx_translations_user_created', 'user_id', 'created_at'),
        Index('idx_translations_user_favorite', 'user_id', 'is_favorite'),
    )


class UserProfile(Base):
    """Model for per-user display name and default languages."""

    __tablename__ = "user_profiles"

    id = Column(String(255), primary_key=True)
    display_name = Column(String(255), nullable=True)
    preferred_source_language = Column(String(10), nullable=True)
    preferred_target_language = Column(String(10), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("LENGTH(id) > 0", name='check_profile_id_not_empty'),
    )
