"""
Database connection management with connection pooling and session support.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from translation_proxy.config.config import config
from translation_proxy.utils.exceptions import DatabaseError, TranslationProxyException
from translation_proxy.utils.logging import TranslationLogger

logger = TranslationLogger(__name__, "database")


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""
    pass


class DatabaseManager:
    """Manages the async engine and session factory."""

    def __init__(self):
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None

    async def initialize(self, url: Optional[str] = None):
        """Create the engine and session factory."""
        url = url or config.database.connection_string
        try:
            engine_options = {
                "pool_pre_ping": True,
                "echo": False
            }
            if not url.startswith("sqlite"):
                engine_options["pool_size"] = config.database.pool_size
                engine_options["max_overflow"] = config.database.max_overflow

            self._engine = create_async_engine(url, **engine_options)

            self._session_factory = async_sessionmaker(
                bind=self._engine,
                class_=AsyncSession,
                expire_on_commit=False
            )

            logger.info("Database engine initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize database engine: {str(e)}", exc_info=True)
            raise DatabaseError(f"Database initialization failed: {str(e)}", operation="initialize")

    async def create_tables(self):
        """Create all tables known to the ORM metadata."""
        if not self._engine:
            raise DatabaseError("Database not initialized", operation="create_tables")

        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created")
        except SQLAlchemyError as e:
            logger.error(f"Failed to create tables: {str(e)}", exc_info=True)
            raise DatabaseError(f"Table creation failed: {str(e)}", operation="create_tables")

    async def close(self):
        """Dispose of the engine and its pooled connections."""
        try:
            if self._engine:
                await self._engine.dispose()

            logger.info("Database connections closed successfully")

        except Exception as e:
            logger.error(f"Error closing database connections: {str(e)}", exc_info=True)
        finally:
            self._engine = None
            self._session_factory = None

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get an async database session with automatic cleanup."""
        if not self._session_factory:
            raise DatabaseError("Database not initialized", operation="get_session")

        async with self._session_factory() as session:
            try:
                yield session
            except TranslationProxyException:
                await session.rollback()
                raise
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Database session error: {str(e)}", exc_info=True)
                raise DatabaseError(f"Database operation failed: {str(e)}")

    async def health_check(self) -> bool:
        """Check database connectivity."""
        if not self.is_initialized:
            return False

        try:
            async with self.get_session() as session:
                result = await session.execute(text("SELECT 1"))
                return result.scalar() == 1
        except Exception as e:
            logger.error(f"Database health check failed: {str(e)}")
            return False

    @property
    def is_initialized(self) -> bool:
        return self._session_factory is not None


# Global database manager instance
db_manager = DatabaseManager()


async def init_database():
    """Initialize the database manager."""
    await db_manager.initialize()
    if config.database.create_tables:
        await db_manager.create_tables()


async def close_database():
    """Close the database manager."""
    await db_manager.close()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a database session."""
    async with db_manager.get_session() as session:
        yield session
