import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import literal
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from ...core.config import Settings, get_settings
from ...core.exceptions import DatabaseError
from .unit_of_work import UnitOfWork

# Import all models here to ensure they're registered with SQLModel.metadata
from . import models  # noqa: F401

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Async database connection manager.

    Builds the engine and session factory lazily from settings and hands out
    one unit of work per logical operation.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None
        self._is_connected = False
        self._lock = asyncio.Lock()

    def _get_database_config(self, url: str) -> dict:
        """Get engine configuration based on URL."""
        config = {
            "echo": self.settings.database_echo,
            "pool_pre_ping": True,
        }

        if url.startswith("sqlite"):
            config["connect_args"] = {"check_same_thread": False}
            if ":memory:" in url or url.rstrip("/").endswith("sqlite+aiosqlite:"):
                config["poolclass"] = StaticPool
        else:
            config.update({
                "pool_size": self.settings.database_pool_size,
                "max_overflow": self.settings.database_max_overflow,
                "pool_timeout": self.settings.database_pool_timeout,
                "pool_recycle": self.settings.database_pool_recycle,
            })

        return config

    @staticmethod
    def _convert_to_async_url(url: str) -> str:
        """Convert sync database URL to async URL."""
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif url.startswith("sqlite:///"):
            return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
        return url

    def _create_engine(self) -> AsyncEngine:
        """Create asynchronous database engine."""
        try:
            async_url = self._convert_to_async_url(self.settings.database_url)
            engine = create_async_engine(async_url, **self._get_database_config(async_url))

            logger.info(f"Async database engine created: {engine.url.render_as_string(hide_password=True)}")
            return engine

        except (SQLAlchemyError, ImportError, ValueError) as e:
            logger.error(f"Failed to create async database engine: {e}")
            raise DatabaseError(f"Async database engine creation failed: {e}", operation="create_engine") from e

    async def get_engine(self) -> AsyncEngine:
        """Get or create the asynchronous database engine."""
        if self._engine is None:
            async with self._lock:
                if self._engine is None:  # Double-check locking
                    self._engine = self._create_engine()
                    self._session_maker = async_sessionmaker(
                        self._engine,
                        class_=AsyncSession,
                        expire_on_commit=False,
                        autoflush=False,
                    )
        return self._engine

    async def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        if self._session_maker is None:
            await self.get_engine()
        return self._session_maker

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Get a bare session that commits on success and rolls back on error."""
        session_maker = await self.get_session_maker()

        async with session_maker() as session:
            try:
                logger.debug(f"Async database session created: {id(session)}")
                yield session
                await session.commit()
                logger.debug(f"Async database session committed: {id(session)}")
            except SQLAlchemyError as e:
                logger.error(f"Async database session error: {e}")
                await session.rollback()
                raise DatabaseError(f"Async database operation failed: {e}", operation="session") from e
            except Exception:
                await session.rollback()
                raise

    @asynccontextmanager
    async def unit_of_work(self) -> AsyncIterator[UnitOfWork]:
        """
        Open a unit of work on a fresh session.

        Nothing is committed automatically; staged changes that were not
        committed are rolled back when the block exits.
        """
        session_maker = await self.get_session_maker()
        async with UnitOfWork(session_maker(), settings=self.settings) as uow:
            yield uow

    async def connect(self) -> None:
        """Initialize database connection and create tables."""
        logger.info("Connecting to database...")

        await self.get_engine()
        await self.create_tables()

        if not await self.health_check():
            raise DatabaseError("Database health check failed after connection", operation="connect")

        self._is_connected = True
        logger.info("Database connected successfully")

    async def disconnect(self) -> None:
        """Close database connections."""
        logger.info("Disconnecting from database...")

        if self._engine is not None:
            await self._engine.dispose()
            logger.debug("Async database engine disposed")

        self._engine = None
        self._session_maker = None
        self._is_connected = False

        logger.info("Database disconnected successfully")

    async def create_tables(self) -> None:
        """Create all database tables."""
        logger.info("Creating database tables...")

        engine = await self.get_engine()
        try:
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        except SQLAlchemyError as e:
            logger.error(f"Failed to create database tables: {e}")
            raise DatabaseError(f"Database table creation failed: {e}", operation="create_tables") from e

        logger.info("Database tables created successfully")

    async def drop_tables(self) -> None:
        """Drop all database tables."""
        logger.warning("Dropping all database tables...")

        engine = await self.get_engine()
        try:
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.drop_all)
        except SQLAlchemyError as e:
            logger.error(f"Failed to drop database tables: {e}")
            raise DatabaseError(f"Database table drop failed: {e}", operation="drop_tables") from e

        logger.warning("All database tables dropped")

    async def health_check(self) -> bool:
        """Check database health and connectivity."""
        session_maker = await self.get_session_maker()
        try:
            async with session_maker() as session:
                result = await session.exec(select(literal(1)))
                return result.one() == 1
        except SQLAlchemyError as e:
            logger.error(f"Database health check failed: {e}")
            return False

    @property
    def is_connected(self) -> bool:
        """Check if database is connected."""
        return self._is_connected


# Global database manager instance
database_manager = DatabaseManager()

