"""Database abstraction layer using SQLAlchemy 2.0 async.

This module provides the storage handle used by the application. A
DatabaseManager is constructed explicitly (by the application factory or
the CLI), connected on startup and disconnected on shutdown. Request
handlers get sessions from the manager stored on the application state.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from storefront.core.config import Settings
from storefront.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class DatabaseManager:
    """Database connection and session manager.

    Owns the async engine and session factory for one database URL.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize the database manager.

        Args:
            settings: Application settings holding the database URL.
        """
        self.settings = settings
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        """Get or create the database engine."""
        if self._engine is None:
            self._engine = create_async_engine(
                self.settings.database_url,
                echo=self.settings.db_echo,
                connect_args={"check_same_thread": False}
                if self.settings.database_url.startswith("sqlite")
                else {},
            )
            logger.info(
                "Database engine created",
                database_url=self._engine.url.render_as_string(hide_password=True),
            )
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
        return self._session_factory

    async def connect(self) -> None:
        """Verify connectivity and create missing tables.

        Raises:
            RuntimeError: If the database cannot be reached.
        """
        # Register all models with Base.metadata before create_all
        from storefront.infrastructure.persistence import models  # noqa: F401

        self._ensure_sqlite_directory()

        if not await self.check_connection():
            logger.error("Database connection failed")
            raise RuntimeError("Failed to connect to database")

        await self.create_tables()

    async def create_tables(self) -> None:
        """Create all database tables that do not exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    async def disconnect(self) -> None:
        """Close the database engine and all connections."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session that is rolled back if the block raises.

        Example:
            async with db.session() as session:
                result = await session.execute(select(UserModel))
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def check_connection(self) -> bool:
        """Check if database connection is working."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error("Database connection check failed", error=str(e))
            return False

    def _ensure_sqlite_directory(self) -> None:
        url = self.settings.database_url
        if not url.startswith("sqlite") or ":memory:" in url:
            return
        db_dir = Path(url.split(":///")[-1]).parent
        db_dir.mkdir(parents=True, exist_ok=True)


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency for FastAPI to get a database session.

    Uses the DatabaseManager stored on the application state.

    Example:
        @router.get("/product")
        async def search(session: AsyncSession = Depends(get_db_session)):
            ...
    """
    db: DatabaseManager = request.app.state.db
    async with db.session() as session:
        yield session
