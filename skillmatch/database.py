"""
Database configuration and session management.
Uses async SQLAlchemy for PostgreSQL connections.

The engine is owned by a Database instance built by the application
factory and kept on ``app.state.database``; nothing here is a module-level
connection handle.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from skillmatch.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def utc_now() -> datetime:
    """Current UTC time as a naive datetime, matching the TIMESTAMP columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Database:
    """
    Owns the async engine and session factory for one database.
    Engine creation is lazy so the app can be built without a reachable server.
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        """Get the database engine, creating it if necessary."""
        if self._engine is None:
            settings = self._settings
            self._engine = create_async_engine(
                settings.async_database_url,
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_pool_max_overflow,
                pool_timeout=settings.db_pool_timeout,
                pool_pre_ping=True,
                echo=False,
                connect_args={"server_settings": {"timezone": "UTC"}},
            )
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get the session factory, creating it if necessary."""
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autocommit=False,
                autoflush=False,
            )
        return self._session_factory

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Transactional session scope.
        Commits when the block exits cleanly, rolls back on any exception.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def connect(self) -> None:
        """Verify connectivity."""
        async with self.engine.begin() as conn:
            await conn.run_sync(lambda _: None)  # Simple connectivity test

        logger.info("Database connection established successfully")

    async def close(self) -> None:
        """Dispose of pooled connections."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None

        logger.info("Database connections closed")


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a request-scoped database session.

    The whole request runs in one transaction: commit on success,
    rollback if the endpoint raises.
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
