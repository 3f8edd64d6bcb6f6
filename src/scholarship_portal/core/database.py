"""
Database Configuration

Async SQLAlchemy engine and session management.

The engine (and its connection pool) is owned by a ``Database`` resource that
is created once in the FastAPI lifespan and stored on ``app.state``. Routes
receive it through dependency injection instead of importing a global pool.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from scholarship_portal.core.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


class Database:
    """
    Process-lifetime handle around the engine and its connection pool.

    Usage:
        database = Database.from_settings(settings)
        async with database.session() as db:
            ...
        async with database.transaction() as db:
            ...  # committed on success, rolled back on error
        await database.close()
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_maker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        engine = create_async_engine(
            settings.database_url,
            echo=settings.db_echo,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=True,
        )
        return cls(engine)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session; the connection goes back to the pool on exit."""
        async with self.session_maker() as session:
            yield session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """
        Yield a session inside a single atomic unit of work.

        The session holds a dedicated pooled connection for the duration of
        the block. Any exception rolls back every write before the
        connection is released; a clean exit commits.
        """
        async with self.session_maker() as session:
            try:
                async with session.begin():
                    yield session
            except Exception:
                logger.warning("Transaction rolled back")
                raise

    async def ping(self) -> None:
        """Check that the database accepts connections."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def close(self) -> None:
        await self.engine.dispose()


async def init_db(settings: Settings) -> Database:
    """
    Create the database resource and verify connectivity.

    Call this on application startup.
    """
    database = Database.from_settings(settings)
    await database.ping()
    return database


async def close_db(database: Database | None) -> None:
    """Dispose the engine and close pooled connections."""
    if database is not None:
        await database.close()


def get_database(request: Request) -> Database:
    """
    FastAPI dependency returning the process-wide Database resource.

    Usage in FastAPI:
        @router.post("/apply")
        async def apply(database: Database = Depends(get_database)):
            async with database.transaction() as db:
                ...
    """
    return request.app.state.database


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding a request-scoped session."""
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
