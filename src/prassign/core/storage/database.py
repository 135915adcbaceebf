"""Async database engine and session management."""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


class Database:
    """Owns the async engine and the session factory.

    Sessions handed out by :meth:`session` are plain sessions; transaction
    boundaries are managed by :class:`~prassign.core.storage.transaction.SQLAlchemyTransactor`.
    """

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        isolation_level: Optional[str] = None,
    ):
        """Create the engine.

        Args:
            database_url: SQLAlchemy async URL (``sqlite+aiosqlite://`` or
                ``postgresql+asyncpg://``)
            echo: Log emitted SQL
            isolation_level: Transaction isolation level applied to
                non-SQLite engines
        """
        self.database_url = database_url
        self.is_sqlite = database_url.startswith("sqlite")

        engine_kwargs = {"echo": echo}
        if isolation_level and not self.is_sqlite:
            engine_kwargs["isolation_level"] = isolation_level

        self.engine: AsyncEngine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        if self.is_sqlite:
            self._enable_sqlite_foreign_keys()

    def _enable_sqlite_foreign_keys(self) -> None:
        @event.listens_for(self.engine.sync_engine, "connect")
        def on_connect(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Open a session that is always closed on exit."""
        session = self._session_factory()
        try:
            yield session
        finally:
            await session.close()

    async def create_tables(self) -> None:
        """Create all tables that do not exist yet."""
        # Import models so they are registered on Base.metadata
        from .. import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.debug("Database tables created")

    async def close(self) -> None:
        """Dispose of the engine and its connection pool."""
        await self.engine.dispose()
        logger.debug("Database engine disposed")


# Global database instance
_db: Optional[Database] = None


def init_db(
    database_url: str,
    echo: bool = False,
    isolation_level: Optional[str] = None,
) -> Database:
    """Initialize the global database instance.

    Args:
        database_url: SQLAlchemy async URL
        echo: Log emitted SQL
        isolation_level: Transaction isolation level for non-SQLite engines

    Returns:
        Database instance
    """
    global _db
    _db = Database(database_url, echo=echo, isolation_level=isolation_level)
    return _db


def get_db() -> Database:
    """Get the global database instance.

    Raises:
        RuntimeError: If the database has not been initialized
    """
    if _db is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _db
