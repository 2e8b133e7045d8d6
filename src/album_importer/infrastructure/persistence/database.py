"""Database session management."""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ...config.models import CatalogConfig
from .models import Base

logger = logging.getLogger(__name__)


class Database:
    """Database connection and session manager."""

    def __init__(self, config: CatalogConfig) -> None:
        """Initialize database with catalog settings.

        Args:
            config: Catalog configuration.
        """
        self._url = config.url

        engine_kwargs: Dict[str, Any] = {"echo": config.echo}

        if self.is_sqlite:
            engine_kwargs["connect_args"] = {
                "check_same_thread": False,
                "timeout": 30,  # wait for the write lock instead of failing
            }
            if self.is_memory:
                # One shared connection, otherwise every session sees an empty database
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_pre_ping"] = True

        self._engine = create_async_engine(self._url, **engine_kwargs)

        if self.is_sqlite:
            self._enable_sqlite_foreign_keys()

        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @property
    def is_sqlite(self) -> bool:
        """Check if the URL points at SQLite."""
        return self._url.startswith("sqlite")

    @property
    def is_memory(self) -> bool:
        """Check if the URL points at an in-memory SQLite database."""
        return self.is_sqlite and (":memory:" in self._url or self._url.rstrip("/").endswith(":"))

    def _enable_sqlite_foreign_keys(self) -> None:
        """Enable foreign key constraints for SQLite connections."""

        @event.listens_for(self._engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_conn: Any, _connection_record: Any) -> None:
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
            logger.debug("Enabled foreign keys for SQLite connection")

    @asynccontextmanager
    async def session_scope(self) -> AsyncIterator[AsyncSession]:
        """Provide a transactional scope for database operations."""
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_tables(self) -> None:
        """Create all missing tables."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        """Close database connections."""
        await self._engine.dispose()
