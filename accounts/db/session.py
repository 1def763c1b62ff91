"""Async engine/session helpers for the SQL backend."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from accounts.core.config import Settings, get_settings

Base = declarative_base()

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the async engine and session factory.

    Created once at startup with ``connect()`` and released at shutdown with
    ``dispose()``. Services receive the instance explicitly; nothing is
    opened at import time.
    """

    def __init__(self, url: str | None = None, *, echo: bool | None = None, settings: Settings | None = None):
        settings = settings or get_settings()
        self.url = (url or settings.database_url or "").strip()
        if not self.url:
            raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
        self.echo = settings.sql_echo if echo is None else echo
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected; call connect() first.")
        return self._engine

    @property
    def connected(self) -> bool:
        return self._engine is not None

    async def connect(self) -> None:
        if self._engine is not None:
            return
        self._engine = create_async_engine(self.url, echo=self.echo, pool_pre_ping=True)
        if self._engine.dialect.name == "sqlite":
            event.listen(self._engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self._sessionmaker = async_sessionmaker(bind=self._engine, autoflush=False, expire_on_commit=False)
        logger.info("Connected to database %s", make_url(self.url).render_as_string(hide_password=True))

    async def dispose(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info("Database connection pool disposed")

    async def create_all(self) -> None:
        from . import models  # noqa: F401  # ensure models are imported for metadata

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        from . import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if self._sessionmaker is None:
            raise RuntimeError("Database is not connected; call connect() first.")
        session = self._sessionmaker()
        try:
            yield session
        finally:
            await session.close()
