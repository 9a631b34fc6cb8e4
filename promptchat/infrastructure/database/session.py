"""Engine, session factory and schema bootstrap for the promptchat database.

SQLite (through aiosqlite) is the default store. Usage counters are bumped
from concurrent requests, so SQLite connections wait for the write lock
instead of failing with ``database is locked``.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from promptchat.core.config import DatabaseSettings, get_settings
from promptchat.infrastructure.database.base import Base

_engine: AsyncEngine | None = None
AsyncSessionFactory: async_sessionmaker[AsyncSession] | None = None


def _engine_options(url: str, database: DatabaseSettings, debug: bool) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": database.echo or debug}
    if make_url(url).get_backend_name() == "sqlite":
        options["connect_args"] = {"timeout": database.sqlite_busy_timeout}
    if database.pool_size is not None:
        options["pool_size"] = database.pool_size
    if database.max_overflow is not None:
        options["max_overflow"] = database.max_overflow
    return options


def get_engine() -> AsyncEngine:
    global _engine, AsyncSessionFactory
    if _engine is None:
        settings = get_settings()
        _engine = create_async_engine(
            settings.database_url,
            **_engine_options(settings.database_url, settings.database, settings.debug),
        )
        AsyncSessionFactory = async_sessionmaker(bind=_engine, expire_on_commit=False)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Factory for sessions that live outside a request, e.g. scripts and parallel reads."""
    get_engine()
    assert AsyncSessionFactory is not None  # for mypy
    return AsyncSessionFactory


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session: commit when the handler returns, roll back if it raises."""
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create users, templates and conversation tables if they are missing."""
    from promptchat.db import models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Close pooled connections; the next ``get_engine()`` builds a fresh engine."""
    global _engine, AsyncSessionFactory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    AsyncSessionFactory = None
