"""Database session providers."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from promptchat.infrastructure.database.session import get_session, get_session_factory


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async for session in get_session():
        yield session


def get_db_session_factory() -> async_sessionmaker[AsyncSession]:
    return get_session_factory()


__all__ = ["get_db_session", "get_db_session_factory"]
