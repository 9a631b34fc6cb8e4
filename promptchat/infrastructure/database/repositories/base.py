"""Repository base exposing the request session and optional isolated readers."""

from __future__ import annotations

import asyncio
from typing import Any, Sequence

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


class AsyncRepository:
    """Base repository around an ``AsyncSession``.

    When a session factory is supplied, independent read-only queries can run
    concurrently, each on its own short-lived session. An ``AsyncSession`` must
    never be shared between concurrently running coroutines.
    """

    def __init__(
        self,
        session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ) -> None:
        self._session = session
        self._session_factory = session_factory

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def _fetch_all(self, stmt: Select[Any], session: AsyncSession | None = None) -> Sequence[Any]:
        result = await (session or self._session).execute(stmt)
        return result.scalars().all()

    async def _fetch_scalar(self, stmt: Select[Any], session: AsyncSession | None = None) -> Any:
        result = await (session or self._session).execute(stmt)
        return result.scalar_one()

    async def _fetch_page(self, items_stmt: Select[Any], count_stmt: Select[Any]) -> tuple[Sequence[Any], int]:
        """Run a page query and its count, concurrently when isolated sessions are available."""
        if self._session_factory is None:
            items = await self._fetch_all(items_stmt)
            total = await self._fetch_scalar(count_stmt)
            return items, int(total)

        async def isolated_items() -> Sequence[Any]:
            async with self._session_factory() as session:
                return await self._fetch_all(items_stmt, session)

        async def isolated_count() -> Any:
            async with self._session_factory() as session:
                return await self._fetch_scalar(count_stmt, session)

        items, total = await asyncio.gather(isolated_items(), isolated_count())
        return items, int(total)
