"""Read side of conversations: paginated history and single-record lookup."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from promptchat.modules.common.pagination import PageRequest, Pagination

from .exceptions import ConversationNotFoundError
from .models import Conversation, ConversationPage
from .repository import ConversationRepository


@dataclass(slots=True)
class ConversationService:
    repository: ConversationRepository

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ) -> "ConversationService":
        from promptchat.infrastructure.database.repositories.conversation_repository import SqlConversationRepository

        return cls(SqlConversationRepository(session, session_factory))

    async def list_for_user(self, user_id: str, page: PageRequest) -> ConversationPage:
        items, total = await self.repository.list_for_user(user_id, page)
        return ConversationPage(items=items, pagination=Pagination.build(page, total, len(items)))

    async def get_for_user(self, conversation_id: str, user_id: str) -> Conversation:
        conversation = await self.repository.get_for_user(conversation_id, user_id)
        if conversation is None:
            raise ConversationNotFoundError()
        return conversation
