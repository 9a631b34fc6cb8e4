"""Repository protocol for conversation persistence."""

from __future__ import annotations

from typing import Protocol, Sequence

from promptchat.modules.common.pagination import PageRequest

from .models import Conversation, ConversationSummary


class ConversationRepository(Protocol):
    async def add(self, conversation: Conversation) -> Conversation:
        ...

    async def get_for_user(self, conversation_id: str, user_id: str) -> Conversation | None:
        ...

    async def list_for_user(self, user_id: str, page: PageRequest) -> tuple[Sequence[ConversationSummary], int]:
        ...
