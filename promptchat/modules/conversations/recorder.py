"""Builds and persists the conversation record of one chat completion."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from promptchat.core.config import ChatSettings
from promptchat.modules.generation.models import GenerationResult
from promptchat.modules.templates.models import PromptTemplate
from promptchat.modules.templates.repository import PromptTemplateRepository
from promptchat.modules.users.models import User

from .models import Conversation, ConversationMetadata, ConversationStatus, Message, MessageRole
from .repository import ConversationRepository

logger = logging.getLogger(__name__)

TITLE_SUFFIX = "..."


@dataclass(slots=True, frozen=True)
class RecordRequest:
    temperature: float
    max_tokens: int
    combined_prompt: str


class ConversationRecorder:
    """Persists a completed exchange, then bumps the template's usage count.

    The two writes are separate transactions. If the process dies between them
    the usage count lags the stored conversations; it never runs ahead.
    """

    def __init__(
        self,
        session: AsyncSession,
        conversations: ConversationRepository,
        templates: PromptTemplateRepository,
        *,
        title_length: int = 100,
        message_max_length: int = 10000,
    ) -> None:
        self._session = session
        self._conversations = conversations
        self._templates = templates
        self.title_length = title_length
        self.message_max_length = message_max_length

    @classmethod
    def with_session(cls, session: AsyncSession, settings: ChatSettings) -> "ConversationRecorder":
        from promptchat.infrastructure.database.repositories.conversation_repository import SqlConversationRepository
        from promptchat.infrastructure.database.repositories.template_repository import SqlPromptTemplateRepository

        return cls(
            session,
            SqlConversationRepository(session),
            SqlPromptTemplateRepository(session),
            title_length=settings.title_length,
            message_max_length=settings.message_max_length,
        )

    def build(
        self,
        user: User,
        template: PromptTemplate,
        sanitized_input: str,
        generation: GenerationResult,
        request: RecordRequest,
    ) -> Conversation:
        now = datetime.now(timezone.utc)
        messages = [
            Message(
                role=MessageRole.USER.value,
                content=sanitized_input[: self.message_max_length],
                token_count=generation.usage.input,
                timestamp=now,
            ),
            Message(
                role=MessageRole.ASSISTANT.value,
                content=generation.text[: self.message_max_length],
                token_count=generation.usage.output,
                timestamp=now,
            ),
        ]
        return Conversation(
            id=None,
            user_id=user.id,
            template_id=template.id,
            title=sanitized_input[: self.title_length] + TITLE_SUFFIX,
            model=generation.metadata.model,
            messages=messages,
            status=ConversationStatus.COMPLETED.value,
            total_tokens=sum(message.token_count for message in messages),
            metadata=ConversationMetadata(
                user_prompt=sanitized_input,
                combined_prompt=request.combined_prompt,
                response_time=generation.metadata.response_time_seconds,
                temperature=request.temperature,
                max_tokens=request.max_tokens,
            ),
        )

    async def record(
        self,
        user: User,
        template: PromptTemplate,
        sanitized_input: str,
        generation: GenerationResult,
        request: RecordRequest,
    ) -> Conversation:
        conversation = self.build(user, template, sanitized_input, generation, request)
        saved = await self._conversations.add(conversation)
        await self._session.commit()
        await self._increment_usage(template.id)
        return saved

    async def _increment_usage(self, template_id: str) -> None:
        try:
            await self._templates.increment_usage_count(template_id)
            await self._session.commit()
        except SQLAlchemyError:
            await self._session.rollback()
            logger.exception("Could not increment usage count for template %s", template_id)
