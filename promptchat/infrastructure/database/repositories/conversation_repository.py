"""SQLAlchemy implementation for the conversation repository."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import noload

from promptchat.db.models import Conversation as ConversationModel
from promptchat.db.models import ConversationMessage
from promptchat.db.models import PromptTemplate as PromptTemplateModel
from promptchat.modules.common.pagination import PageRequest
from promptchat.modules.conversations.models import (
    Conversation,
    ConversationMetadata,
    ConversationSummary,
    Message,
    TemplateSummary,
)

from .base import AsyncRepository


class SqlConversationRepository(AsyncRepository):
    async def add(self, conversation: Conversation) -> Conversation:
        model = ConversationModel(
            user_id=conversation.user_id,
            template_id=conversation.template_id,
            title=conversation.title,
            status=conversation.status,
            total_tokens=conversation.total_tokens,
            model=conversation.model,
            user_prompt=conversation.metadata.user_prompt,
            combined_prompt=conversation.metadata.combined_prompt,
            response_time=conversation.metadata.response_time,
            temperature=conversation.metadata.temperature,
            max_tokens=conversation.metadata.max_tokens,
            messages=[
                ConversationMessage(
                    position=index,
                    role=message.role,
                    content=message.content,
                    token_count=message.token_count,
                    timestamp=message.timestamp,
                )
                for index, message in enumerate(conversation.messages)
            ],
        )
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model, attribute_names=["created_at", "updated_at", "template", "messages"])
        return self._to_domain(model)

    async def get_for_user(self, conversation_id: str, user_id: str) -> Conversation | None:
        stmt = (
            select(ConversationModel)
            .where(ConversationModel.id == conversation_id)
            .where(ConversationModel.user_id == user_id)
        )
        result = await self.session.execute(stmt)
        model = result.scalars().first()
        return self._to_domain(model) if model is not None else None

    async def list_for_user(self, user_id: str, page: PageRequest) -> tuple[Sequence[ConversationSummary], int]:
        items_stmt = (
            select(ConversationModel)
            .options(noload(ConversationModel.messages))
            .where(ConversationModel.user_id == user_id)
            .order_by(ConversationModel.created_at.desc(), ConversationModel.id.desc())
            .offset(page.offset)
            .limit(page.limit)
        )
        count_stmt = select(func.count()).select_from(ConversationModel).where(ConversationModel.user_id == user_id)
        models, total = await self._fetch_page(items_stmt, count_stmt)
        return [self._to_summary(model) for model in models], total

    @staticmethod
    def _template_summary(template: PromptTemplateModel | None) -> TemplateSummary | None:
        if template is None:
            return None
        return TemplateSummary(
            id=template.id,
            name=template.name,
            category=template.category,
            description=template.description,
        )

    @classmethod
    def _to_summary(cls, model: ConversationModel) -> ConversationSummary:
        return ConversationSummary(
            id=model.id,
            title=model.title or "",
            total_tokens=model.total_tokens or 0,
            model=model.model,
            created_at=model.created_at,
            template=cls._template_summary(model.template),
        )

    @classmethod
    def _to_domain(cls, model: ConversationModel) -> Conversation:
        return Conversation(
            id=model.id,
            user_id=model.user_id,
            template_id=model.template_id,
            title=model.title or "",
            model=model.model,
            messages=[
                Message(
                    role=message.role,
                    content=message.content,
                    token_count=message.token_count or 0,
                    timestamp=message.timestamp,
                )
                for message in model.messages
            ],
            status=model.status,
            total_tokens=model.total_tokens or 0,
            metadata=ConversationMetadata(
                user_prompt=model.user_prompt,
                combined_prompt=model.combined_prompt,
                response_time=model.response_time,
                temperature=model.temperature,
                max_tokens=model.max_tokens,
            ),
            template=cls._template_summary(model.template),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
