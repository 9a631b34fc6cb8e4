"""Application service handling prompt template workflows."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from promptchat.modules.common.pagination import Pagination

from .exceptions import TemplateAlreadyExistsError, TemplateNotFoundError
from .models import (
    PromptTemplate,
    TemplateCreateInput,
    TemplatePage,
    TemplateQuery,
    TemplateUpdateInput,
    normalize_tags,
)
from .repository import PromptTemplateRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TemplateService:
    repository: PromptTemplateRepository

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
    ) -> "TemplateService":
        from promptchat.infrastructure.database.repositories.template_repository import SqlPromptTemplateRepository

        return cls(SqlPromptTemplateRepository(session, session_factory))

    async def list_templates(self, query: TemplateQuery) -> TemplatePage:
        items, total = await self.repository.search_active(query)
        return TemplatePage(items=items, pagination=Pagination.build(query.page, total, len(items)))

    async def find_active_by_id(self, template_id: str) -> PromptTemplate:
        template = await self.repository.find_active_by_id(template_id)
        if template is None:
            raise TemplateNotFoundError()
        return template

    async def create_template(self, payload: TemplateCreateInput, *, created_by: str) -> PromptTemplate:
        name = payload.name.strip()
        if await self.repository.get_by_name(name) is not None:
            raise TemplateAlreadyExistsError()
        template = await self.repository.create(
            name=name,
            description=payload.description.strip(),
            template=payload.template.strip(),
            system_instructions=payload.system_instructions.strip(),
            category=payload.category,
            tags=normalize_tags(payload.tags),
            is_default=payload.is_default,
            created_by=created_by,
        )
        logger.info("Template created: id=%s name=%s created_by=%s", template.id, template.name, created_by)
        return template

    async def update_template(
        self,
        template_id: str,
        payload: TemplateUpdateInput,
        *,
        owner_id: str,
    ) -> PromptTemplate:
        """Apply a partial update; only the template's creator may change it."""
        values: dict[str, Any] = {}
        for field_name in ("name", "description", "template", "system_instructions"):
            value = getattr(payload, field_name)
            if value is not None:
                values[field_name] = value.strip()
        if payload.category is not None:
            values["category"] = payload.category

        if "name" in values:
            existing = await self.repository.get_by_name(values["name"])
            if existing is not None and existing.id != template_id:
                raise TemplateAlreadyExistsError()

        tags = normalize_tags(payload.tags) if payload.tags is not None else None
        template = await self.repository.update_owned(template_id, owner_id, values=values, tags=tags)
        if template is None:
            raise TemplateNotFoundError("Template not found or not owned by you")
        logger.info("Template updated: id=%s updated_by=%s", template_id, owner_id)
        return template

    async def delete_template(self, template_id: str, *, owner_id: str) -> None:
        if not await self.repository.deactivate_owned(template_id, owner_id):
            raise TemplateNotFoundError("Template not found or not owned by you")
        logger.info("Template deactivated: id=%s deleted_by=%s", template_id, owner_id)

    async def increment_usage_count(self, template_id: str) -> None:
        await self.repository.increment_usage_count(template_id)
