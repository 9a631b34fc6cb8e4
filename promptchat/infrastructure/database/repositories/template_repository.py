"""SQLAlchemy implementation for the prompt template repository."""

from __future__ import annotations

from typing import Any, Sequence

from sqlalchemy import func, or_, select, update

from promptchat.db.models import PromptTemplate as PromptTemplateModel
from promptchat.db.models import PromptTemplateTag
from promptchat.modules.templates.models import PromptTemplate, TemplateCreator, TemplateQuery

from .base import AsyncRepository


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class SqlPromptTemplateRepository(AsyncRepository):
    async def find_active_by_id(self, template_id: str) -> PromptTemplate | None:
        stmt = (
            select(PromptTemplateModel)
            .where(PromptTemplateModel.id == template_id)
            .where(PromptTemplateModel.is_active.is_(True))
        )
        result = await self.session.execute(stmt)
        return self._to_domain(result.scalars().first())

    async def get_by_name(self, name: str) -> PromptTemplate | None:
        stmt = select(PromptTemplateModel).where(PromptTemplateModel.name == name)
        result = await self.session.execute(stmt)
        return self._to_domain(result.scalars().first())

    async def search_active(self, query: TemplateQuery) -> tuple[Sequence[PromptTemplate], int]:
        conditions: list[Any] = [PromptTemplateModel.is_active.is_(True)]
        if query.category:
            conditions.append(PromptTemplateModel.category == query.category)
        if query.tags:
            conditions.append(PromptTemplateModel.tags.any(PromptTemplateTag.tag.in_(query.tags)))
        if query.search:
            pattern = _like_pattern(query.search)
            conditions.append(
                or_(
                    PromptTemplateModel.name.ilike(pattern, escape="\\"),
                    PromptTemplateModel.description.ilike(pattern, escape="\\"),
                )
            )

        items_stmt = (
            select(PromptTemplateModel)
            .where(*conditions)
            .order_by(
                PromptTemplateModel.is_default.desc(),
                PromptTemplateModel.usage_count.desc(),
                PromptTemplateModel.created_at.desc(),
            )
            .offset(query.page.offset)
            .limit(query.page.limit)
        )
        count_stmt = select(func.count()).select_from(PromptTemplateModel).where(*conditions)
        models, total = await self._fetch_page(items_stmt, count_stmt)
        return [self._to_domain(model) for model in models], total

    async def create(
        self,
        *,
        name: str,
        description: str,
        template: str,
        system_instructions: str,
        category: str,
        tags: Sequence[str],
        is_default: bool,
        created_by: str,
    ) -> PromptTemplate:
        model = PromptTemplateModel(
            name=name,
            description=description,
            template=template,
            system_instructions=system_instructions,
            category=category,
            is_default=is_default,
            created_by=created_by,
            tags=[PromptTemplateTag(tag=tag, position=index) for index, tag in enumerate(tags)],
        )
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model, attribute_names=["created_at", "updated_at", "creator", "tags"])
        return self._to_domain(model)

    async def update_owned(
        self,
        template_id: str,
        owner_id: str,
        *,
        values: dict[str, Any],
        tags: Sequence[str] | None = None,
    ) -> PromptTemplate | None:
        stmt = (
            select(PromptTemplateModel)
            .where(PromptTemplateModel.id == template_id)
            .where(PromptTemplateModel.created_by == owner_id)
        )
        result = await self.session.execute(stmt)
        model = result.scalars().first()
        if model is None:
            return None

        for key, value in values.items():
            setattr(model, key, value)
        if tags is not None:
            # Old rows must be gone before re-inserting the same tag values.
            model.tags.clear()
            await self.session.flush()
            model.tags.extend(PromptTemplateTag(tag=tag, position=index) for index, tag in enumerate(tags))

        await self.session.flush()
        await self.session.refresh(model, attribute_names=["updated_at", "tags"])
        return self._to_domain(model)

    async def deactivate_owned(self, template_id: str, owner_id: str) -> bool:
        stmt = (
            update(PromptTemplateModel)
            .where(PromptTemplateModel.id == template_id)
            .where(PromptTemplateModel.created_by == owner_id)
            .where(PromptTemplateModel.is_active.is_(True))
            .values(is_active=False)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def increment_usage_count(self, template_id: str) -> None:
        # Evaluated by the database so concurrent increments never lose updates.
        stmt = (
            update(PromptTemplateModel)
            .where(PromptTemplateModel.id == template_id)
            .values(usage_count=PromptTemplateModel.usage_count + 1)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)

    @staticmethod
    def _to_domain(model: PromptTemplateModel | None) -> PromptTemplate | None:
        if model is None:
            return None
        creator = None
        if model.creator is not None:
            creator = TemplateCreator(id=model.creator.id, name=model.creator.name, email=model.creator.email)
        return PromptTemplate(
            id=model.id,
            name=model.name,
            description=model.description,
            template=model.template,
            system_instructions=model.system_instructions,
            category=model.category,
            tags=[tag.tag for tag in model.tags],
            is_default=bool(model.is_default),
            is_active=bool(model.is_active),
            usage_count=model.usage_count or 0,
            created_by=model.created_by,
            creator=creator,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
