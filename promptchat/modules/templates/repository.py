"""Repository protocol for prompt template persistence."""

from __future__ import annotations

from typing import Any, Protocol, Sequence

from .models import PromptTemplate, TemplateQuery


class PromptTemplateRepository(Protocol):
    async def find_active_by_id(self, template_id: str) -> PromptTemplate | None:
        ...

    async def get_by_name(self, name: str) -> PromptTemplate | None:
        ...

    async def search_active(self, query: TemplateQuery) -> tuple[Sequence[PromptTemplate], int]:
        ...

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
        ...

    async def update_owned(
        self,
        template_id: str,
        owner_id: str,
        *,
        values: dict[str, Any],
        tags: Sequence[str] | None = None,
    ) -> PromptTemplate | None:
        ...

    async def deactivate_owned(self, template_id: str, owner_id: str) -> bool:
        ...

    async def increment_usage_count(self, template_id: str) -> None:
        ...
