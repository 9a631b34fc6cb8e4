"""Domain models for prompt templates."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Sequence

from promptchat.modules.common.pagination import PageRequest, Pagination

PLACEHOLDER = "{data}"


class TemplateCategory(str, Enum):
    ANALYSIS = "analysis"
    CREATIVE = "creative"
    TECHNICAL = "technical"
    BUSINESS = "business"
    EDUCATIONAL = "educational"
    GENERAL = "general"
    HUMAN_RESOURCES_HEALTH = "human_resources_health"
    HEALTHCARE_QUALITY = "healthcare_quality"


@dataclass(slots=True)
class TemplateCreator:
    id: str
    name: str
    email: str


@dataclass(slots=True)
class PromptTemplate:
    id: str
    name: str
    description: str
    template: str
    system_instructions: str
    category: str
    tags: list[str] = field(default_factory=list)
    is_default: bool = False
    is_active: bool = True
    usage_count: int = 0
    created_by: Optional[str] = None
    creator: Optional[TemplateCreator] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def has_placeholder(self) -> bool:
        return PLACEHOLDER in self.template


@dataclass(slots=True)
class TemplateCreateInput:
    name: str
    description: str
    template: str
    system_instructions: str
    category: str
    tags: list[str] = field(default_factory=list)
    is_default: bool = False


@dataclass(slots=True)
class TemplateUpdateInput:
    name: Optional[str] = None
    description: Optional[str] = None
    template: Optional[str] = None
    system_instructions: Optional[str] = None
    category: Optional[str] = None
    tags: Optional[list[str]] = None


@dataclass(slots=True, frozen=True)
class TemplateQuery:
    page: PageRequest = PageRequest()
    category: Optional[str] = None
    tags: tuple[str, ...] = ()
    search: Optional[str] = None


@dataclass(slots=True)
class TemplatePage:
    items: Sequence[PromptTemplate]
    pagination: Pagination


def normalize_tags(tags: Sequence[str]) -> list[str]:
    """Trim and lower-case tags, dropping blanks and duplicates while keeping order."""
    seen: list[str] = []
    for tag in tags:
        cleaned = tag.strip().lower()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen
