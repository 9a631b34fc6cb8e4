"""Public exports for prompt template domain services."""

from .exceptions import TemplateAlreadyExistsError, TemplateNotFoundError
from .models import (
    PromptTemplate,
    TemplateCategory,
    TemplateCreateInput,
    TemplatePage,
    TemplateQuery,
    TemplateUpdateInput,
)
from .service import TemplateService

__all__ = [
    "PromptTemplate",
    "TemplateAlreadyExistsError",
    "TemplateCategory",
    "TemplateCreateInput",
    "TemplateNotFoundError",
    "TemplatePage",
    "TemplateQuery",
    "TemplateService",
    "TemplateUpdateInput",
]
