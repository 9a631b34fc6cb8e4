"""SQLAlchemy-backed repository implementations."""

from .base import AsyncRepository
from .conversation_repository import SqlConversationRepository
from .template_repository import SqlPromptTemplateRepository
from .user_repository import SqlUserRepository

__all__ = [
    "AsyncRepository",
    "SqlConversationRepository",
    "SqlPromptTemplateRepository",
    "SqlUserRepository",
]
