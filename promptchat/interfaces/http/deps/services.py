"""Service providers wired per request."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from promptchat.core.config import Settings, get_settings
from promptchat.core.container import get_container
from promptchat.modules.chat import ChatService
from promptchat.modules.conversations import ConversationService
from promptchat.modules.generation import GenerationClient
from promptchat.modules.templates import TemplateService
from promptchat.modules.users import UserService

from .database import get_db_session, get_db_session_factory


def get_generation_client() -> GenerationClient:
    return get_container().generation_client


def get_user_service(db: AsyncSession = Depends(get_db_session)) -> UserService:
    return UserService.with_session(db)


def get_template_service(
    db: AsyncSession = Depends(get_db_session),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_db_session_factory),
) -> TemplateService:
    return TemplateService.with_session(db, session_factory)


def get_conversation_service(
    db: AsyncSession = Depends(get_db_session),
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_db_session_factory),
) -> ConversationService:
    return ConversationService.with_session(db, session_factory)


def get_chat_service(
    db: AsyncSession = Depends(get_db_session),
    generation: GenerationClient = Depends(get_generation_client),
    settings: Settings = Depends(get_settings),
) -> ChatService:
    return ChatService.with_session(db, generation, settings)


__all__ = [
    "get_chat_service",
    "get_conversation_service",
    "get_generation_client",
    "get_template_service",
    "get_user_service",
]
