"""Reusable FastAPI dependencies."""

from .database import get_db_session, get_db_session_factory
from .services import (
    get_chat_service,
    get_conversation_service,
    get_generation_client,
    get_template_service,
    get_user_service,
)

__all__ = [
    "get_db_session",
    "get_db_session_factory",
    "get_chat_service",
    "get_conversation_service",
    "get_generation_client",
    "get_template_service",
    "get_user_service",
]
