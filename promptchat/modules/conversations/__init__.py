"""Conversation persistence: recording completions and reading history."""

from .exceptions import ConversationNotFoundError
from .models import (
    Conversation,
    ConversationMetadata,
    ConversationPage,
    ConversationStatus,
    ConversationSummary,
    Message,
    MessageRole,
)
from .recorder import ConversationRecorder, RecordRequest
from .service import ConversationService

__all__ = [
    "Conversation",
    "ConversationMetadata",
    "ConversationNotFoundError",
    "ConversationPage",
    "ConversationRecorder",
    "ConversationService",
    "ConversationStatus",
    "ConversationSummary",
    "Message",
    "MessageRole",
    "RecordRequest",
]
