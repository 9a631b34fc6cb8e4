"""Domain models for recorded conversations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Sequence

from promptchat.modules.common.pagination import Pagination


class MessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ConversationStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(slots=True)
class Message:
    role: str
    content: str
    token_count: int = 0
    timestamp: Optional[datetime] = None


@dataclass(slots=True)
class ConversationMetadata:
    user_prompt: Optional[str] = None
    combined_prompt: Optional[str] = None
    response_time: Optional[float] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


@dataclass(slots=True)
class TemplateSummary:
    id: str
    name: str
    category: str
    description: Optional[str] = None


@dataclass(slots=True)
class Conversation:
    id: Optional[str]
    user_id: str
    template_id: str
    title: str
    model: str
    messages: list[Message] = field(default_factory=list)
    status: str = ConversationStatus.COMPLETED.value
    total_tokens: int = 0
    metadata: ConversationMetadata = field(default_factory=ConversationMetadata)
    template: Optional[TemplateSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def message_token_sum(self) -> int:
        return sum(message.token_count for message in self.messages)


@dataclass(slots=True)
class ConversationSummary:
    id: str
    title: str
    total_tokens: int
    model: str
    created_at: Optional[datetime]
    template: Optional[TemplateSummary] = None


@dataclass(slots=True)
class ConversationPage:
    items: Sequence[ConversationSummary]
    pagination: Pagination
