"""Unit tests for the chat completion use case."""

import pytest

from promptchat.core.exceptions import AppError
from promptchat.modules.chat import ChatCompletionCommand, ChatService
from promptchat.modules.conversations import ConversationRecorder
from promptchat.modules.prompts import DenylistInjectionFilter, InputSanitizer
from promptchat.modules.templates import PromptTemplate
from promptchat.modules.users import User

TEMPLATE = PromptTemplate(
    id="65f1a2b3c4d5e6f708192a3b",
    name="T1",
    description="Summaries of arbitrary text",
    template="Summarize: {data}",
    system_instructions="Be terse.",
    category="general",
)

USER = User(
    id="65f1a2b3c4d5e6f708192a3c",
    name="Stub",
    email="stub@example.com",
    role="user",
    is_active=True,
    password_hash="x",
)


class StaticTemplates:
    async def find_active_by_id(self, template_id: str) -> PromptTemplate:
        return TEMPLATE


class UnsavedRecorder:
    """Returns the conversation without an identifier, as if nothing was stored."""

    def __init__(self) -> None:
        self._builder = ConversationRecorder(None, None, None)

    async def record(self, user, template, sanitized_input, generation, request):
        return self._builder.build(user, template, sanitized_input, generation, request)


@pytest.fixture
def service(generation_client) -> ChatService:
    return ChatService(
        StaticTemplates(),
        UnsavedRecorder(),
        generation_client,
        sanitizer=InputSanitizer(),
        injection_filter=DenylistInjectionFilter(),
    )


class TestComplete:
    async def test_unrecorded_conversation_is_an_error(self, service, fake_anthropic):
        command = ChatCompletionCommand(template_id=TEMPLATE.id, user_prompt="Explain rainfall patterns")

        with pytest.raises(AppError, match="could not be recorded") as exc_info:
            await service.complete(USER, command)

        assert exc_info.value.status_code == 500
        assert len(fake_anthropic.messages.calls) == 1

    async def test_collapsed_short_input_never_reaches_upstream(self, service, fake_anthropic):
        command = ChatCompletionCommand(template_id=TEMPLATE.id, user_prompt="a     b")

        with pytest.raises(AppError) as exc_info:
            await service.complete(USER, command)

        assert exc_info.value.status_code == 400
        assert fake_anthropic.messages.calls == []
