"""Chat completion use case.

Fetches the template, validates and filters the user's input, combines both
into one prompt, calls the generation service once and records the exchange.
Input problems are raised before any upstream call. Upstream errors arrive
already classified by :class:`GenerationClient` and are re-raised as-is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from promptchat.core.config import Settings
from promptchat.core.exceptions import AppError
from promptchat.modules.conversations.recorder import ConversationRecorder, RecordRequest
from promptchat.modules.generation.client import GenerationClient
from promptchat.modules.generation.models import TokenUsage
from promptchat.modules.prompts.combiner import CombineOptions, combine
from promptchat.modules.prompts.filters import DenylistInjectionFilter, InjectionFilter
from promptchat.modules.prompts.sanitizer import InputSanitizer
from promptchat.modules.templates.service import TemplateService
from promptchat.modules.users.models import User

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000


def response_length_for(max_tokens: int) -> int:
    """Character budget announced to the model for a given token budget."""
    return 800 if max_tokens > 1000 else 500


@dataclass(slots=True, frozen=True)
class ChatCompletionCommand:
    template_id: str
    user_prompt: str
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS


@dataclass(slots=True, frozen=True)
class ChatCompletion:
    response: str
    conversation_id: str
    usage: TokenUsage
    model: str
    response_time_seconds: float
    temperature: float
    max_tokens: int
    template_name: str


class ChatService:
    def __init__(
        self,
        templates: TemplateService,
        recorder: ConversationRecorder,
        generation: GenerationClient,
        *,
        sanitizer: InputSanitizer,
        injection_filter: InjectionFilter,
        response_style: str = "concise and direct",
        language: str = "English",
    ) -> None:
        self._templates = templates
        self._recorder = recorder
        self._generation = generation
        self._sanitizer = sanitizer
        self._injection_filter = injection_filter
        self._response_style = response_style
        self._language = language

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        generation: GenerationClient,
        settings: Settings,
        injection_filter: InjectionFilter | None = None,
    ) -> "ChatService":
        return cls(
            TemplateService.with_session(session),
            ConversationRecorder.with_session(session, settings.chat),
            generation,
            sanitizer=InputSanitizer(settings.chat.prompt_min_length, settings.chat.prompt_max_length),
            injection_filter=injection_filter or DenylistInjectionFilter(),
            response_style=settings.chat.response_style,
            language=settings.chat.language,
        )

    async def complete(self, user: User, command: ChatCompletionCommand) -> ChatCompletion:
        prompt_length = len(command.user_prompt) if isinstance(command.user_prompt, str) else None
        logger.info(
            "Starting chat completion: template_id=%s user_id=%s prompt_length=%s",
            command.template_id,
            user.id,
            prompt_length,
        )
        try:
            return await self._complete(user, command)
        except AppError as exc:
            logger.error(
                "Chat completion failed: template_id=%s user_id=%s prompt_length=%s error=%s",
                command.template_id,
                user.id,
                prompt_length,
                exc.message,
            )
            raise

    async def _complete(self, user: User, command: ChatCompletionCommand) -> ChatCompletion:
        template = await self._templates.find_active_by_id(command.template_id)

        sanitized = self._sanitizer.validate(command.user_prompt)
        self._injection_filter.reject_injection(sanitized)

        combination = combine(
            template,
            sanitized,
            CombineOptions(
                max_response_length=response_length_for(command.max_tokens),
                response_style=self._response_style,
                language=self._language,
            ),
        )
        if combination.metadata.get("placeholder_inert"):
            logger.debug("Template %s keeps its {data} placeholder unsubstituted", template.id)

        generation = await self._generation.generate(
            combination.combined_prompt,
            max_tokens=command.max_tokens,
            temperature=command.temperature,
            system_message=combination.system_message,
        )

        conversation = await self._recorder.record(
            user,
            template,
            sanitized,
            generation,
            RecordRequest(
                temperature=command.temperature,
                max_tokens=command.max_tokens,
                combined_prompt=combination.combined_prompt,
            ),
        )
        if conversation.id is None:
            raise AppError("The conversation could not be recorded")

        logger.info(
            "Chat completion succeeded: conversation_id=%s template_id=%s user_id=%s total_tokens=%s response_time=%.3fs",
            conversation.id,
            template.id,
            user.id,
            generation.usage.total,
            generation.metadata.response_time_seconds,
        )
        return ChatCompletion(
            response=generation.text,
            conversation_id=conversation.id,
            usage=generation.usage,
            model=generation.metadata.model,
            response_time_seconds=generation.metadata.response_time_seconds,
            temperature=command.temperature,
            max_tokens=command.max_tokens,
            template_name=template.name,
        )
