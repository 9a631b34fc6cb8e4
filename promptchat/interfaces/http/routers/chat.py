"""Chat completion and conversation history endpoints."""
from fastapi import APIRouter, Depends, Query, Request

from promptchat.core.security import get_current_user
from promptchat.interfaces.http.deps import get_chat_service, get_conversation_service
from promptchat.interfaces.http.rate_limit import chat_limit, limiter, user_or_remote_address
from promptchat.modules.chat import ChatCompletionCommand, ChatService
from promptchat.modules.common.pagination import PageRequest
from promptchat.modules.conversations import ConversationService
from promptchat.modules.users import User
from promptchat.schemas import (
    ChatCompletionData,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMetadataResponse,
    ConversationData,
    ConversationDetailResponse,
    ConversationHistoryData,
    ConversationHistoryResponse,
    ConversationResponse,
    ConversationSummaryResponse,
    PaginationResponse,
    TokenUsageResponse,
)

router = APIRouter()


@router.post("/complete", response_model=ChatCompletionResponse, summary="Generate a response from a template")
@limiter.limit(chat_limit, key_func=user_or_remote_address)
async def complete_chat(
    request: Request,
    payload: ChatCompletionRequest,
    user: User = Depends(get_current_user),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatCompletionResponse:
    result = await chat_service.complete(
        user,
        ChatCompletionCommand(
            template_id=payload.template_id,
            user_prompt=payload.user_prompt,
            temperature=payload.temperature,
            max_tokens=payload.max_tokens,
        ),
    )
    return ChatCompletionResponse(
        message="Response generated successfully",
        data=ChatCompletionData(
            response=result.response,
            conversation_id=result.conversation_id,
            token_usage=TokenUsageResponse(
                input=result.usage.input,
                output=result.usage.output,
                total=result.usage.total,
            ),
            metadata=ChatMetadataResponse(
                model=result.model,
                response_time_seconds=result.response_time_seconds,
                temperature=result.temperature,
                max_tokens=result.max_tokens,
                template_name=result.template_name,
            ),
        ),
    )


@router.get("/history", response_model=ConversationHistoryResponse, summary="Paginated conversation history")
async def chat_history(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    user: User = Depends(get_current_user),
    service: ConversationService = Depends(get_conversation_service),
) -> ConversationHistoryResponse:
    result = await service.list_for_user(user.id, PageRequest(page=page, limit=limit))
    return ConversationHistoryResponse(
        message="History retrieved",
        data=ConversationHistoryData(
            conversations=[ConversationSummaryResponse.model_validate(item) for item in result.items],
            pagination=PaginationResponse.model_validate(result.pagination),
        ),
    )


@router.get(
    "/conversations/{conversation_id}",
    response_model=ConversationDetailResponse,
    summary="Get one of the caller's conversations",
)
async def get_conversation(
    conversation_id: str,
    user: User = Depends(get_current_user),
    service: ConversationService = Depends(get_conversation_service),
) -> ConversationDetailResponse:
    conversation = await service.get_for_user(conversation_id, user.id)
    return ConversationDetailResponse(
        message="Conversation retrieved",
        data=ConversationData(conversation=ConversationResponse.model_validate(conversation)),
    )
