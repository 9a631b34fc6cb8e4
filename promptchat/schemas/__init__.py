"""Pydantic schemas used across the HTTP API."""
import re
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from promptchat.modules.templates.models import TemplateCategory

OBJECT_ID_PATTERN = r"^[0-9a-fA-F]{24}$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
_LETTER_AND_DIGIT = re.compile(r"^(?=.*[A-Za-z])(?=.*\d)")


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(ApiModel):
    success: bool = True
    message: str = "OK"
    data: Optional[Any] = None


class ErrorDetail(ApiModel):
    field: str
    message: str
    code: str


class PaginationResponse(ApiModel):
    page: int
    limit: int
    total: int
    pages: int
    has_next: bool
    has_prev: bool


# --- users & auth ---------------------------------------------------------


class RegisterRequest(ApiModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=2, max_length=50)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6, max_length=100)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        if not _LETTER_AND_DIGIT.match(value):
            raise ValueError("The password must contain at least one letter and one number")
        return value


class LoginRequest(ApiModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.lower()


class TokenData(BaseModel):
    user_id: str
    email: str
    role: str


class UserResponse(ApiModel):
    id: str
    name: str
    email: str
    role: str
    is_active: bool
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None


class AuthData(ApiModel):
    user: UserResponse
    token: str
    token_type: str = "bearer"


class AuthResponse(SuccessResponse):
    data: AuthData


class ProfileData(ApiModel):
    user: UserResponse


class ProfileResponse(SuccessResponse):
    data: ProfileData


# --- prompt templates -----------------------------------------------------


class TemplateCreatorResponse(ApiModel):
    id: str
    name: str
    email: str


class TemplateCreate(ApiModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=3, max_length=100)
    description: str = Field(..., min_length=10, max_length=500)
    template: str = Field(..., min_length=20, max_length=2000)
    system_instructions: str = Field(..., min_length=20, max_length=1000)
    category: TemplateCategory
    tags: list[str] = Field(default_factory=list, max_length=10)

    @field_validator("tags")
    @classmethod
    def tag_length(cls, value: list[str]) -> list[str]:
        for tag in value:
            if len(tag.strip()) > 30:
                raise ValueError("Each tag cannot exceed 30 characters")
        return value


class TemplateUpdate(ApiModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=3, max_length=100)
    description: Optional[str] = Field(None, min_length=10, max_length=500)
    template: Optional[str] = Field(None, min_length=20, max_length=2000)
    system_instructions: Optional[str] = Field(None, min_length=20, max_length=1000)
    category: Optional[TemplateCategory] = None
    tags: Optional[list[str]] = Field(None, max_length=10)

    @field_validator("tags")
    @classmethod
    def tag_length(cls, value: Optional[list[str]]) -> Optional[list[str]]:
        for tag in value or []:
            if len(tag.strip()) > 30:
                raise ValueError("Each tag cannot exceed 30 characters")
        return value


class TemplateSummaryResponse(ApiModel):
    id: str
    name: str
    description: str
    category: str
    tags: list[str] = Field(default_factory=list)
    usage_count: int = 0
    is_default: bool = False
    creator: Optional[TemplateCreatorResponse] = None
    created_at: Optional[datetime] = None


class TemplateResponse(TemplateSummaryResponse):
    template: str
    system_instructions: str
    is_active: bool = True
    created_by: Optional[str] = None
    updated_at: Optional[datetime] = None


class TemplateListData(ApiModel):
    prompts: list[TemplateSummaryResponse]
    pagination: PaginationResponse


class TemplateListResponse(SuccessResponse):
    data: TemplateListData


class TemplateData(ApiModel):
    prompt: TemplateResponse


class TemplateDetailResponse(SuccessResponse):
    data: TemplateData


# --- chat -----------------------------------------------------------------


class ChatCompletionRequest(ApiModel):
    template_id: str = Field(..., pattern=OBJECT_ID_PATTERN)
    user_prompt: str = Field(..., min_length=5, max_length=2000)
    temperature: float = Field(0.7, ge=0, le=1)
    max_tokens: int = Field(1000, ge=1, le=4000)


class TokenUsageResponse(ApiModel):
    input: int
    output: int
    total: int


class ChatMetadataResponse(ApiModel):
    model: str
    response_time_seconds: float
    temperature: float
    max_tokens: int
    template_name: str


class ChatCompletionData(ApiModel):
    response: str
    conversation_id: str
    token_usage: TokenUsageResponse
    metadata: ChatMetadataResponse


class ChatCompletionResponse(SuccessResponse):
    data: ChatCompletionData


class ConversationTemplateResponse(ApiModel):
    id: str
    name: str
    category: str
    description: Optional[str] = None


class ConversationSummaryResponse(ApiModel):
    id: str
    title: str
    total_tokens: int
    model: str
    created_at: Optional[datetime] = None
    template: Optional[ConversationTemplateResponse] = None


class ConversationHistoryData(ApiModel):
    conversations: list[ConversationSummaryResponse]
    pagination: PaginationResponse


class ConversationHistoryResponse(SuccessResponse):
    data: ConversationHistoryData


class MessageResponse(ApiModel):
    role: str
    content: str
    token_count: int
    timestamp: Optional[datetime] = None


class ConversationMetadataResponse(ApiModel):
    user_prompt: Optional[str] = None
    combined_prompt: Optional[str] = None
    response_time: Optional[float] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


class ConversationResponse(ApiModel):
    id: str
    user_id: str
    template_id: str
    template: Optional[ConversationTemplateResponse] = None
    title: str
    messages: list[MessageResponse]
    total_tokens: int
    model: str
    status: str
    metadata: ConversationMetadataResponse
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ConversationData(ApiModel):
    conversation: ConversationResponse


class ConversationDetailResponse(SuccessResponse):
    data: ConversationData


# --- health ---------------------------------------------------------------


class GenerationHealth(ApiModel):
    state: str
    valid: bool
    issues: list[str] = Field(default_factory=list)


class HealthResponse(ApiModel):
    success: bool = True
    status: str = "ok"
    environment: str
    version: str
    generation: GenerationHealth
