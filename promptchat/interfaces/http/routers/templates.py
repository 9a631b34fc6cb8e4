"""Prompt template catalogue endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from promptchat.core.security import get_current_admin, get_current_user
from promptchat.interfaces.http.deps import get_template_service
from promptchat.modules.common.pagination import PageRequest
from promptchat.modules.templates import (
    PromptTemplate,
    TemplateCategory,
    TemplateCreateInput,
    TemplateQuery,
    TemplateService,
    TemplateUpdateInput,
)
from promptchat.modules.users import User
from promptchat.schemas import (
    PaginationResponse,
    SuccessResponse,
    TemplateCreate,
    TemplateData,
    TemplateDetailResponse,
    TemplateListData,
    TemplateListResponse,
    TemplateResponse,
    TemplateSummaryResponse,
    TemplateUpdate,
)

router = APIRouter()


def _split_tags(raw: Optional[str]) -> tuple[str, ...]:
    if not raw:
        return ()
    return tuple(tag.strip().lower() for tag in raw.split(",") if tag.strip())


def _detail(template: PromptTemplate, message: str) -> TemplateDetailResponse:
    return TemplateDetailResponse(
        message=message,
        data=TemplateData(prompt=TemplateResponse.model_validate(template)),
    )


@router.get("", response_model=TemplateListResponse, summary="List active prompt templates")
async def list_templates(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    category: Optional[TemplateCategory] = None,
    tags: Optional[str] = Query(None, description="Comma separated, matches any"),
    search: Optional[str] = Query(None, max_length=100),
    _: User = Depends(get_current_user),
    service: TemplateService = Depends(get_template_service),
) -> TemplateListResponse:
    result = await service.list_templates(
        TemplateQuery(
            page=PageRequest(page=page, limit=limit),
            category=category.value if category else None,
            tags=_split_tags(tags),
            search=search.strip() if search and search.strip() else None,
        )
    )
    return TemplateListResponse(
        message="Templates retrieved",
        data=TemplateListData(
            prompts=[TemplateSummaryResponse.model_validate(item) for item in result.items],
            pagination=PaginationResponse.model_validate(result.pagination),
        ),
    )


@router.get("/{template_id}", response_model=TemplateDetailResponse, summary="Get a prompt template")
async def get_template(
    template_id: str,
    _: User = Depends(get_current_user),
    service: TemplateService = Depends(get_template_service),
) -> TemplateDetailResponse:
    template = await service.find_active_by_id(template_id)
    return _detail(template, "Template retrieved")


@router.post(
    "",
    response_model=TemplateDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a prompt template",
)
async def create_template(
    payload: TemplateCreate,
    admin: User = Depends(get_current_admin),
    service: TemplateService = Depends(get_template_service),
) -> TemplateDetailResponse:
    template = await service.create_template(
        TemplateCreateInput(
            name=payload.name,
            description=payload.description,
            template=payload.template,
            system_instructions=payload.system_instructions,
            category=payload.category.value,
            tags=payload.tags,
        ),
        created_by=admin.id,
    )
    return _detail(template, "Template created")


@router.put("/{template_id}", response_model=TemplateDetailResponse, summary="Update a prompt template")
async def update_template(
    template_id: str,
    payload: TemplateUpdate,
    admin: User = Depends(get_current_admin),
    service: TemplateService = Depends(get_template_service),
) -> TemplateDetailResponse:
    changes = payload.model_dump(exclude_unset=True, exclude_none=True, mode="json")
    template = await service.update_template(template_id, TemplateUpdateInput(**changes), owner_id=admin.id)
    return _detail(template, "Template updated")


@router.delete("/{template_id}", response_model=SuccessResponse, summary="Deactivate a prompt template")
async def delete_template(
    template_id: str,
    admin: User = Depends(get_current_admin),
    service: TemplateService = Depends(get_template_service),
) -> SuccessResponse:
    await service.delete_template(template_id, owner_id=admin.id)
    return SuccessResponse(message="Template deleted")
