from fastapi import APIRouter

from . import auth, chat, templates


def create_api_router(prefix: str = "") -> APIRouter:
    router = APIRouter(prefix=prefix)
    router.include_router(auth.router, prefix="/auth", tags=["auth"])
    router.include_router(templates.router, prefix="/prompts", tags=["prompts"])
    router.include_router(chat.router, prefix="/chat", tags=["chat"])
    return router


__all__ = [
    "create_api_router",
]
