"""Request rate limiting for the chat and authentication endpoints.

Chat traffic is keyed by the caller's JWT subject so users behind one NAT do
not share a budget; anonymous traffic falls back to the remote address.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from jose import JWTError, jwt
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from promptchat.core.config import get_settings

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests, please try again later"


def user_or_remote_address(request: Request) -> str:
    authorization = request.headers.get("authorization", "")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() == "bearer" and token:
        settings = get_settings()
        try:
            claims = jwt.get_unverified_claims(token)
        except JWTError:
            claims = {}
        subject = claims.get("sub")
        if subject and claims.get("iss") == settings.security.issuer:
            return f"user:{subject}"
    return get_remote_address(request)


def chat_limit() -> str:
    return get_settings().rate_limit.chat


def auth_limit() -> str:
    return get_settings().rate_limit.auth


def _build_limiter() -> Limiter:
    settings = get_settings()
    limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit.enabled)
    logger.info("Rate limiter initialized (enabled=%s)", settings.rate_limit.enabled)
    return limiter


limiter = _build_limiter()


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    retry_after = exc.limit.limit.get_expiry()
    logger.warning(
        "Rate limit exceeded: path=%s key=%s limit=%s",
        request.url.path,
        user_or_remote_address(request),
        exc.detail,
    )
    return JSONResponse(
        status_code=429,
        content={"success": False, "message": RATE_LIMIT_MESSAGE, "retryAfter": retry_after},
        headers={"Retry-After": str(retry_after)},
    )


__all__ = [
    "RATE_LIMIT_MESSAGE",
    "auth_limit",
    "chat_limit",
    "limiter",
    "rate_limit_exceeded_handler",
    "user_or_remote_address",
]
