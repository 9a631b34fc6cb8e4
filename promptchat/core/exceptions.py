"""Application error taxonomy.

Every error carries the HTTP status it maps to; the HTTP layer renders them
with the common ``{"success": false, "message": ...}`` envelope.
"""

from __future__ import annotations

from typing import Optional


class AppError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, *, status_code: Optional[int] = None) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or out-of-range caller input."""

    status_code = 400
    default_message = "Invalid input"


class SecurityError(AppError):
    """Input matched a denylisted prompt-injection pattern."""

    status_code = 400
    default_message = "The prompt contains disallowed content"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Resource not found"


class AlreadyExistsError(AppError):
    status_code = 400
    default_message = "Resource already exists"


class ConfigurationError(AppError):
    """Fatal configuration problem, e.g. a missing upstream credential."""

    status_code = 500
    default_message = "Service is not configured"


class GenerationError(AppError):
    """Generic failure talking to the generation upstream."""

    status_code = 500
    default_message = "Error communicating with the generation service"


class InvalidRequest(GenerationError):
    status_code = 400
    default_message = "Invalid request to the generation service"


class AuthConfigError(GenerationError):
    """Upstream rejected our credential; a server misconfiguration, not a caller fault."""

    status_code = 500
    default_message = "Invalid generation service API key"


class RateLimited(GenerationError):
    status_code = 429
    default_message = "Generation service rate limit exceeded"


class UpstreamUnavailable(GenerationError):
    status_code = 503
    default_message = "Generation service internal error"


__all__ = [
    "AppError",
    "ValidationError",
    "SecurityError",
    "NotFoundError",
    "AlreadyExistsError",
    "ConfigurationError",
    "GenerationError",
    "InvalidRequest",
    "AuthConfigError",
    "RateLimited",
    "UpstreamUnavailable",
]
