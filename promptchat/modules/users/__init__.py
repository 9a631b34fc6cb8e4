"""User domain exports."""

from .exceptions import InvalidCredentialsError, UserAlreadyExistsError, UserError, UserNotFoundError
from .models import User, UserCreateInput, UserRole
from .service import UserService

__all__ = [
    "InvalidCredentialsError",
    "User",
    "UserAlreadyExistsError",
    "UserCreateInput",
    "UserError",
    "UserNotFoundError",
    "UserRole",
    "UserService",
]
