"""User domain specific exceptions."""

from promptchat.core.exceptions import AlreadyExistsError, AppError, NotFoundError


class UserError(AppError):
    """Base class for user domain errors."""


class UserAlreadyExistsError(UserError, AlreadyExistsError):
    """Raised when registering an email that is already taken."""

    default_message = "Email is already registered"


class UserNotFoundError(UserError, NotFoundError):
    default_message = "User not found"


class InvalidCredentialsError(UserError):
    status_code = 401
    default_message = "Invalid credentials"
