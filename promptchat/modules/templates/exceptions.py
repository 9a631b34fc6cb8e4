"""Prompt template domain exceptions."""

from promptchat.core.exceptions import AlreadyExistsError, NotFoundError


class TemplateNotFoundError(NotFoundError):
    default_message = "Template not found"


class TemplateAlreadyExistsError(AlreadyExistsError):
    default_message = "A template with this name already exists"
