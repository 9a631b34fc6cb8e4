"""Conversation domain exceptions."""

from promptchat.core.exceptions import NotFoundError


class ConversationNotFoundError(NotFoundError):
    default_message = "Conversation not found"
