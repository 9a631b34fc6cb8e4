"""Feature modules: each pairs domain models with a service over a repository protocol."""

from . import chat, conversations, generation, prompts, templates, users

__all__ = [
    "chat",
    "conversations",
    "generation",
    "prompts",
    "templates",
    "users",
]
