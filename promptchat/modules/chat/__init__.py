"""Chat completion orchestration."""

from .service import ChatCompletion, ChatCompletionCommand, ChatService, response_length_for

__all__ = ["ChatCompletion", "ChatCompletionCommand", "ChatService", "response_length_for"]
