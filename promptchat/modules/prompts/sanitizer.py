"""Length checks and whitespace normalization for free-text user input."""

from __future__ import annotations

import re
from typing import Any

from promptchat.core.exceptions import ValidationError

_WHITESPACE_RUN = re.compile(r"\s+")


class InputSanitizer:
    def __init__(self, min_length: int = 5, max_length: int = 2000) -> None:
        self.min_length = min_length
        self.max_length = max_length

    def validate(self, value: Any) -> str:
        """Return the trimmed input with every whitespace run collapsed to one space.

        The upper bound applies to the raw input, the lower bound to the
        normalized result, so the returned text is never shorter than ``min_length``.
        """
        if value is None or not isinstance(value, str):
            raise ValidationError("The user prompt is required")
        if len(value) > self.max_length:
            raise ValidationError(f"The prompt cannot exceed {self.max_length} characters")
        cleaned = _WHITESPACE_RUN.sub(" ", value.strip())
        if len(cleaned) < self.min_length:
            raise ValidationError(f"The prompt must be at least {self.min_length} characters long")
        return cleaned
