"""Prompt-injection filters.

The denylist filter is a substring heuristic: trivially bypassed by paraphrase
or encoding, so it is one layer of defence and not a security boundary. Any
object satisfying :class:`InjectionFilter` can replace it.
"""

from __future__ import annotations

from typing import Iterable, Protocol

from promptchat.core.exceptions import SecurityError

DEFAULT_DENYLIST: tuple[str, ...] = (
    # instruction overrides
    "ignore previous instructions",
    "ignore all previous",
    # role spoofing
    "system:",
    "assistant:",
    # markup and script injection
    "```",
    "<script>",
    "</script>",
    "javascript:",
    "data:text/html",
)


class InjectionFilter(Protocol):
    def reject_injection(self, value: str) -> str:
        """Return ``value`` unchanged or raise :class:`SecurityError`."""
        ...


class DenylistInjectionFilter:
    def __init__(self, phrases: Iterable[str] = DEFAULT_DENYLIST) -> None:
        self.phrases = tuple(phrase.lower() for phrase in phrases)

    def reject_injection(self, value: str) -> str:
        lowered = value.lower()
        for phrase in self.phrases:
            if phrase in lowered:
                raise SecurityError()
        return value
