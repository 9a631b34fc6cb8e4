"""Prompt preparation: input sanitizing, injection filtering and template combination."""

from .combiner import CombineOptions, PromptCombination, combine
from .filters import DEFAULT_DENYLIST, DenylistInjectionFilter, InjectionFilter
from .sanitizer import InputSanitizer

__all__ = [
    "CombineOptions",
    "DEFAULT_DENYLIST",
    "DenylistInjectionFilter",
    "InjectionFilter",
    "InputSanitizer",
    "PromptCombination",
    "combine",
]
