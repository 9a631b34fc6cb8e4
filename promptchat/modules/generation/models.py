"""Value objects produced by the generation client."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ClientState(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class TokenUsage:
    input: int
    output: int

    @property
    def total(self) -> int:
        return self.input + self.output


@dataclass(slots=True, frozen=True)
class GenerationMetadata:
    model: str
    response_time_seconds: float
    stop_reason: Optional[str]
    temperature: float
    max_tokens: int


@dataclass(slots=True, frozen=True)
class GenerationResult:
    text: str
    usage: TokenUsage
    metadata: GenerationMetadata


@dataclass(slots=True)
class ConfigurationReport:
    valid: bool
    issues: list[str] = field(default_factory=list)
