"""Client for the external text generation API."""

from .client import API_KEY_PREFIX, GenerationClient
from .models import ClientState, ConfigurationReport, GenerationMetadata, GenerationResult, TokenUsage

__all__ = [
    "API_KEY_PREFIX",
    "ClientState",
    "ConfigurationReport",
    "GenerationClient",
    "GenerationMetadata",
    "GenerationResult",
    "TokenUsage",
]
