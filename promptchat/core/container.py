"""Process-wide service container."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

from promptchat.core.config import Settings, get_settings
from promptchat.infrastructure.database.session import get_engine
from promptchat.modules.generation.client import GenerationClient


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    generation_client: GenerationClient = field(init=False)

    def __post_init__(self) -> None:
        # Constructing the client does not touch the API key; that happens on first use.
        self.generation_client = GenerationClient(self.settings.anthropic)

    def init_infrastructure(self) -> None:
        """Ensure infrastructure singletons (database engine, etc.) are initialised."""
        get_engine()


@lru_cache()
def get_container() -> ApplicationContainer:
    container = ApplicationContainer(settings=get_settings())
    container.init_infrastructure()
    return container


__all__ = ["ApplicationContainer", "get_container"]
