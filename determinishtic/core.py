"""Determinishtic — the entry point that hands out think builders."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from .config import EngineConfig
from .engine import Engine, ProviderEngine
from .providers import create_provider
from .think import ThinkBuilder
from .types import LLMProvider

logger = logging.getLogger(__name__)

Output = TypeVar("Output")


class Determinishtic:
    """Blend deterministic Python with LLM-powered reasoning.

    Wraps an engine and provides ``think()`` for building prompts whose tools
    are Python callables. Every awaited builder runs its own session; builders
    created inside a tool callback run nested sessions that share nothing with
    the outer one.
    """

    def __init__(self, engine: Engine, owned_provider: Any = None) -> None:
        self.engine = engine
        self._owned_provider = owned_provider

    @classmethod
    def from_config(cls, config: EngineConfig) -> Determinishtic:
        """Create a provider from the config. It is closed by ``aclose()``."""
        provider = create_provider(config)
        logger.info("using %s provider, model %s", config.provider, config.model)
        return cls(ProviderEngine(provider, config), owned_provider=provider)

    @classmethod
    def from_provider(
        cls, provider: LLMProvider, config: EngineConfig | None = None
    ) -> Determinishtic:
        """Use an existing provider. Its lifecycle stays with the caller."""
        return cls(ProviderEngine(provider, config))

    def think(self, output_type: type[Output] | Any = str) -> ThinkBuilder[Output]:
        return ThinkBuilder(self.engine, output_type)

    async def aclose(self) -> None:
        if self._owned_provider is not None:
            provider, self._owned_provider = self._owned_provider, None
            await provider.aclose()

    async def __aenter__(self) -> Determinishtic:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()
