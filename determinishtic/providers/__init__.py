"""LLM providers and the factory that picks one from an EngineConfig."""

from __future__ import annotations

from ..config import CircuitBreakerConfig, EngineConfig, RetryConfig
from ..types import LLMProvider
from .anthropic import AnthropicProvider
from .base import BaseLLMProvider
from .openai import OpenAIProvider


def create_provider(config: EngineConfig) -> BaseLLMProvider:
    if config.provider == "anthropic":
        return AnthropicProvider(config)
    return OpenAIProvider(config)


__all__ = [
    "LLMProvider", "BaseLLMProvider", "RetryConfig", "CircuitBreakerConfig",
    "OpenAIProvider", "AnthropicProvider", "create_provider",
]
