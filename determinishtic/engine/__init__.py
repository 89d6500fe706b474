"""Remote engine protocol and the provider-backed implementation."""

from .base import Engine, EngineSession
from .provider import ProviderEngine, ProviderSession

__all__ = ["Engine", "EngineSession", "ProviderEngine", "ProviderSession"]
