"""Engine configuration.

One explicit value names the provider, model, credentials and limits used to
reach the reasoning engine. ``EngineConfig.from_env()`` builds it from
``DETERMINISHTIC_*`` environment variables.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from .errors import ConfigurationError

PROVIDERS = ("openai", "anthropic")

DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-5-sonnet-latest",
}

DEFAULT_SYSTEM_PROMPT = (
    "You are completing a task for a program. Use the available tools as needed. "
    "When you have the answer, call the `return_result` tool exactly once with the "
    "final value; do not answer in plain text."
)


@dataclass
class RetryConfig:
    max_retries: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0


@dataclass
class CircuitBreakerConfig:
    failure_threshold: int = 5
    reset_time: float = 60.0


@dataclass
class EngineConfig:
    provider: str = "openai"
    model: str | None = None
    api_key: str | None = None
    base_url: str | None = None
    temperature: float = 0.0
    max_tokens: int = 4096
    max_turns: int = 32  # completions per session before giving up
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    retry: RetryConfig = field(default_factory=RetryConfig)
    circuit_breaker: CircuitBreakerConfig = field(default_factory=CircuitBreakerConfig)

    def __post_init__(self) -> None:
        if self.provider not in PROVIDERS:
            raise ConfigurationError(
                f"unknown provider '{self.provider}' (expected one of {', '.join(PROVIDERS)})"
            )
        if self.max_turns < 1:
            raise ConfigurationError("max_turns must be at least 1")
        if self.model is None:
            self.model = DEFAULT_MODELS[self.provider]

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EngineConfig:
        env = os.environ if environ is None else environ
        provider = env.get("DETERMINISHTIC_PROVIDER", "openai").lower()
        fallback_key = "ANTHROPIC_API_KEY" if provider == "anthropic" else "OPENAI_API_KEY"
        retry = RetryConfig(
            max_retries=_int(env, "DETERMINISHTIC_MAX_RETRIES", RetryConfig.max_retries),
        )
        return cls(
            provider=provider,
            model=env.get("DETERMINISHTIC_MODEL") or None,
            api_key=env.get("DETERMINISHTIC_API_KEY") or env.get(fallback_key),
            base_url=env.get("DETERMINISHTIC_BASE_URL") or None,
            temperature=_float(env, "DETERMINISHTIC_TEMPERATURE", 0.0),
            max_tokens=_int(env, "DETERMINISHTIC_MAX_TOKENS", 4096),
            max_turns=_int(env, "DETERMINISHTIC_MAX_TURNS", 32),
            retry=retry,
        )


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}", e) from e


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}", e) from e
