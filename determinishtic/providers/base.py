"""Provider base: transient-failure retry and a circuit breaker around ``_do_complete``."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from typing import NoReturn

from ..config import CircuitBreakerConfig, RetryConfig
from ..errors import LLMError
from ..types import CompletionParams, CompletionResult

logger = logging.getLogger(__name__)


def transient_status(status_code: int | None) -> bool:
    """Timeouts, conflicts, rate limits and server-side errors are worth another attempt."""
    if status_code is None:
        return False
    return status_code in (408, 409, 429) or status_code >= 500


def error_code(status_code: int | None) -> str:
    if status_code is None:
        return "LLM_CONNECTION"
    if status_code in (401, 403):
        return "LLM_AUTH"
    if status_code == 429:
        return "LLM_RATE_LIMIT"
    if status_code >= 500:
        return "LLM_SERVER"
    return "LLM_BAD_REQUEST"


class BaseLLMProvider:
    """Subclasses implement ``_do_complete`` and say which of their SDK's errors are transient.

    Only transient failures are retried and counted by the circuit breaker.
    Anything else is raised on the first attempt, mapped to ``LLMError`` when
    ``_classify`` recognizes it.
    """

    name = "base"

    def __init__(
        self,
        retry: RetryConfig | None = None,
        circuit_breaker: CircuitBreakerConfig | None = None,
    ) -> None:
        self._retry = retry or RetryConfig()
        self._cb = circuit_breaker or CircuitBreakerConfig()
        self._failures = 0
        self._opened_at = 0.0

    async def complete(self, params: CompletionParams) -> CompletionResult:
        self._check_circuit()
        attempt = 0
        while True:
            try:
                result = await self._do_complete(params)
            except Exception as e:
                if not self._is_transient(e):
                    self._raise(e)
                self._record_failure()
                if attempt >= self._retry.max_retries:
                    logger.warning("%s call failed after %d attempt(s): %s", self.name, attempt + 1, e)
                    self._raise(e)
                delay = self._delay(attempt)
                logger.debug("%s call failed (%s), retrying in %.2fs", self.name, e, delay)
                await asyncio.sleep(delay)
                attempt += 1
            else:
                self._failures = 0
                return result

    async def aclose(self) -> None:
        pass

    # -- Override these --

    async def _do_complete(self, params: CompletionParams) -> CompletionResult:
        raise NotImplementedError

    def _is_transient(self, err: Exception) -> bool:
        return False

    def _classify(self, err: Exception) -> LLMError | None:
        """Map an SDK exception to an LLMError. None leaves it as raised."""
        return err if isinstance(err, LLMError) else None

    # -- Internals --

    def _raise(self, err: Exception) -> NoReturn:
        mapped = self._classify(err)
        if mapped is None or mapped is err:
            raise err
        raise mapped from err

    def _delay(self, attempt: int) -> float:
        delay = min(self._retry.base_delay * (2 ** attempt), self._retry.max_delay)
        return delay + random.uniform(0, delay * 0.1)

    def _record_failure(self) -> None:
        self._failures += 1
        if self._failures >= self._cb.failure_threshold:
            self._opened_at = time.monotonic()

    def _check_circuit(self) -> None:
        if self._failures < self._cb.failure_threshold:
            return
        if time.monotonic() - self._opened_at < self._cb.reset_time:
            raise LLMError("LLM_CIRCUIT_OPEN", self.name, "Circuit breaker open")
        # Half-open: let one call through; a transient failure reopens at once.
        self._failures = self._cb.failure_threshold - 1
