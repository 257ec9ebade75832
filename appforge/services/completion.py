"""Completion service boundary and its retry wrapper."""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Protocol

import anthropic

from appforge.core.exceptions import (
    CompletionError,
    CompletionTimeoutError,
    MalformedResponseError,
    RateLimitedError,
    TransportError,
)
from appforge.utils.logging import get_logger

logger = get_logger(__name__)


class CompletionClient(Protocol):
    """Sends one prompt and returns the raw text of the reply."""

    async def complete(self, prompt: str, max_tokens: int, temperature: float) -> str:
        ...


class AnthropicCompletionClient:
    """Completion client backed by the Anthropic Messages API.

    SDK-level retries are disabled; retrying is decided by ``RetryPolicy``.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        timeout: float = 120.0,
        client: anthropic.AsyncAnthropic | None = None,
    ):
        if not api_key and client is None:
            logger.warning("completion.api_key_missing")
        self.model = model
        self._client = client or anthropic.AsyncAnthropic(
            api_key=api_key or None,
            timeout=timeout,
            max_retries=0,
        )

    async def complete(self, prompt: str, max_tokens: int, temperature: float) -> str:
        try:
            response = await self._client.messages.create(
                model=self.model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APITimeoutError as e:
            raise CompletionTimeoutError("Completion request timed out", {"model": self.model}) from e
        except anthropic.RateLimitError as e:
            retry_after = e.response.headers.get("retry-after")
            raise RateLimitedError(
                "Completion request was rate limited",
                retry_after=float(retry_after) if retry_after and retry_after.isdigit() else None,
                details={"model": self.model},
            ) from e
        except anthropic.APIStatusError as e:
            raise TransportError(
                f"Completion service returned HTTP {e.status_code}",
                {"model": self.model, "status_code": e.status_code},
            ) from e
        except anthropic.APIConnectionError as e:
            raise TransportError("Could not reach the completion service", {"model": self.model}) from e

        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        if not text.strip():
            raise MalformedResponseError(
                "Completion returned no text",
                {"model": self.model, "stop_reason": response.stop_reason},
            )

        logger.debug(
            "completion.received",
            model=self.model,
            max_tokens=max_tokens,
            stop_reason=response.stop_reason,
            length=len(text),
        )
        return text


@dataclass(frozen=True)
class RetryPolicy:
    """How many attempts a completion call gets.

    Calls whose budget exceeds ``size_threshold`` get exactly one attempt.
    Smaller calls retry retryable failures up to ``max_attempts`` in total,
    waiting ``backoff_seconds * attempt`` between attempts.
    """

    max_attempts: int = 3
    size_threshold: int = 3000
    backoff_seconds: float = 1.0

    def attempts_for(self, max_tokens: int) -> int:
        if max_tokens > self.size_threshold:
            return 1
        return max(1, self.max_attempts)


class RetryingCompletionClient:
    """Applies a ``RetryPolicy`` around another completion client."""

    def __init__(
        self,
        inner: CompletionClient,
        policy: RetryPolicy,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.inner = inner
        self.policy = policy
        self._sleep = sleep

    async def complete(self, prompt: str, max_tokens: int, temperature: float) -> str:
        attempts = self.policy.attempts_for(max_tokens)
        for attempt in range(1, attempts + 1):
            try:
                return await self.inner.complete(prompt, max_tokens, temperature)
            except CompletionError as e:
                if not e.retryable or attempt == attempts:
                    raise
                delay = self.policy.backoff_seconds * attempt
                if isinstance(e, RateLimitedError) and e.retry_after:
                    delay = max(delay, e.retry_after)
                logger.warning(
                    "completion.retrying",
                    attempt=attempt,
                    max_attempts=attempts,
                    error=type(e).__name__,
                    delay=delay,
                )
                await self._sleep(delay)
        raise CompletionError("No completion attempt was made")
