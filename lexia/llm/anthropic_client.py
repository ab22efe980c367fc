# lexia/llm/anthropic_client.py
"""
Anthropic Messages API client.

Uses AsyncAnthropic for structured completions and streaming drafts.
"""

import logging
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

from .types import Completion, TokenUsage, split_system

if TYPE_CHECKING:
    import anthropic

logger = logging.getLogger(__name__)


class AnthropicClient:
    """Async client for Claude models."""

    def __init__(self, api_key: str | None = None, timeout: int = 90):
        """
        Initialize Anthropic client.

        Args:
            api_key: Anthropic API key (None = ANTHROPIC_API_KEY from the environment)
            timeout: Request timeout in seconds
        """
        self._api_key = api_key
        self._timeout = timeout
        self._client: "anthropic.AsyncAnthropic | None" = None

    @property
    def client(self) -> "anthropic.AsyncAnthropic":
        """Lazy-loaded Anthropic client."""
        if self._client is None:
            import anthropic

            self._client = anthropic.AsyncAnthropic(
                api_key=self._api_key, timeout=self._timeout
            )
        return self._client

    def _request_kwargs(
        self,
        messages: list[dict],
        model: str,
        temperature: float | None,
        max_tokens: int,
        thinking_budget: int | None = None,
    ) -> dict:
        system, conversation = split_system(messages)
        kwargs: dict = {
            "model": model,
            "max_tokens": max_tokens,
            "messages": conversation,
        }
        if system:
            kwargs["system"] = system
        if thinking_budget:
            # Extended thinking rejects a custom temperature
            kwargs["thinking"] = {"type": "enabled", "budget_tokens": thinking_budget}
        elif temperature is not None:
            kwargs["temperature"] = temperature
        return kwargs

    async def complete(
        self,
        messages: list[dict],
        model: str,
        temperature: float | None = None,
        max_tokens: int = 4096,
        json_mode: bool = False,
    ) -> Completion:
        """
        Single non-streaming completion.

        Anthropic has no JSON response format; json_mode is satisfied by the
        prompt itself and the caller validates the result.
        """
        logger.info(f"Anthropic.complete: model={model}, messages={len(messages)}")
        response = await self.client.messages.create(
            **self._request_kwargs(messages, model, temperature, max_tokens)
        )
        text = "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )
        return Completion(
            text=text,
            model=model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )

    async def stream(
        self,
        messages: list[dict],
        model: str,
        temperature: float | None = None,
        max_tokens: int = 4096,
        thinking_budget: int | None = None,
        usage: TokenUsage | None = None,
    ) -> AsyncIterator[str]:
        """Stream text deltas; thinking blocks are not yielded."""
        logger.info(
            f"Anthropic.stream: model={model}, thinking_budget={thinking_budget}"
        )
        kwargs = self._request_kwargs(
            messages, model, temperature, max_tokens, thinking_budget
        )
        async with self.client.messages.stream(**kwargs) as stream:
            async for text in stream.text_stream:
                yield text
            final = await stream.get_final_message()

        if usage is not None:
            usage.input_tokens = final.usage.input_tokens
            usage.output_tokens = final.usage.output_tokens

    async def health_check(self) -> bool:
        """Check the API is reachable with the configured credentials."""
        try:
            await self.client.models.list(limit=1)
            return True
        except Exception as e:
            logger.error(f"Anthropic health check failed: {e}")
            return False

    async def close(self) -> None:
        """Close the async client if initialized."""
        if self._client is not None:
            await self._client.close()
            self._client = None
