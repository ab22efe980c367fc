# lexia/llm/openai_client.py
"""OpenAI client (also serves OpenAI-compatible endpoints via base_url)."""

import logging
from collections.abc import AsyncIterator

from openai import AsyncOpenAI

from .types import Completion, TokenUsage

logger = logging.getLogger(__name__)


class OpenAIClient:
    """Async OpenAI chat completions client."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: int = 90,
    ):
        """
        Initialize OpenAI client.

        Args:
            api_key:  OpenAI API key (None = OPENAI_API_KEY from the environment)
            base_url: Override for OpenAI-compatible servers
            timeout:  Request timeout in seconds
        """
        self.base_url = base_url
        self._api_key = api_key
        self._timeout = timeout
        self._client: AsyncOpenAI | None = None

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy-loaded OpenAI client."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self._api_key, base_url=self.base_url, timeout=self._timeout
            )
        return self._client

    async def complete(
        self,
        messages: list[dict],
        model: str,
        temperature: float | None = None,
        max_tokens: int = 4096,
        json_mode: bool = False,
    ) -> Completion:
        """Single non-streaming completion, JSON object mode when requested."""
        logger.info(f"OpenAI.complete: model={model}, messages={len(messages)}")
        kwargs: dict = {"model": model, "messages": messages, "max_tokens": max_tokens}
        if temperature is not None:
            kwargs["temperature"] = temperature
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = await self.client.chat.completions.create(**kwargs)
        text = ""
        if response.choices:
            text = response.choices[0].message.content or ""
        usage = response.usage
        return Completion(
            text=text,
            model=model,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
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
        """Stream text deltas. thinking_budget is accepted for interface parity and ignored."""
        logger.info(f"OpenAI.stream: model={model}, messages={len(messages)}")
        kwargs: dict = {
            "model": model,
            "messages": messages,
            "max_tokens": max_tokens,
            "stream": True,
            "stream_options": {"include_usage": True},
        }
        if temperature is not None:
            kwargs["temperature"] = temperature

        stream = await self.client.chat.completions.create(**kwargs)
        async for chunk in stream:
            if chunk.usage is not None and usage is not None:
                usage.input_tokens = chunk.usage.prompt_tokens
                usage.output_tokens = chunk.usage.completion_tokens
            delta = chunk.choices[0].delta if chunk.choices else None
            if delta and delta.content:
                yield delta.content

    async def health_check(self) -> bool:
        """Check the API is reachable by listing models."""
        try:
            await self.client.models.list()
            return True
        except Exception as e:
            logger.error(f"OpenAI health check failed: {e}")
            return False

    async def close(self) -> None:
        """Close the async client if initialized."""
        if self._client is not None:
            await self._client.close()
            self._client = None
