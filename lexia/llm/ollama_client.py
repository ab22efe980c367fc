# lexia/llm/ollama_client.py
"""Ollama client for locally hosted models."""

import logging
from collections.abc import AsyncIterator

import httpx
from ollama import AsyncClient

from .types import Completion, TokenUsage

logger = logging.getLogger(__name__)


class OllamaClient:
    """Async Ollama chat client with the same surface as the hosted providers."""

    def __init__(self, base_url: str = "http://localhost:11434", timeout: int = 300):
        """
        Initialize Ollama client.

        Args:
            base_url: Ollama API base URL (e.g., "http://localhost:11434")
            timeout: Request timeout in seconds (generous for model loading)
        """
        self.base_url = base_url
        self.client = AsyncClient(host=base_url, timeout=httpx.Timeout(timeout))

    @staticmethod
    def _options(temperature: float | None, max_tokens: int) -> dict:
        options: dict = {"num_predict": max_tokens}
        if temperature is not None:
            options["temperature"] = temperature
        return options

    async def complete(
        self,
        messages: list[dict],
        model: str,
        temperature: float | None = None,
        max_tokens: int = 4096,
        json_mode: bool = False,
    ) -> Completion:
        """Single non-streaming chat call; format="json" when json_mode is set."""
        logger.info(f"Ollama.complete: model={model}, messages={len(messages)}")
        kwargs: dict = {
            "model": model,
            "messages": messages,
            "stream": False,
            "options": self._options(temperature, max_tokens),
        }
        if json_mode:
            kwargs["format"] = "json"

        response = await self.client.chat(**kwargs)
        return Completion(
            text=response.message.content or "",
            model=model,
            input_tokens=response.prompt_eval_count or 0,
            output_tokens=response.eval_count or 0,
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
        """Stream content chunks; counters come with the final (done) chunk."""
        logger.info(f"Ollama.stream: model={model}, messages={len(messages)}")
        async for chunk in await self.client.chat(
            model=model,
            messages=messages,
            stream=True,
            options=self._options(temperature, max_tokens),
        ):
            if content := chunk.message.content:
                yield content
            if chunk.done and usage is not None:
                usage.input_tokens = chunk.prompt_eval_count or 0
                usage.output_tokens = chunk.eval_count or 0

    async def health_check(self) -> bool:
        """Check the Ollama server is reachable."""
        try:
            await self.client.list()
            return True
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return False

    async def close(self) -> None:
        # ollama.AsyncClient wraps an httpx.AsyncClient
        await self.client._client.aclose()
