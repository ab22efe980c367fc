# lexia/llm/resolver.py
"""Maps "<provider>/<model-id>" strings to a provider client."""

import logging
from typing import Any

from lexia.config.schema import ProvidersConfig

from .anthropic_client import AnthropicClient
from .ollama_client import OllamaClient
from .openai_client import OpenAIClient

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("anthropic", "openai", "ollama")


def parse_model_string(model_string: str) -> tuple[str, str]:
    """
    Split a model string into (provider, model_id).

    Raises:
        ValueError: If the string has no provider prefix or the provider is unknown
    """
    provider, sep, model_id = model_string.partition("/")
    if not sep or not model_id or provider not in SUPPORTED_PROVIDERS:
        raise ValueError(
            f"Unsupported model string '{model_string}'. "
            f"Expected '<provider>/<model>' with provider in {', '.join(SUPPORTED_PROVIDERS)}"
        )
    return provider, model_id


class ModelResolver:
    """Creates one client per provider on first use and reuses it."""

    def __init__(self, providers: ProvidersConfig | None = None):
        self.providers = providers or ProvidersConfig()
        self._clients: dict[str, Any] = {}

    def _create_client(self, provider: str) -> Any:
        if provider == "anthropic":
            cfg = self.providers.anthropic
            return AnthropicClient(api_key=cfg.api_key, timeout=cfg.timeout)
        if provider == "openai":
            cfg = self.providers.openai
            return OpenAIClient(api_key=cfg.api_key, base_url=cfg.base_url, timeout=cfg.timeout)
        cfg = self.providers.ollama
        return OllamaClient(base_url=cfg.base_url, timeout=cfg.timeout)

    def resolve(self, model_string: str) -> tuple[Any, str]:
        """
        Resolve a model string to (client, model_id).

        Args:
            model_string: e.g. "anthropic/claude-sonnet-4-20250514"

        Returns:
            The provider client and the bare model id to pass to it
        """
        provider, model_id = parse_model_string(model_string)
        if provider not in self._clients:
            logger.info(f"Creating {provider} client")
            self._clients[provider] = self._create_client(provider)
        return self._clients[provider], model_id

    async def close(self) -> None:
        """Close every client created so far."""
        for provider, client in list(self._clients.items()):
            try:
                await client.close()
            except Exception as e:
                logger.warning(f"Failed to close {provider} client: {e}")
        self._clients.clear()
