# lexia/llm/__init__.py
"""LLM provider clients and the model resolver."""

from .anthropic_client import AnthropicClient
from .ollama_client import OllamaClient
from .openai_client import OpenAIClient
from .resolver import ModelResolver, parse_model_string
from .types import Completion, TokenUsage

__all__ = [
    "AnthropicClient",
    "OpenAIClient",
    "OllamaClient",
    "ModelResolver",
    "parse_model_string",
    "Completion",
    "TokenUsage",
]
