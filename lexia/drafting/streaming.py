# lexia/drafting/streaming.py
"""
Draft text streaming with a primary/fallback model strategy.

The primary stream is primed by awaiting its first chunk. If the primary
fails before producing that chunk, the fallback model is tried instead;
once text has been sent the choice is final and later errors propagate.
"""

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any

from lexia.config.schema import DraftingConfig
from lexia.llm.resolver import parse_model_string
from lexia.llm.types import TokenUsage

logger = logging.getLogger(__name__)

# Sent for an empty static document so the response body is never empty
EMPTY_DOCUMENT = "\u00a0"


@dataclass
class DraftStream:
    """A primed text stream plus what is known about how it is produced."""

    chunks: AsyncIterator[str]
    model: str
    used_fallback: bool = False
    usage: TokenUsage = field(default_factory=TokenUsage)


async def _primed(first: str | None, rest: AsyncIterator[str]) -> AsyncIterator[str]:
    if first is not None:
        yield first
    async for chunk in rest:
        yield chunk


async def _static(text: str) -> AsyncIterator[str]:
    yield text


def static_stream(text: str) -> DraftStream:
    """Stream a fixed document (no model call, no tokens)."""
    return DraftStream(chunks=_static(text or EMPTY_DOCUMENT), model="static")


def uses_extended_thinking(config: DraftingConfig, document_type: str, model_string: str) -> bool:
    """Extended thinking applies to the configured types on Anthropic models only."""
    if document_type not in config.extended_thinking_types:
        return False
    provider, _ = parse_model_string(model_string)
    return provider == "anthropic"


async def _open(
    resolver: Any,
    model_string: str,
    messages: list[dict],
    max_tokens: int,
    temperature: float | None,
    thinking_budget: int | None,
    usage: TokenUsage,
) -> tuple[str | None, AsyncIterator[str]]:
    """Start a stream and wait for its first chunk (None if it ends empty)."""
    client, model_id = resolver.resolve(model_string)
    stream = client.stream(
        messages,
        model=model_id,
        temperature=temperature,
        max_tokens=max_tokens,
        thinking_budget=thinking_budget,
        usage=usage,
    )
    try:
        first = await stream.__anext__()
    except StopAsyncIteration:
        first = None
    return first, stream


async def open_draft_stream(
    resolver: Any,
    config: DraftingConfig,
    document_type: str,
    messages: list[dict],
) -> DraftStream:
    """
    Open the draft stream for one request.

    Args:
        resolver: Object with resolve(model_string) -> (client, model_id)
        config: Drafting models and generation settings
        document_type: Selects extended thinking
        messages: System prompt plus the user message

    Raises:
        Exception: Whatever the last attempted model raised before its first chunk
    """
    usage = TokenUsage()
    primary = config.primary_model
    thinking = uses_extended_thinking(config, document_type, primary)

    try:
        first, rest = await _open(
            resolver,
            primary,
            messages,
            config.max_tokens,
            None if thinking else config.temperature,
            config.thinking_budget if thinking else None,
            usage,
        )
        logger.info(f"Drafting {document_type} with {primary} (thinking={thinking})")
        return DraftStream(chunks=_primed(first, rest), model=primary, usage=usage)
    except Exception as e:
        if not config.fallback_model:
            raise
        logger.warning(f"Primary draft model {primary} failed, using fallback: {e}")

    fallback = config.fallback_model
    first, rest = await _open(
        resolver, fallback, messages, config.max_tokens, config.temperature, None, usage
    )
    logger.info(f"Drafting {document_type} with fallback {fallback}")
    return DraftStream(
        chunks=_primed(first, rest), model=fallback, used_fallback=True, usage=usage
    )
