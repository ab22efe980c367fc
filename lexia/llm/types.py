# lexia/llm/types.py
"""Normalized LLM response types shared by all client implementations."""

from dataclasses import dataclass


@dataclass
class Completion:
    """A normalized non-streaming completion from any LLM provider."""

    text: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


@dataclass
class TokenUsage:
    """Token counters filled in by a client once a stream is exhausted."""

    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


def split_system(messages: list[dict]) -> tuple[str | None, list[dict]]:
    """Separate system messages from the conversation (Anthropic takes them apart)."""
    system_parts = [m["content"] for m in messages if m["role"] == "system"]
    rest = [m for m in messages if m["role"] != "system"]
    return ("\n\n".join(system_parts) if system_parts else None), rest
