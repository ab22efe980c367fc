# lexia/config/schema.py
"""
Pydantic configuration models for lexia.

All models use extra="ignore" to allow unknown YAML keys without crashing.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class AnthropicConfig(BaseModel):
    """Anthropic API configuration."""

    model_config = ConfigDict(extra="ignore")

    api_key: str | None = Field(
        default=None,
        description="Anthropic API key (None = read ANTHROPIC_API_KEY from the environment)",
    )
    timeout: int = Field(default=90, description="Request timeout in seconds")


class OpenAIConfig(BaseModel):
    """OpenAI (or OpenAI-compatible) API configuration."""

    model_config = ConfigDict(extra="ignore")

    api_key: str | None = Field(
        default=None,
        description="OpenAI API key (None = read OPENAI_API_KEY from the environment)",
    )
    base_url: str | None = Field(
        default=None, description="Override for OpenAI-compatible servers"
    )
    timeout: int = Field(default=90, description="Request timeout in seconds")


class OllamaConfig(BaseModel):
    """Ollama server configuration for local models."""

    model_config = ConfigDict(extra="ignore")

    base_url: str = Field(
        default="http://localhost:11434", description="Ollama API base URL"
    )
    timeout: int = Field(
        default=300, description="Request timeout in seconds (generous for model loading)"
    )


class ProvidersConfig(BaseModel):
    """Credentials and endpoints for every supported model provider."""

    model_config = ConfigDict(extra="ignore")

    anthropic: AnthropicConfig = Field(default_factory=AnthropicConfig)
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    ollama: OllamaConfig = Field(default_factory=OllamaConfig)


class StageModelConfig(BaseModel):
    """Model selection for one analysis stage."""

    model_config = ConfigDict(extra="ignore")

    model: str = Field(description="Model string in '<provider>/<model-id>' form")
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    max_tokens: int = Field(default=4096, ge=1)


class RateLimitConfig(BaseModel):
    """Fixed-window request limit per user."""

    model_config = ConfigDict(extra="ignore")

    max_requests: int = Field(default=5, ge=1)
    window_seconds: int = Field(default=60, ge=1)
    backend: Literal["memory", "sqlite"] = Field(
        default="memory",
        description="'memory' is process-local, 'sqlite' is shared by every process using the database",
    )


_SONNET = "anthropic/claude-sonnet-4-20250514"
_GPT4_TURBO = "openai/gpt-4-turbo"


class EstrategaConfig(BaseModel):
    """Strategic analysis pipeline configuration."""

    model_config = ConfigDict(extra="ignore")

    analysis_version: str = Field(default="1.0.0")
    risk: StageModelConfig = Field(
        default_factory=lambda: StageModelConfig(model=_SONNET, temperature=0.3)
    )
    jurisprudence: StageModelConfig = Field(
        default_factory=lambda: StageModelConfig(model=_GPT4_TURBO, temperature=0.4)
    )
    scenarios: StageModelConfig = Field(
        default_factory=lambda: StageModelConfig(model=_SONNET, temperature=0.4)
    )
    timeline: StageModelConfig = Field(
        default_factory=lambda: StageModelConfig(model=_GPT4_TURBO, temperature=0.3)
    )
    recommendations: StageModelConfig = Field(
        default_factory=lambda: StageModelConfig(model=_SONNET, temperature=0.3)
    )
    rate_limit: RateLimitConfig = Field(
        default_factory=lambda: RateLimitConfig(max_requests=5, window_seconds=60)
    )


class DraftingConfig(BaseModel):
    """Document drafting configuration."""

    model_config = ConfigDict(extra="ignore")

    primary_model: str = Field(default=_SONNET)
    fallback_model: str | None = Field(
        default=_GPT4_TURBO, description="Used when the primary model fails (None to disable)"
    )
    max_tokens: int = Field(default=8192, ge=1)
    temperature: float = Field(default=0.6, ge=0.0, le=2.0)
    thinking_budget: int = Field(
        default=4096, ge=1024, description="Extended thinking budget for complex documents"
    )
    extended_thinking_types: list[str] = Field(
        default_factory=lambda: ["demanda", "contestacion", "casacion", "contrato"]
    )
    credits_enforcement: bool = Field(
        default=False, description="Reject drafting requests once the monthly credits run out"
    )
    rate_limit: RateLimitConfig = Field(
        default_factory=lambda: RateLimitConfig(max_requests=60, window_seconds=60)
    )


class StorageConfig(BaseModel):
    """Database location."""

    model_config = ConfigDict(extra="ignore")

    db_path: str | None = Field(
        default=None, description="SQLite database path (None = user data directory)"
    )


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    model_config = ConfigDict(extra="ignore")

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])


class McpConfig(BaseModel):
    """MCP tool server configuration."""

    model_config = ConfigDict(extra="ignore")

    user_id: str | None = Field(
        default=None, description="Profile id the MCP tools act as"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="ignore")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")


class LexiaConfig(BaseModel):
    """Root configuration for lexia."""

    model_config = ConfigDict(extra="ignore")

    providers: ProvidersConfig = Field(default_factory=ProvidersConfig)
    estratega: EstrategaConfig = Field(default_factory=EstrategaConfig)
    drafting: DraftingConfig = Field(default_factory=DraftingConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    mcp: McpConfig = Field(default_factory=McpConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
