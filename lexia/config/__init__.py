# lexia/config/__init__.py
"""Configuration system for lexia."""

from .loader import get_config_path, get_db_path, load_config
from .schema import (
    DraftingConfig,
    EstrategaConfig,
    LexiaConfig,
    ProvidersConfig,
    RateLimitConfig,
    StageModelConfig,
)

__all__ = [
    "LexiaConfig",
    "ProvidersConfig",
    "EstrategaConfig",
    "DraftingConfig",
    "RateLimitConfig",
    "StageModelConfig",
    "load_config",
    "get_config_path",
    "get_db_path",
]
