# lexia/config/loader.py
"""
Configuration loading with auto-creation of defaults.

Uses platformdirs for cross-platform config and data directory management.
"""

import logging
from pathlib import Path

import yaml
from platformdirs import user_config_path, user_data_path

from .schema import LexiaConfig

logger = logging.getLogger(__name__)

APP_NAME = "lexia"


def get_config_path() -> Path:
    """Get path to config file, ensuring config directory exists."""
    config_dir = user_config_path(APP_NAME, ensure_exists=True)
    return config_dir / "config.yaml"


def get_db_path(config: LexiaConfig) -> Path:
    """Resolve the SQLite database path (configured or user data directory)."""
    if config.storage.db_path:
        return Path(config.storage.db_path).expanduser()
    return user_data_path(APP_NAME, ensure_exists=True) / "lexia.db"


def load_config(path: Path | None = None) -> LexiaConfig:
    """
    Load configuration from YAML file.

    If the config file doesn't exist, creates it with defaults.
    Returns validated Pydantic model.

    Args:
        path: Explicit config file (defaults to the user config directory)
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        default_config = LexiaConfig()
        config_dict = default_config.model_dump(mode="json")

        config_path.parent.mkdir(parents=True, exist_ok=True)
        with config_path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(config_dict, f, default_flow_style=False, sort_keys=False)

        logger.info(f"Created default config at {config_path}")
        return default_config

    with config_path.open("r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f) or {}

    config = LexiaConfig(**config_data)
    logger.info(f"Loaded config from {config_path}")
    return config
