"""Configuration file loading."""

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


def get_global_config_path() -> Path:
    """Return the path of the global configuration file."""
    return Path.home() / ".sanca" / "config.yml"


def load_global_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load global configuration from ~/.sanca/config.yml."""
    config_path = config_path or get_global_config_path()
    if not config_path.exists():
        return {}
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Ignoring unreadable configuration file %s: %s", config_path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring configuration file %s: not a mapping", config_path)
        return {}
    return data
