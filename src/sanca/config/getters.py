"""Configuration getter functions."""

import logging
import os
from pathlib import Path
from typing import Any

from .env_loader import load_global_config

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Sanca"
DEFAULT_HTTP_TIMEOUT = 30.0
DEFAULT_TCP_READ_TIMEOUT = 1.0
DEFAULT_NVD_URL = "https://services.nvd.nist.gov/rest/json/cves/2.0"


def get_config(key: str, default: Any = None, config_path: Path | None = None) -> Any:
    """
    Get configuration value with priority:
    1. Environment variable
    2. Global config file
    3. Default value

    Args:
        key: Configuration key, e.g. ``SANCA_USER_AGENT``
        default: Default value if not found
        config_path: Optional global config file, ~/.sanca/config.yml by default

    Returns:
        Configuration value or default
    """
    env_value = os.environ.get(key)
    if env_value:
        return env_value

    global_config = load_global_config(config_path)
    if global_config.get(key) is not None:
        return global_config[key]

    return default


def _get_float(key: str, default: float, config_path: Path | None) -> float:
    value = get_config(key, default, config_path)
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning("Invalid value %r for %s, using %s", value, key, default)
        return default
    if number <= 0:
        logger.warning("%s must be positive, using %s", key, default)
        return default
    return number


def get_user_agent(config_path: Path | None = None) -> str:
    """Get the User-Agent sent with probes (default: Sanca)."""
    return str(get_config("SANCA_USER_AGENT", DEFAULT_USER_AGENT, config_path))


def get_http_timeout(config_path: Path | None = None) -> float:
    """Get the per-request HTTP timeout in seconds."""
    return _get_float("SANCA_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT, config_path)


def get_tcp_read_timeout(config_path: Path | None = None) -> float:
    """Get the timeout of each TCP read in seconds."""
    return _get_float("SANCA_TCP_READ_TIMEOUT", DEFAULT_TCP_READ_TIMEOUT, config_path)


def get_cache_dir(config_path: Path | None = None) -> Path:
    """Get the root of the CVE cache (default: current directory)."""
    value = get_config("SANCA_CACHE_DIR", None, config_path)
    return Path(value).expanduser() if value else Path.cwd()


def get_nvd_url(config_path: Path | None = None) -> str:
    return str(get_config("SANCA_NVD_URL", DEFAULT_NVD_URL, config_path))


def get_nvd_api_key(config_path: Path | None = None) -> str | None:
    value = get_config("SANCA_NVD_API_KEY", None, config_path)
    return str(value) if value else None
