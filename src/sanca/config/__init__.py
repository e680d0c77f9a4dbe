"""
Configuration management for sanca.

Supports multiple configuration sources in order of priority:
1. Command-line options (highest priority)
2. Environment variables
3. Global config file (~/.sanca/config.yml)
4. Default values (lowest priority)
"""

from .env_loader import get_global_config_path, load_global_config
from .getters import (
    get_cache_dir,
    get_config,
    get_http_timeout,
    get_nvd_api_key,
    get_nvd_url,
    get_tcp_read_timeout,
    get_user_agent,
)
from .settings import ScanSettings

__all__ = [
    # env_loader
    "get_global_config_path",
    "load_global_config",
    # getters
    "get_cache_dir",
    "get_config",
    "get_http_timeout",
    "get_nvd_api_key",
    "get_nvd_url",
    "get_tcp_read_timeout",
    "get_user_agent",
    # settings
    "ScanSettings",
]
