"""Resolved settings for one scan run."""

from dataclasses import dataclass, field
from pathlib import Path

from .getters import (
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_NVD_URL,
    DEFAULT_TCP_READ_TIMEOUT,
    DEFAULT_USER_AGENT,
    get_cache_dir,
    get_http_timeout,
    get_nvd_api_key,
    get_nvd_url,
    get_tcp_read_timeout,
    get_user_agent,
)


@dataclass
class ScanSettings:
    """Runtime settings shared by the readers and the enrichment step."""

    user_agent: str = DEFAULT_USER_AGENT
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    tcp_read_timeout: float = DEFAULT_TCP_READ_TIMEOUT
    tcp_max_bytes: int = 200
    cache_dir: Path = field(default_factory=Path.cwd)
    use_cache: bool = True
    nvd_url: str = DEFAULT_NVD_URL
    nvd_api_key: str | None = None

    @classmethod
    def load(cls, config_path: Path | None = None, **overrides) -> "ScanSettings":
        """Resolve settings from the environment and config file.

        Keyword overrides (command-line options) win when not None.
        """
        settings = cls(
            user_agent=get_user_agent(config_path),
            http_timeout=get_http_timeout(config_path),
            tcp_read_timeout=get_tcp_read_timeout(config_path),
            cache_dir=get_cache_dir(config_path),
            nvd_url=get_nvd_url(config_path),
            nvd_api_key=get_nvd_api_key(config_path),
        )
        for name, value in overrides.items():
            if value is None:
                continue
            if not hasattr(settings, name):
                raise TypeError(f"Unknown setting: {name}")
            setattr(settings, name, value)
        return settings
