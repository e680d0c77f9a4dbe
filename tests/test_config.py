"""Tests for configuration management."""

import logging
from pathlib import Path

import pytest

from sanca.config import ScanSettings, getters
from sanca.config.env_loader import get_global_config_path, load_global_config
from sanca.utils.async_utils import safe_async_run
from sanca.utils.logging import configure_logging


def _write_global_config(home: Path, text: str) -> Path:
    config_dir = home / ".sanca"
    config_dir.mkdir()
    config_path = config_dir / "config.yml"
    config_path.write_text(text)
    return config_path


class TestLoadGlobalConfig:
    """Tests for load_global_config."""

    def test_missing_returns_empty(self, isolated_config: Path) -> None:
        assert not get_global_config_path().exists()
        assert load_global_config() == {}

    def test_loads_yml_from_home(self, isolated_config: Path) -> None:
        _write_global_config(isolated_config, "SANCA_USER_AGENT: Mozilla/5.0\nSANCA_HTTP_TIMEOUT: 5\n")

        assert get_global_config_path() == isolated_config / ".sanca" / "config.yml"
        assert load_global_config() == {"SANCA_USER_AGENT": "Mozilla/5.0", "SANCA_HTTP_TIMEOUT": 5}

    def test_malformed_yml_returns_empty(self, isolated_config: Path) -> None:
        _write_global_config(isolated_config, "SANCA_USER_AGENT: [unterminated\n")

        assert load_global_config() == {}

    def test_non_mapping_returns_empty(self, isolated_config: Path) -> None:
        _write_global_config(isolated_config, "- a\n- b\n")

        assert load_global_config() == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        config_path = tmp_path / "custom.yml"
        config_path.write_text("SANCA_NVD_API_KEY: abc\n")

        assert load_global_config(config_path) == {"SANCA_NVD_API_KEY": "abc"}


class TestGetters:
    """Tests for the configuration getters."""

    def test_defaults(self) -> None:
        assert getters.get_user_agent() == "Sanca"
        assert getters.get_http_timeout() == 30.0
        assert getters.get_tcp_read_timeout() == 1.0
        assert getters.get_nvd_url() == getters.DEFAULT_NVD_URL
        assert getters.get_nvd_api_key() is None

    def test_file_beats_default(self, isolated_config: Path) -> None:
        _write_global_config(isolated_config, "SANCA_USER_AGENT: FromFile\n")

        assert getters.get_user_agent() == "FromFile"

    def test_env_beats_file(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_global_config(isolated_config, "SANCA_USER_AGENT: FromFile\n")
        monkeypatch.setenv("SANCA_USER_AGENT", "FromEnv")

        assert getters.get_user_agent() == "FromEnv"

    def test_invalid_timeout_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SANCA_HTTP_TIMEOUT", "soon")
        monkeypatch.setenv("SANCA_TCP_READ_TIMEOUT", "-1")

        assert getters.get_http_timeout() == getters.DEFAULT_HTTP_TIMEOUT
        assert getters.get_tcp_read_timeout() == getters.DEFAULT_TCP_READ_TIMEOUT

    def test_timeout_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SANCA_TCP_READ_TIMEOUT", "2.5")

        assert getters.get_tcp_read_timeout() == 2.5

    def test_cache_dir_defaults_to_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)

        assert getters.get_cache_dir() == tmp_path

    def test_cache_dir_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SANCA_CACHE_DIR", str(tmp_path / "cache"))

        assert getters.get_cache_dir() == tmp_path / "cache"


class TestScanSettings:
    """Tests for ScanSettings.load."""

    def test_load_reads_configuration(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SANCA_HTTP_TIMEOUT", "5")
        monkeypatch.setenv("SANCA_NVD_API_KEY", "secret")

        settings = ScanSettings.load()

        assert settings.http_timeout == 5.0
        assert settings.nvd_api_key == "secret"
        assert settings.use_cache is True

    def test_overrides_win_unless_none(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SANCA_USER_AGENT", "FromEnv")

        assert ScanSettings.load(user_agent="FromCli").user_agent == "FromCli"
        assert ScanSettings.load(user_agent=None).user_agent == "FromEnv"
        assert ScanSettings.load(use_cache=False).use_cache is False

    def test_unknown_override(self) -> None:
        with pytest.raises(TypeError, match="Unknown setting"):
            ScanSettings.load(colour="blue")


class TestLogging:
    """Tests for the rich logging setup."""

    def test_levels(self) -> None:
        assert configure_logging().level == logging.WARNING
        assert configure_logging(verbose=True).level == logging.INFO
        assert configure_logging(verbose=True, debug=True).level == logging.DEBUG

    def test_handler_is_replaced(self) -> None:
        configure_logging()
        logger = configure_logging(debug=True)

        assert len(logger.handlers) == 1
        assert logger.propagate is False


class TestSafeAsyncRun:
    """Tests for running coroutines from synchronous code."""

    def test_without_running_loop(self) -> None:
        async def answer() -> int:
            return 42

        assert safe_async_run(answer()) == 42

    async def test_inside_running_loop(self) -> None:
        async def fail() -> None:
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            safe_async_run(fail())
