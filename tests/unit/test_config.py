"""Tests for configuration module."""

from __future__ import annotations

import pytest

from notebook_certs import __version__
from notebook_certs.config import (
    ConfigurationError,
    DownloadSettings,
    get_settings,
    reload_settings,
)


class TestDownloadSettings:
    """Tests for download settings."""

    def test_defaults(self) -> None:
        """Test default values."""
        settings = DownloadSettings()
        assert settings.timeout_seconds == 30.0
        assert settings.chunk_size == 65536
        assert settings.user_agent == f"notebook-certs/{__version__}"

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test loading from environment variables."""
        monkeypatch.setenv("NOTEBOOK_CERTS_TIMEOUT_SECONDS", "5.5")
        monkeypatch.setenv("NOTEBOOK_CERTS_CHUNK_SIZE", "1024")
        monkeypatch.setenv("NOTEBOOK_CERTS_USER_AGENT", "examples/1.0")

        settings = DownloadSettings()
        assert settings.timeout_seconds == 5.5
        assert settings.chunk_size == 1024
        assert settings.user_agent == "examples/1.0"

    def test_empty_strings_use_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Empty environment values fall back to field defaults."""
        monkeypatch.setenv("NOTEBOOK_CERTS_TIMEOUT_SECONDS", "")
        monkeypatch.setenv("NOTEBOOK_CERTS_CHUNK_SIZE", "")
        monkeypatch.setenv("NOTEBOOK_CERTS_USER_AGENT", "")

        settings = DownloadSettings()
        assert settings.timeout_seconds == 30.0
        assert settings.chunk_size == 65536
        assert settings.user_agent == f"notebook-certs/{__version__}"


class TestSettingsCache:
    """Tests for the cached settings accessors."""

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_reload_settings_picks_up_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert get_settings().download.timeout_seconds == 30.0
        monkeypatch.setenv("NOTEBOOK_CERTS_TIMEOUT_SECONDS", "12")

        assert reload_settings().download.timeout_seconds == 12.0

    @pytest.mark.parametrize(
        ("name", "value"),
        [
            ("NOTEBOOK_CERTS_TIMEOUT_SECONDS", "0"),
            ("NOTEBOOK_CERTS_TIMEOUT_SECONDS", "-3"),
            ("NOTEBOOK_CERTS_CHUNK_SIZE", "0"),
            ("NOTEBOOK_CERTS_CHUNK_SIZE", "not-a-number"),
        ],
    )
    def test_invalid_values_raise_configuration_error(
        self, monkeypatch: pytest.MonkeyPatch, name: str, value: str
    ) -> None:
        monkeypatch.setenv(name, value)

        with pytest.raises(ConfigurationError):
            reload_settings()

    def test_unprefixed_download_variable_is_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A stray ``DOWNLOAD`` variable must not be parsed into the nested settings."""
        monkeypatch.setenv("DOWNLOAD", "not json")
        monkeypatch.setenv("NOTEBOOK_CERTS_CHUNK_SIZE", "2048")

        assert reload_settings().download.chunk_size == 2048
