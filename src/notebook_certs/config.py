"""Application configuration via Pydantic Settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from notebook_certs import __version__


def _empty_str_to_default_int(v: str | int | None, default: int) -> int:
    """Convert empty strings to default int value."""
    if v == "" or v is None:
        return default
    if isinstance(v, int):
        return v
    return int(v)


def _empty_str_to_default_float(v: str | float | None, default: float) -> float:
    """Convert empty strings to default float value."""
    if v == "" or v is None:
        return default
    if isinstance(v, float):
        return v
    return float(v)


class ConfigurationError(RuntimeError):
    """Raised when download configuration is invalid."""


class DownloadSettings(BaseSettings):
    """Settings for HTTPS downloads made from the example notebooks."""

    model_config = SettingsConfigDict(
        env_prefix="NOTEBOOK_CERTS_",
        extra="ignore",
    )

    timeout_seconds: float = 30.0
    chunk_size: int = 64 * 1024
    user_agent: str = f"notebook-certs/{__version__}"

    @field_validator("timeout_seconds", mode="before")
    @classmethod
    def handle_empty_timeout(cls, v: str | float | None) -> float:
        return _empty_str_to_default_float(v, default=30.0)

    @field_validator("chunk_size", mode="before")
    @classmethod
    def handle_empty_chunk_size(cls, v: str | int | None) -> int:
        return _empty_str_to_default_int(v, default=64 * 1024)

    @field_validator("user_agent", mode="before")
    @classmethod
    def handle_empty_user_agent(cls, v: str | None) -> str:
        if v is None or not str(v).strip():
            return f"notebook-certs/{__version__}"
        return str(v).strip()

    @model_validator(mode="after")
    def validate_limits(self) -> "DownloadSettings":
        if self.timeout_seconds <= 0:
            raise ConfigurationError(
                "Download timeout must be positive. Check NOTEBOOK_CERTS_TIMEOUT_SECONDS."
            )
        if self.chunk_size <= 0:
            raise ConfigurationError(
                "Download chunk size must be positive. Check NOTEBOOK_CERTS_CHUNK_SIZE."
            )
        return self


class Settings(BaseSettings):
    """Aggregate configuration for notebook downloads."""

    model_config = SettingsConfigDict(
        env_prefix="NOTEBOOK_CERTS_",
        extra="ignore",
    )

    download: DownloadSettings = Field(default_factory=DownloadSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached settings instance."""
    try:
        return Settings()
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid notebook-certs configuration: {exc}") from exc


def reload_settings() -> Settings:
    """Force settings cache to reload from environment."""
    get_settings.cache_clear()
    return get_settings()


__all__ = [
    "ConfigurationError",
    "DownloadSettings",
    "Settings",
    "get_settings",
    "reload_settings",
]
