"""
Centralized settings for the REXS library.

``RexsSettings`` is a single validated, cached settings object. All fields can
be set via ``REXS_*`` environment variables (e.g. ``REXS_UPGRADE_STRICT_MODE=1``)
or through a ``.env`` file.

Tags:
    rexs-core, configuration, settings, pydantic, caching

Doc-Types:
    api-reference
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rexs.core.errors import ConfigError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _package_version() -> str:
    try:
        return version("rexs-core")
    except PackageNotFoundError:
        return "0.0.0-dev"


class RexsSettings(BaseSettings):
    """REXS library configuration.

    Fields
    ──────
    log_level                     : Structlog log level
    log_json                      : JSON log output (None = auto-detect from tty)
    upgrade_strict_mode           : Default failure mode of the upgrade engine
    upgrader_application_id       : Application id stamped on upgraded models
    upgrader_application_version  : Application version stamped on upgraded models
    changelog_dir                 : Directory with changelog resources (None = packaged)
    """

    model_config = SettingsConfigDict(
        env_prefix="REXS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_json: bool | None = Field(default=None)

    # ── Upgrade ──────────────────────────────────────────────────
    upgrade_strict_mode: bool = Field(default=False)
    upgrader_application_id: str = Field(default="REXS API Upgrader", min_length=1)
    upgrader_application_version: str = Field(default_factory=_package_version)
    changelog_dir: Path | None = Field(
        default=None,
        description="Load changelog resources from this directory instead of the package",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_LOG_LEVELS}, got {value!r}")
        return level


# ── Settings factory with caching ────────────────────────────────────────

_settings_cache: dict[str, RexsSettings] = {}


def get_settings(*, _force_reload: bool = False) -> RexsSettings:
    """Load, validate, and cache a :class:`RexsSettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]
    try:
        settings = RexsSettings()
    except ValidationError as exc:
        raise ConfigError(f"invalid REXS settings: {exc.error_count()} error(s)", cause=exc) from exc
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()


__all__ = ["RexsSettings", "get_settings", "clear_settings_cache"]
