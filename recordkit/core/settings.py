"""Runtime settings for the recordkit tools.

Settings are read from an optional YAML file and validated with pydantic.
Lookup order for the file: explicit path, ``$RECORDKIT_CONFIG``, then
``./recordkit.yaml`` in the working directory. Without any file the defaults
apply.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError

CONFIG_ENV = "RECORDKIT_CONFIG"
HOME_ENV = "RECORDKIT_HOME"
DEFAULT_CONFIG_NAME = "recordkit.yaml"
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


load_dotenv(override=False)


def _home_dir() -> Path:
    env = os.getenv(HOME_ENV)
    if env:
        return Path(env).expanduser()
    return Path.home() / ".recordkit"


def _default_log_dir() -> Path:
    return _home_dir() / "logs"


class Settings(BaseModel):
    """Validated settings payload."""

    model_config = ConfigDict(extra="forbid")

    log_dir: Path = Field(default_factory=_default_log_dir)
    log_level: str = "INFO"
    encoding: str = "utf-8"
    copy_pattern: str = "*.pdf"
    sequence_width: int = Field(default=3, ge=1)

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(sorted(_LOG_LEVELS))}")
        return level

    @field_validator("log_dir")
    @classmethod
    def _expand_dir(cls, value: Path) -> Path:
        return value.expanduser()


_SETTINGS: Settings | None = None


def _resolve_config_path(path: str | Path | None) -> Path | None:
    if path:
        candidate = Path(path).expanduser()
        if not candidate.exists():
            raise ConfigError(f"Settings file not found: {candidate}")
        return candidate
    env = os.getenv(CONFIG_ENV)
    if env:
        candidate = Path(env).expanduser()
        if not candidate.exists():
            raise ConfigError(f"Settings file named by {CONFIG_ENV} not found: {candidate}")
        return candidate
    local = Path.cwd() / DEFAULT_CONFIG_NAME
    if local.exists():
        return local
    return None


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in settings file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")
    return data


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from YAML, falling back to defaults when no file exists."""

    config_path = _resolve_config_path(path)
    if config_path is None:
        return Settings()
    data = _load_yaml(config_path)
    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings in {config_path}: {exc}") from exc


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""

    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = load_settings()
    return _SETTINGS


def set_settings(settings: Settings | None) -> None:
    """Replace the process-wide settings (``None`` forces a reload)."""

    global _SETTINGS
    _SETTINGS = settings


__all__ = [
    "CONFIG_ENV",
    "HOME_ENV",
    "Settings",
    "get_settings",
    "load_settings",
    "set_settings",
]
