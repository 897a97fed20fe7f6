"""
Configuration Loading Utilities.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from costdesk.backend.core.errors import ConfigurationError

DEFAULT_CONFIG_PATH = "configs/default_config.yaml"

# Environment variables that override a single config key.
_ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "APP_ENV": ("app", "environment"),
    "BACKEND_URL": ("backend", "url"),
    "BACKEND_API_KEY": ("backend", "api_key"),
    "CORS_ORIGINS": ("app", "cors_origins"),
}


class AppSection(BaseModel):
    name: str = "Construction Project Manager"
    environment: str = "development"
    cors_origins: list[str] = Field(default=["http://localhost:8000"])


class BackendSection(BaseModel):
    url: str = "http://localhost:54321"
    api_key: str = ""
    schema_name: str = Field(default="public", alias="schema")
    timeout_seconds: float = 10.0


class HealthSection(BaseModel):
    table: str = "projects"
    degraded_after_ms: int = 1000


class UiSection(BaseModel):
    max_quick_actions: int = 5
    redirect_delay_seconds: int = 2
    placeholder_after_seconds: float = 3.0
    loading_refresh_seconds: int = 1


class Settings(BaseModel):
    """Validated runtime configuration."""

    app: AppSection = AppSection()
    backend: BackendSection = BackendSection()
    health: HealthSection = HealthSection()
    ui: UiSection = UiSection()


def load_config(config_path: str) -> dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    # Validate required sections
    required_sections = ["app", "backend", "health", "ui"]
    for section in required_sections:
        if section not in config or config[section] is None:
            config[section] = {}

    return config


def apply_env_overrides(config: dict[str, Any], environ: dict[str, str] | None = None) -> dict[str, Any]:
    """
    Overlay environment variables onto a loaded configuration dictionary.

    ``CORS_ORIGINS`` is a comma-separated list; every other override is a
    plain string.
    """
    environ = os.environ if environ is None else environ
    for var, (section, key) in _ENV_OVERRIDES.items():
        value = environ.get(var)
        if not value:
            continue
        if var == "CORS_ORIGINS":
            config.setdefault(section, {})[key] = [v.strip() for v in value.split(",") if v.strip()]
        else:
            config.setdefault(section, {})[key] = value
    return config


def load_settings(config_path: str | None = None, environ: dict[str, str] | None = None) -> Settings:
    """
    Build validated :class:`Settings` from a YAML file and the environment.

    The path defaults to ``$COSTDESK_CONFIG`` and then to
    ``configs/default_config.yaml``.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ConfigurationError: If a value fails validation
    """
    environ = os.environ if environ is None else environ
    path = config_path or environ.get("COSTDESK_CONFIG") or DEFAULT_CONFIG_PATH
    config = apply_env_overrides(load_config(path), environ)
    try:
        return Settings.model_validate(config)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration in {path}: {exc}") from exc
