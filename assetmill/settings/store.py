"""
Settings file loader and helpers.

Provides typed access to `settings.yaml` under the system root, covering
general settings and the engines that bootstrap registers globally.
"""

from __future__ import annotations

import os
import shutil
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel, Field, ValidationError

from assetmill.runtime.paths import get_settings_path


SETTINGS_TEMPLATE = Path(__file__).parent / "settings.template.yaml"


class SettingsError(Exception):
    """Raised when application settings are invalid or unavailable."""


class SettingsEntry(BaseModel):
    """Single general settings entry."""

    value: Any
    description: str | None = None
    restart_required: bool = False


class EngineConfig(BaseModel):
    """Configuration for a single engine entry, keyed by extension."""

    handler: str
    description: str | None = None
    enabled: bool = True


class SettingsFile(BaseModel):
    """Root schema for settings.yaml content."""

    settings: Dict[str, SettingsEntry] = Field(default_factory=dict)
    engines: Dict[str, EngineConfig] = Field(default_factory=dict)


def _ensure_settings_file(target_path: Path) -> None:
    """Ensure the settings file exists at the target path, seeding from template if missing."""
    target_path.parent.mkdir(parents=True, exist_ok=True)

    if target_path.exists():
        return

    if not SETTINGS_TEMPLATE.exists():
        raise FileNotFoundError(f"Default settings template missing: {SETTINGS_TEMPLATE}")

    shutil.copyfile(SETTINGS_TEMPLATE, target_path)


@lru_cache(maxsize=1)
def load_settings() -> SettingsFile:
    """
    Load complete settings.yaml configuration with caching.

    Returns:
        SettingsFile model for general settings and engines.

    Raises:
        SettingsError: If the file content does not match the schema.
    """
    settings_file = get_active_settings_path()

    with open(settings_file, "r", encoding="utf-8") as handle:
        raw_data = yaml.safe_load(handle) or {}

    if not isinstance(raw_data, dict):
        raise SettingsError(f"Invalid settings.yaml configuration: expected a mapping in {settings_file}")

    for section in ("settings", "engines"):
        if raw_data.get(section) is None:
            raw_data[section] = {}

    try:
        return SettingsFile.model_validate(raw_data)
    except ValidationError as exc:
        raise SettingsError(f"Invalid settings.yaml configuration: {exc}") from exc


def refresh_settings_cache() -> None:
    """Clear the settings cache so future calls reload from disk."""
    load_settings.cache_clear()  # type: ignore[attr-defined]


def save_settings(settings: SettingsFile) -> None:
    """Persist settings configuration to disk using atomic write."""
    path = get_active_settings_path()
    data = settings.model_dump(mode="python")

    tmp_path = path.with_suffix(".tmp")
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(tmp_path, "w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False, allow_unicode=False)

    os.replace(tmp_path, path)
    refresh_settings_cache()


def get_active_settings_path() -> Path:
    """Return the active settings file path, ensuring it exists."""
    path = get_settings_path()
    _ensure_settings_file(path)
    return path


def get_general_settings() -> Dict[str, SettingsEntry]:
    """Get general settings section."""
    return load_settings().settings


def get_engines_config() -> Dict[str, EngineConfig]:
    """Get engines configuration section from settings."""
    return load_settings().engines
