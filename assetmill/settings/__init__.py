"""
Application settings and configuration health utilities.

Provides a single typed interface for environment-driven settings along with
helpers to diagnose configured engines that cannot be loaded.
"""

from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from assetmill.engines.extensions import InvalidExtensionError, normalize_extension
from assetmill.engines.loader import EngineLoadError, load_engine_handle
from assetmill.settings.store import (
    EngineConfig,
    SettingsError,
    get_engines_config,
    get_general_settings,
)

__all__ = [
    "AppSettings",
    "ConfigurationIssue",
    "ConfigurationStatus",
    "SettingsError",
    "get_app_settings",
    "logfire_enabled",
    "refresh_app_settings_cache",
    "validate_settings",
]


class ConfigurationIssue(BaseModel):
    """Represents a configuration validation issue."""

    name: str
    message: str
    severity: str  # 'error' or 'warning'


class ConfigurationStatus(BaseModel):
    """Aggregated configuration validation results."""

    issues: List[ConfigurationIssue] = Field(default_factory=list)
    engine_availability: Dict[str, bool] = Field(default_factory=dict)

    @property
    def errors(self) -> List[ConfigurationIssue]:
        """Return error-severity issues."""
        return [issue for issue in self.issues if issue.severity == "error"]

    @property
    def warnings(self) -> List[ConfigurationIssue]:
        """Return warning-severity issues."""
        return [issue for issue in self.issues if issue.severity == "warning"]

    @property
    def is_healthy(self) -> bool:
        """Return True when no error-severity issues exist."""
        return not self.errors

    def add_issue(self, name: str, message: str, severity: str = "error") -> None:
        """Append an issue to the collection."""
        self.issues.append(ConfigurationIssue(name=name, message=message, severity=severity))


class AppSettings(BaseSettings):
    """
    Infrastructure settings loaded from environment variables.

    Only infrastructure-level values live in the environment. Engine
    configuration and feature toggles are kept in settings.yaml.
    """

    model_config = SettingsConfigDict(env_file=None, extra="ignore", case_sensitive=True)

    system_root: Optional[Path] = Field(default=None, alias="ASSETMILL_SYSTEM_ROOT")
    logfire_token: Optional[str] = Field(default=None, alias="LOGFIRE_TOKEN")

    @field_validator("system_root", mode="before")
    @classmethod
    def _expand_system_root(cls, value):
        """Expand user paths to Path instances."""
        if value in (None, ""):
            return None
        if isinstance(value, Path):
            return value.expanduser()
        return Path(value).expanduser()


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """
    Load application settings from environment variables.
    """
    return AppSettings()


def refresh_app_settings_cache() -> None:
    """Clear cached settings so future calls reload from environment."""
    get_app_settings.cache_clear()  # type: ignore[attr-defined]


def logfire_enabled() -> bool:
    """Return the `logfire` general setting, defaulting to disabled."""
    entry = get_general_settings().get("logfire")
    return bool(entry and getattr(entry, "value", False))


def validate_settings(
    engines_config: Optional[Dict[str, EngineConfig]] = None,
) -> ConfigurationStatus:
    """
    Validate the configured engines.

    Each enabled engine must have a valid extension key and a handler that
    imports. Disabled engines are reported as unavailable without an issue.

    Args:
        engines_config: Optional pre-loaded engines section.

    Returns:
        ConfigurationStatus describing any issues discovered.
    """
    status = ConfigurationStatus()
    engines = engines_config if engines_config is not None else get_engines_config()

    for extension, engine_config in engines.items():
        if not engine_config.enabled:
            status.engine_availability[extension] = False
            continue

        try:
            key = normalize_extension(extension)
        except InvalidExtensionError as exc:
            status.engine_availability[extension] = False
            status.add_issue(name=f"engine:{extension}", message=str(exc))
            continue

        try:
            load_engine_handle(engine_config.handler)
        except EngineLoadError as exc:
            status.engine_availability[key] = False
            status.add_issue(name=f"engine:{key}", message=str(exc))
            continue

        status.engine_availability[key] = True

    return status
