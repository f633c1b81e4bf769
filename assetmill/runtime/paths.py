"""
Runtime-aware path helpers.

Provides centralized access to the system root, which holds settings.yaml
and the activity log. The root comes from AppSettings (ASSETMILL_SYSTEM_ROOT)
and falls back to a directory under the working directory.
"""

from pathlib import Path

from assetmill.constants import ACTIVITY_LOG_FILENAME, SETTINGS_FILENAME

# Default root when ASSETMILL_SYSTEM_ROOT is unset
_DEFAULT_SYSTEM_ROOT = ".assetmill"


def get_system_root() -> Path:
    """Return the active system root (settings, activity log)."""
    # Deferred: assetmill.settings imports this module through its store
    from assetmill.settings import get_app_settings

    configured = get_app_settings().system_root
    return configured if configured is not None else Path(_DEFAULT_SYSTEM_ROOT)


def get_settings_path() -> Path:
    """Return the settings.yaml path under the system root."""
    return get_system_root() / SETTINGS_FILENAME


def get_activity_log_path() -> Path:
    """Return the activity log path under the system root."""
    return get_system_root() / ACTIVITY_LOG_FILENAME
