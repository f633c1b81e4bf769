"""
Core system constants.

Basic constants that are used across multiple modules.

Only place true invariants here (separators, file names, logger names).
Deployment-specific paths live in assetmill.runtime.paths; use those helpers
rather than adding env-derived values here.
"""

from __future__ import annotations


# Separator that prefixes every normalized extension key
EXTENSION_SEPARATOR = "."

# Files kept under the system root
SETTINGS_FILENAME = "settings.yaml"
ACTIVITY_LOG_FILENAME = "activity.log"

# Activity log rotation
ACTIVITY_LOG_MAX_BYTES = 1_048_576
ACTIVITY_LOG_BACKUP_COUNT = 5

# Separator between module path and attribute in engine handler specs,
# e.g. "assetmill_sass.engine:SassEngine"
HANDLER_SPEC_SEPARATOR = ":"

# Activity scopes
GLOBAL_SCOPE = "global"
ENVIRONMENT_SCOPE = "environment"
