"""
Helpers for registering configured engines.

Provides an explicit entry point for wiring the engines listed in
settings.yaml into the global registry without relying on package import
side effects. Call it once at startup, before creating environments.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from assetmill.logger import UnifiedLogger
from assetmill.settings.store import EngineConfig, get_engines_config

from .extensions import normalize_extension
from .loader import EngineLoadError, load_engine_handle
from .registry import get_global_registry, register_engine

logger = UnifiedLogger(tag="engine-bootstrap")

_configured_registered: bool = False


@logger.trace()
def ensure_configured_engines_registered(
    force: bool = False,
    engines_config: Optional[Dict[str, EngineConfig]] = None,
) -> List[str]:
    """Register the engines configured in settings.yaml with the global registry.

    Args:
        force: Re-register engines even if they've already been added.
        engines_config: Optional pre-loaded engines section; read from settings when omitted.

    Returns:
        Normalized extensions registered by this call.

    Raises:
        InvalidExtensionError: If a configured extension cannot be normalized.
        EngineLoadError: If a configured handler cannot be imported.
    """
    global _configured_registered

    if _configured_registered and not force:
        return []

    registry = get_global_registry()
    config = engines_config if engines_config is not None else get_engines_config()
    registered: List[str] = []

    for extension, engine_config in config.items():
        if not engine_config.enabled:
            continue

        key = normalize_extension(extension)

        if not force and key in registry:
            continue

        with logger.span("load_engine", extension=key, handler=engine_config.handler):
            try:
                handle = load_engine_handle(engine_config.handler)
            except EngineLoadError as exc:
                logger.error(
                    "Failed to load engine",
                    extension=key,
                    handler=engine_config.handler,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                raise

        register_engine(key, handle)
        registered.append(key)

    _configured_registered = True
    logger.info("Configured engines registered", extensions=registered)
    return registered


def reset_bootstrap_state() -> None:
    """Allow the next ensure_configured_engines_registered() call to run again."""
    global _configured_registered
    _configured_registered = False
