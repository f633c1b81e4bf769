"""
Engine registry keyed by filename extension.

An engine is a processor bound to an extension: `application.js.coffee`
means the engine registered under `.coffee` runs on that file. The registry
only stores handles; it never inspects or invokes them.

A process-wide global registry is exposed for plugins:

    register_engine(".sass", SassEngine)

Environments copy it on construction and keep their own registrations
local (see assetmill.environment).
"""

from typing import Any, Dict, List, Optional

from assetmill.constants import GLOBAL_SCOPE
from assetmill.logger import UnifiedLogger

from .extensions import InvalidExtensionError, normalize_extension

# Create module logger
logger = UnifiedLogger(tag="engine-registry")


def describe_handle(handle: Any) -> str:
    """Return a readable dotted name for an engine handle."""
    qualname = getattr(handle, "__qualname__", None) or type(handle).__qualname__
    module = getattr(handle, "__module__", None)
    return f"{module}.{qualname}" if module else qualname


#######################################################################
## Registry Implementation
#######################################################################

class EngineRegistry:
    """Mapping of normalized extension to engine handle.

    Not thread-safe; serialize concurrent registration externally.
    """

    def __init__(self, entries: Optional[Dict[str, Any]] = None):
        """Initialize a registry, optionally seeded with existing entries.

        Args:
            entries: Extension to handle mapping to copy in; keys are normalized
        """
        self._engines: Dict[str, Any] = {}

        for extension, handle in (entries or {}).items():
            self._engines[normalize_extension(extension)] = handle

    def engines(self, ext: Optional[str] = None) -> Any:
        """Return the engine for `ext`, or a copy of the whole mapping.

            registry.engines()
            # -> {".coffee": CoffeeScriptEngine, ...}

            registry.engines("coffee")
            # -> CoffeeScriptEngine

        Args:
            ext: Extension in any spelling accepted by normalize_extension

        Returns:
            The registered handle or None when `ext` is given; otherwise a
            snapshot dict that is independent of the registry
        """
        if ext:
            return self._engines.get(normalize_extension(ext))
        return dict(self._engines)

    @property
    def engine_extensions(self) -> List[str]:
        """Registered extensions in registration order, e.g. ['.coffee', '.sass']."""
        return list(self._engines.keys())

    def register_engine(self, ext: str, handle: Any) -> str:
        """Register `handle` for `ext`, replacing any engine already registered.

        Args:
            ext: Extension in any spelling accepted by normalize_extension
            handle: Engine handle, stored as-is

        Returns:
            The normalized extension the handle was stored under

        Raises:
            InvalidExtensionError: If `ext` cannot be normalized
        """
        extension = normalize_extension(ext)
        previous = self._engines.get(extension)

        if previous is not None and previous is not handle:
            logger.debug(
                "Overriding registered engine",
                extension=extension,
                previous=describe_handle(previous),
                engine=describe_handle(handle),
            )

        self._engines[extension] = handle
        return extension

    def copy(self) -> "EngineRegistry":
        """Return an independent registry seeded from a snapshot of this one."""
        return EngineRegistry(self._engines)

    def __contains__(self, ext: object) -> bool:
        try:
            return normalize_extension(ext) in self._engines
        except InvalidExtensionError:
            return False

    def __len__(self) -> int:
        return len(self._engines)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.engine_extensions!r})"


#######################################################################
## Global Registry Instance
#######################################################################

# Global registry used by plugins and as the seed for new environments
_global_registry = EngineRegistry()


def get_global_registry() -> EngineRegistry:
    """Get the global engine registry instance.

    The global registry starts empty when this module is imported. Configured
    engines are added explicitly by
    assetmill.engines.bootstrap.ensure_configured_engines_registered().

    Returns:
        The global registry instance
    """
    return _global_registry


def reset_global_registry() -> EngineRegistry:
    """Replace the global registry with an empty one and return it.

    Environments created earlier keep their own copies and are unaffected.
    """
    global _global_registry
    _global_registry = EngineRegistry()
    return _global_registry


def register_engine(ext: str, handle: Any) -> None:
    """Register an engine with the global registry.

    Convenience function for plugins registering themselves.

    Args:
        ext: Extension in any spelling accepted by normalize_extension
        handle: Engine handle, stored as-is
    """
    extension = _global_registry.register_engine(ext, handle)
    logger.activity(
        "Registered global engine",
        scope=GLOBAL_SCOPE,
        extension=extension,
        engine=describe_handle(handle),
    )


def engines(ext: Optional[str] = None) -> Any:
    """Look up an engine, or snapshot all engines, in the global registry."""
    return _global_registry.engines(ext)


def engine_extensions() -> List[str]:
    """Return the extensions registered in the global registry."""
    return _global_registry.engine_extensions
