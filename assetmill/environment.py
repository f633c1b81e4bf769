"""
Asset environment.

An Environment owns its own engine registry. It is seeded from a snapshot of
the global registry when constructed; registering engines on the environment
afterwards never touches the global registry, and later global registrations
do not reach existing environments.

    environment = Environment()
    environment.register_engine(".foo", FooEngine)
"""

from pathlib import Path
from typing import Any, List, Optional, Union

from assetmill.constants import ENVIRONMENT_SCOPE
from assetmill.engines.registry import EngineRegistry, describe_handle, get_global_registry
from assetmill.logger import UnifiedLogger

logger = UnifiedLogger(tag="environment", scope=ENVIRONMENT_SCOPE)


class Environment:
    """Host for asset pipeline settings, starting with the engine registry."""

    def __init__(
        self,
        root: Optional[Union[str, Path]] = None,
        registry: Optional[EngineRegistry] = None,
    ):
        """
        Args:
            root: Base path of the assets served by this environment
            registry: Registry to own; defaults to a copy of the global registry
        """
        self.root = Path(root) if root is not None else None
        self._registry = registry if registry is not None else get_global_registry().copy()

    @property
    def registry(self) -> EngineRegistry:
        return self._registry

    def engines(self, ext: Optional[str] = None) -> Any:
        """Return the engine for `ext`, or a snapshot of all engines.

        See EngineRegistry.engines().
        """
        return self._registry.engines(ext)

    @property
    def engine_extensions(self) -> List[str]:
        """Extensions with an engine registered on this environment."""
        return self._registry.engine_extensions

    def register_engine(self, ext: str, handle: Any) -> None:
        """Register `handle` for `ext` on this environment only.

        Raises:
            InvalidExtensionError: If `ext` cannot be normalized
        """
        extension = self._registry.register_engine(ext, handle)
        logger.activity(
            "Registered environment engine",
            extension=extension,
            engine=describe_handle(handle),
            root=str(self.root) if self.root else None,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(root={self.root!r}, engines={self.engine_extensions!r})"
