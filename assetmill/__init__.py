"""
Assetmill: extension-keyed engine registry for asset pipelines.

Plugins register engines globally; applications configure their own
Environment:

    import assetmill

    assetmill.register_engine(".sass", SassEngine)

    environment = assetmill.Environment("assets")
    environment.register_engine(".foo", FooEngine)
"""

from assetmill.engines.base import EngineTemplate
from assetmill.engines.extensions import (
    EngineRegistryError,
    InvalidExtensionError,
    normalize_extension,
)
from assetmill.engines.registry import (
    EngineRegistry,
    get_global_registry,
    register_engine,
)
from assetmill.environment import Environment

__version__ = "0.1.0"

__all__ = [
    "EngineRegistry",
    "EngineRegistryError",
    "EngineTemplate",
    "Environment",
    "InvalidExtensionError",
    "get_global_registry",
    "normalize_extension",
    "register_engine",
]
