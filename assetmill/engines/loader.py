"""
Resolution of engine handler specs into importable objects.

Handler specs use "module.path:Attribute" syntax; dotted attributes are
followed from the imported module (e.g. "pkg.mod:Namespace.Engine").
"""

import importlib
from typing import Any

from assetmill.constants import HANDLER_SPEC_SEPARATOR

from .extensions import EngineRegistryError


class EngineLoadError(EngineRegistryError):
    """Raised when a configured engine handler cannot be imported or resolved."""
    pass


def split_handler_spec(spec: str) -> tuple[str, str]:
    """Split a handler spec into module path and attribute path.

    Raises:
        EngineLoadError: If the spec is not of the form "module:attribute"
    """
    module_path, separator, attribute_path = spec.partition(HANDLER_SPEC_SEPARATOR)

    if not separator or not module_path.strip() or not attribute_path.strip():
        raise EngineLoadError(
            f"Invalid engine handler '{spec}'. Expected 'module.path:Attribute'"
        )

    return module_path.strip(), attribute_path.strip()


def load_engine_handle(spec: str) -> Any:
    """Import and return the object named by a handler spec.

    Args:
        spec: Handler spec such as "assetmill_sass.engine:SassEngine"

    Returns:
        The resolved object, returned as-is (classes are not instantiated)

    Raises:
        EngineLoadError: If the module cannot be imported or the attribute is missing
    """
    module_path, attribute_path = split_handler_spec(spec)

    try:
        handle: Any = importlib.import_module(module_path)
    except ImportError as exc:
        raise EngineLoadError(f"Cannot import engine module '{module_path}': {exc}") from exc

    for attribute in attribute_path.split("."):
        try:
            handle = getattr(handle, attribute)
        except AttributeError as exc:
            raise EngineLoadError(
                f"Engine handler '{attribute_path}' not found in module '{module_path}'"
            ) from exc

    return handle
