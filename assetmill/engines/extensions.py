"""
Extension normalization.

Every extension key stored in or looked up from an engine registry passes
through normalize_extension() first, so `coffee` and `.coffee` address the
same entry.
"""

from __future__ import annotations

from typing import Any

from assetmill.constants import EXTENSION_SEPARATOR


class EngineRegistryError(Exception):
    """Base exception for engine registry errors."""
    pass


class InvalidExtensionError(EngineRegistryError, ValueError):
    """Raised when an extension cannot be normalized."""
    pass


def normalize_extension(extension: Any) -> str:
    """Return the canonical form of an extension.

    A missing leading separator is added; everything else, including inner
    dots and letter case, is kept as given.

        normalize_extension("coffee")        # -> ".coffee"
        normalize_extension(".coffee")       # -> ".coffee"
        normalize_extension("sass.special")  # -> ".sass.special"

    Args:
        extension: Extension spelling, with or without the leading separator

    Returns:
        The normalized extension key

    Raises:
        InvalidExtensionError: If the value is not a string or has no name part
    """
    if not isinstance(extension, str):
        raise InvalidExtensionError(
            f"Extension must be a string, got {type(extension).__name__}"
        )

    if not extension.startswith(EXTENSION_SEPARATOR):
        extension = EXTENSION_SEPARATOR + extension

    if extension == EXTENSION_SEPARATOR:
        raise InvalidExtensionError("Extension must not be empty")

    return extension
