"""
Project runtime package.

Import concrete functionality from explicit submodules:
- `assetmill.runtime.paths` for system root and file locations
"""

__all__: list[str] = []
