"""
Engine package.

Import specific helpers from their dedicated modules, e.g.:
- `assetmill.engines.registry`
- `assetmill.engines.extensions`
- `assetmill.engines.bootstrap`
"""

__all__: list[str] = []
