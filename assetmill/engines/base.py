"""
Base class for engine handlers.

The registry accepts any object as an engine handle; subclassing
EngineTemplate is the recommended way to write one.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union


class EngineTemplate(ABC):
    """Base class for engines bound to a filename extension.

    An engine transforms the content of one asset type, e.g. a CoffeeScript
    engine registered under `.coffee` turns `application.js.coffee` into
    JavaScript.
    """

    #: MIME type of the engine's output, if it produces a fixed one
    default_mime_type: Optional[str] = None

    def __init__(self, file: Union[str, Path], data: str):
        """
        Args:
            file: Path of the asset being processed
            data: Source content of the asset
        """
        self.file = Path(file)
        self.data = data

    @abstractmethod
    def evaluate(self, context: Any, locals: Optional[Dict[str, Any]] = None) -> str:
        """Render the asset and return the processed content.

        Args:
            context: Pipeline-provided rendering context
            locals: Optional local variables made available to the template

        Returns:
            The transformed content
        """
        pass
