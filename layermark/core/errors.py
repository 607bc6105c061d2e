"""
Exception Types
===============
Errors raised by the watermark session.

Encoding failures are reported by ``WatermarkSession.export`` returning
False, and malformed colours silently become black, so neither has an
exception type here.
"""

from pathlib import Path
from typing import Union


class LayermarkError(Exception):
    """Base class for all layermark errors."""


class DecodeError(LayermarkError, OSError):
    """Raised when an input image is missing, unreadable or not a raster image."""

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = Path(path)
        message = f"Cannot decode image: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class InvalidStateError(LayermarkError, RuntimeError):
    """Raised when a session is used before ``load`` or after ``release``."""
