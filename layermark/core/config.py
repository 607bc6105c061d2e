"""
Text Overlay Configuration
==========================
Options accepted by ``WatermarkSession.add_text``.
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Union

from .positions import NamedPosition, Position


@dataclass
class TextConfig:
    """Configuration for a single text overlay."""
    font: Union[str, Path]
    size: int = 20
    color: str = "#000000"
    opacity: int = 0  # 0 (opaque) - 127 (transparent)
    position: Position = NamedPosition.TOP_LEFT

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "TextConfig":
        """
        Build a config from a plain dict.

        Unknown keys are ignored so callers can pass a shared options dict.

        Raises:
            ValueError: If the ``font`` key is missing.
        """
        if "font" not in options:
            raise ValueError("Text config requires a 'font' path")

        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in options.items() if key in known})
