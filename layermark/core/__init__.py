"""
Core Module - Compositing Logic
===============================
Session, placement tables and colour helpers. Raster work is done by Pillow.
"""

from .colors import gd_alpha_to_opacity, hex_to_rgb
from .compositor import MarkRecord, WatermarkSession, add_image_watermark
from .config import TextConfig
from .errors import DecodeError, InvalidStateError, LayermarkError
from .positions import NamedPosition, mark_position, text_position

__all__ = [
    "WatermarkSession",
    "MarkRecord",
    "add_image_watermark",
    "TextConfig",
    "NamedPosition",
    "mark_position",
    "text_position",
    "hex_to_rgb",
    "gd_alpha_to_opacity",
    "LayermarkError",
    "DecodeError",
    "InvalidStateError",
]
