"""
Layermark
=========
Stamp watermark images and text onto photos, then export as JPEG or PNG.

Modules:
    - core: Session, placement tables and colour helpers (Pillow based)

Usage:
    from layermark import WatermarkSession

    with WatermarkSession() as session:
        session.load("photo.jpg").add_mark("logo.png", 0.2, "bottom_right")
        session.export("photo_marked", "jpg", 90)
"""

import logging

__version__ = "1.0.1"
__app_name__ = "Layermark"

from .core import (
    WatermarkSession, MarkRecord, add_image_watermark, TextConfig,
    NamedPosition, mark_position, text_position, hex_to_rgb, gd_alpha_to_opacity,
    LayermarkError, DecodeError, InvalidStateError
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version info
    "__version__",
    "__app_name__",

    # Session
    "WatermarkSession",
    "MarkRecord",
    "add_image_watermark",
    "TextConfig",

    # Geometry and colour
    "NamedPosition",
    "mark_position",
    "text_position",
    "hex_to_rgb",
    "gd_alpha_to_opacity",

    # Errors
    "LayermarkError",
    "DecodeError",
    "InvalidStateError",
]
