"""
Colour Helpers
==============
Conversions for text overlay colours.

Technical Notes:
- Hex parsing never raises: bad lengths give black, and non-hex
  characters inside a channel are skipped
- Text opacity uses the 7-bit alpha convention (0 = opaque, 127 = clear)
"""

import string
from typing import Tuple

MAX_GD_ALPHA = 127

_HEX_DIGITS = set(string.hexdigits)


def _parse_channel(pair: str) -> int:
    digits = "".join(ch for ch in pair if ch in _HEX_DIGITS)
    return int(digits, 16) if digits else 0


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    """
    Convert a ``#RGB`` or ``#RRGGBB`` string to an RGB tuple.

    Args:
        value: Hex colour, with or without the leading ``#``.

    Returns:
        (r, g, b) tuple. Any length other than 3 or 6 digits gives (0, 0, 0).
    """
    hex_value = value.lstrip("#")

    if len(hex_value) == 6:
        pairs = (hex_value[0:2], hex_value[2:4], hex_value[4:6])
    elif len(hex_value) == 3:
        pairs = tuple(ch * 2 for ch in hex_value)
    else:
        return 0, 0, 0

    r, g, b = (_parse_channel(pair) for pair in pairs)
    return r, g, b


def gd_alpha_to_opacity(alpha: int) -> int:
    """Map a 0 (opaque) .. 127 (transparent) alpha onto an 8-bit opacity."""
    opacity = 255 - round(alpha * 255 / MAX_GD_ALPHA)
    return max(0, min(255, opacity))
