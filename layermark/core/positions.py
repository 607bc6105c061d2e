"""
Placement Tables
================
Maps the nine named positions to pixel coordinates on a canvas.

Technical Notes:
- Side margin is 10px, top margin is 50px
- Marks are placed by their top-left corner
- Text is placed by its left baseline, so the middle row is offset
  downwards (H/2 + h/2) instead of upwards (H/2 - h/2)
- Unknown names fall back to top_left
- Explicit (x, y) pairs pass through unchanged
"""

import logging
from enum import Enum
from typing import Callable, Dict, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

SIDE_MARGIN = 10
TOP_MARGIN = 50


class NamedPosition(str, Enum):
    """The nine anchor keywords accepted by ``add_mark`` and ``add_text``."""

    TOP_LEFT = "top_left"
    TOP_CENTER = "top_center"
    TOP_RIGHT = "top_right"
    MIDDLE_LEFT = "middle_left"
    CENTER = "center"
    MIDDLE_RIGHT = "middle_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_CENTER = "bottom_center"
    BOTTOM_RIGHT = "bottom_right"


Position = Union[str, NamedPosition, Sequence[float]]
Point = Tuple[float, float]

# (canvas_size, item_size) -> coordinate
_Axis = Callable[[float, float], float]


def _near(canvas: float, item: float) -> float:
    return SIDE_MARGIN


def _top(canvas: float, item: float) -> float:
    return TOP_MARGIN


def _centered(canvas: float, item: float) -> float:
    return canvas / 2 - item / 2


def _far(canvas: float, item: float) -> float:
    return canvas - item - SIDE_MARGIN


def _baseline_centered(canvas: float, item: float) -> float:
    return canvas / 2 + item / 2


MARK_TABLE: Dict[NamedPosition, Tuple[_Axis, _Axis]] = {
    NamedPosition.TOP_LEFT: (_near, _top),
    NamedPosition.TOP_CENTER: (_centered, _top),
    NamedPosition.TOP_RIGHT: (_far, _top),
    NamedPosition.BOTTOM_LEFT: (_near, _far),
    NamedPosition.BOTTOM_CENTER: (_centered, _far),
    NamedPosition.BOTTOM_RIGHT: (_far, _far),
    NamedPosition.CENTER: (_centered, _centered),
    NamedPosition.MIDDLE_LEFT: (_near, _centered),
    NamedPosition.MIDDLE_RIGHT: (_far, _centered),
}

TEXT_TABLE: Dict[NamedPosition, Tuple[_Axis, _Axis]] = {
    **MARK_TABLE,
    NamedPosition.CENTER: (_centered, _baseline_centered),
    NamedPosition.MIDDLE_LEFT: (_near, _baseline_centered),
    NamedPosition.MIDDLE_RIGHT: (_far, _baseline_centered),
}


def is_explicit(position: Position) -> bool:
    """Return True if ``position`` is an (x, y) pair rather than a name."""
    return not isinstance(position, str) and len(position) == 2


def resolve_name(position: Union[str, NamedPosition]) -> NamedPosition:
    """
    Normalise a position keyword.

    Args:
        position: A ``NamedPosition`` or its string value.

    Returns:
        The matching ``NamedPosition``, or ``TOP_LEFT`` for unknown names.
    """
    try:
        return NamedPosition(position)
    except ValueError:
        logger.debug("Unknown position %r, using top_left", position)
        return NamedPosition.TOP_LEFT


def _lookup(
        table: Dict[NamedPosition, Tuple[_Axis, _Axis]],
        position: Position,
        canvas_width: float,
        canvas_height: float,
        item_width: float,
        item_height: float
) -> Point:
    if is_explicit(position):
        x, y = position
        return x, y

    x_rule, y_rule = table[resolve_name(position)]
    return x_rule(canvas_width, item_width), y_rule(canvas_height, item_height)


def mark_position(
        position: Position,
        canvas_width: float,
        canvas_height: float,
        mark_width: float,
        mark_height: float
) -> Point:
    """
    Top-left corner for a watermark image of the given size.

    Args:
        position: Named position or explicit (x, y).
        canvas_width: Canvas width in pixels.
        canvas_height: Canvas height in pixels.
        mark_width: Scaled watermark width.
        mark_height: Scaled watermark height.

    Returns:
        (x, y) as floats; callers truncate to whole pixels.
    """
    return _lookup(MARK_TABLE, position, canvas_width, canvas_height, mark_width, mark_height)


def text_position(
        position: Position,
        canvas_width: float,
        canvas_height: float,
        text_width: float,
        text_height: float
) -> Point:
    """
    Left-baseline origin for a line of text of the given size.

    Same table as ``mark_position`` except for the middle row, where the
    baseline sits half a text height below the canvas midline.
    """
    return _lookup(TEXT_TABLE, position, canvas_width, canvas_height, text_width, text_height)
