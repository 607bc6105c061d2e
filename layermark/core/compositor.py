"""
Watermark Compositor
====================
Composites scaled watermark images and text onto a base image using
PIL/Pillow, then exports the result as JPEG or PNG.

Technical Notes:
- The canvas is an RGBA copy of the base image laid over opaque black
- Watermarks scale from the base width; their aspect ratio is kept
- Each mark/text is baked into the canvas when added, in call order
- Overlays are drawn on a transparent layer and alpha-composited, so
  watermark alpha channels and text opacity are honoured
- export() reports failure by returning False rather than raising
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont, ImageOps

from .colors import gd_alpha_to_opacity, hex_to_rgb
from .config import TextConfig
from .errors import DecodeError, InvalidStateError
from .positions import NamedPosition, Point, Position, is_explicit, mark_position, text_position

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Export format -> (file extension, Pillow format name)
EXPORT_FORMATS: Dict[str, Tuple[str, str]] = {
    "jpg": ("jpg", "JPEG"),
    "jpeg": ("jpg", "JPEG"),
    "png": ("png", "PNG"),
}


@dataclass
class MarkRecord:
    """A watermark image that has been applied to the canvas."""
    image: Image.Image
    scaled_width: float
    scaled_height: float
    position: Position
    origin: Tuple[int, int]


def _decode(path: PathLike) -> Image.Image:
    """
    Open and fully decode an image file.

    Raises:
        DecodeError: If the file is missing, unreadable or not an image.
    """
    try:
        image = Image.open(path)
        image.load()
    except OSError as exc:
        # UnidentifiedImageError and FileNotFoundError are both OSErrors
        raise DecodeError(path, str(exc)) from exc
    return image


class WatermarkSession:
    """
    A mutable watermarking session over one base image.

    Every mutator returns the session, so calls can be chained::

        ok = (WatermarkSession()
              .load("photo.jpg")
              .add_mark("logo.png", scale=0.2, position="bottom_right")
              .add_text("(c) 2024", {"font": "DejaVuSans.ttf", "color": "#fff"})
              .export("photo_marked", "png", 6))

    The session owns the base image, the canvas and all mark images;
    ``release()`` (or leaving a ``with`` block) closes them together.
    """

    DEFAULT_SCALE = 0.15
    DEFAULT_POSITION = NamedPosition.TOP_LEFT
    DEFAULT_FILENAME = "watermarked"
    DEFAULT_FORMAT = "jpg"
    DEFAULT_QUALITY = 100

    def __init__(self):
        self._base_image: Optional[Image.Image] = None
        self._canvas: Optional[Image.Image] = None
        self._width = 0
        self._height = 0
        self._marks: List[MarkRecord] = []
        self._cached_fonts: Dict[Tuple[str, int], ImageFont.FreeTypeFont] = {}

    def __enter__(self) -> "WatermarkSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_loaded(self) -> bool:
        return self._canvas is not None

    def _require_canvas(self) -> Image.Image:
        if self._canvas is None:
            raise InvalidStateError("No image loaded; call load() first")
        return self._canvas

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) of the base image."""
        self._require_canvas()
        return self._width, self._height

    @property
    def image(self) -> Image.Image:
        """A copy of the canvas in its current state."""
        return self._require_canvas().copy()

    @property
    def marks(self) -> Tuple[MarkRecord, ...]:
        return tuple(self._marks)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def load(self, path: PathLike, auto_orient: bool = False) -> "WatermarkSession":
        """
        Load the base image and start a fresh canvas from it.

        Args:
            path: Path to the base image.
            auto_orient: Apply the EXIF Orientation tag before measuring.

        Returns:
            The session, for chaining.

        Raises:
            DecodeError: If the image cannot be decoded.
        """
        base_image = _decode(path)
        if auto_orient:
            oriented = ImageOps.exif_transpose(base_image)
            if oriented is not base_image:
                base_image.close()
                base_image = oriented

        if self.is_loaded:
            self.release()

        self._base_image = base_image
        self._width, self._height = base_image.size

        canvas = Image.new("RGBA", base_image.size, (0, 0, 0, 255))
        self._canvas = Image.alpha_composite(canvas, base_image.convert("RGBA"))
        canvas.close()

        logger.debug("Loaded %s (%dx%d)", path, self._width, self._height)
        return self

    def add_mark(
            self,
            path: PathLike,
            scale: float = DEFAULT_SCALE,
            position: Position = DEFAULT_POSITION
    ) -> "WatermarkSession":
        """
        Resize a watermark image relative to the base width and paste it.

        Args:
            path: Path to the watermark image.
            scale: Target width as a fraction of the base image width.
            position: Named position or explicit top-left (x, y).

        Returns:
            The session, for chaining.

        Raises:
            DecodeError: If the watermark cannot be decoded.
            InvalidStateError: If no base image is loaded.
        """
        canvas = self._require_canvas()
        mark = _decode(path)
        mark_width, mark_height = mark.size

        scaled_width = self._width * scale
        scaled_height = (mark_height / mark_width) * scaled_width

        x, y = mark_position(position, self._width, self._height, scaled_width, scaled_height)
        origin = (int(x), int(y))

        target_size = (max(1, int(scaled_width)), max(1, int(scaled_height)))
        resized = mark.convert("RGBA").resize(target_size, Image.LANCZOS)

        layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
        layer.paste(resized, origin, resized)
        self._composite(layer)

        self._marks.append(MarkRecord(
            image=mark,
            scaled_width=scaled_width,
            scaled_height=scaled_height,
            position=position,
            origin=origin,
        ))

        logger.debug(
            "Mark %s scaled %dx%d -> %.1fx%.1f at %s",
            path, mark_width, mark_height, scaled_width, scaled_height, origin
        )
        return self

    def add_text(
            self,
            text: str,
            config: Union[TextConfig, Mapping[str, Any]]
    ) -> "WatermarkSession":
        """
        Draw a line of text onto the canvas.

        Named positions are resolved with ``text_position``; an explicit
        (x, y) is used as the left-baseline origin.

        Raises:
            InvalidStateError: If no base image is loaded.
            ValueError: If a mapping config has no ``font``.
            OSError: If the font cannot be loaded.
        """
        canvas = self._require_canvas()
        if not isinstance(config, TextConfig):
            config = TextConfig.from_mapping(config)

        font = self._get_font(config.font, config.size)
        fill = (*hex_to_rgb(config.color), gd_alpha_to_opacity(config.opacity))

        if is_explicit(config.position):
            x, y = config.position
        else:
            text_width, text_height = self._measure_text(font, text)
            x, y = self.text_position(config.position, text_width, text_height)
        origin = (int(x), int(y))

        layer = Image.new("RGBA", canvas.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        draw.text(origin, text, font=font, fill=fill, anchor="ls")
        self._composite(layer)

        logger.debug("Text %r drawn at %s", text, origin)
        return self

    def text_position(
            self,
            position: Position,
            text_width: float,
            text_height: float
    ) -> Point:
        """Baseline origin for text of the given size on this canvas."""
        self._require_canvas()
        return text_position(position, self._width, self._height, text_width, text_height)

    def export(
            self,
            filename: PathLike = DEFAULT_FILENAME,
            format: str = DEFAULT_FORMAT,
            quality: int = DEFAULT_QUALITY
    ) -> bool:
        """
        Encode the canvas to ``<filename>.jpg`` or ``<filename>.png``.

        Args:
            filename: Output path without extension.
            format: "jpg", "jpeg" or "png".
            quality: JPEG quality (1-100) or PNG compression level (0-9),
                     passed to the encoder unchanged.

        Returns:
            True if the file was written, False for an unsupported format
            or a failed write.

        Raises:
            InvalidStateError: If no base image is loaded.
        """
        canvas = self._require_canvas()

        try:
            extension, pil_format = EXPORT_FORMATS[format.lower()]
        except KeyError:
            logger.warning("Unsupported export format: %s", format)
            return False

        output_path = Path(f"{filename}.{extension}")
        try:
            if pil_format == "JPEG":
                with canvas.convert("RGB") as rgb_canvas:
                    rgb_canvas.save(output_path, format=pil_format, quality=quality)
            else:
                canvas.save(output_path, format=pil_format, compress_level=quality)
        except (OSError, ValueError) as exc:
            logger.warning("Export to %s failed: %s", output_path, exc)
            return False

        logger.info("Exported %s", output_path)
        return True

    def release(self) -> "WatermarkSession":
        """Close the canvas, base image and every mark image."""
        for record in self._marks:
            record.image.close()
        self._marks.clear()

        if self._canvas is not None:
            self._canvas.close()
            self._canvas = None
        if self._base_image is not None:
            self._base_image.close()
            self._base_image = None

        self._width = self._height = 0
        self._cached_fonts.clear()
        return self

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _composite(self, layer: Image.Image) -> None:
        result = Image.alpha_composite(self._canvas, layer)
        self._canvas.close()
        layer.close()
        self._canvas = result

    def _get_font(self, font_path: PathLike, size: int) -> ImageFont.FreeTypeFont:
        """
        Get or create a cached font object.

        Args:
            font_path: Path to a TrueType/OpenType font.
            size: Font size in pixels.

        Returns:
            FreeTypeFont for measuring and drawing.
        """
        key = (str(font_path), size)
        if key not in self._cached_fonts:
            self._cached_fonts[key] = ImageFont.truetype(str(font_path), size)
        return self._cached_fonts[key]

    @staticmethod
    def _measure_text(font: ImageFont.FreeTypeFont, text: str) -> Tuple[int, int]:
        # Box is relative to the left baseline, matching the draw anchor
        left, top, right, bottom = font.getbbox(text, anchor="ls")
        return abs(right - left), abs(bottom - top)


def add_image_watermark(
        image_path: PathLike,
        mark_path: PathLike,
        filename: PathLike = WatermarkSession.DEFAULT_FILENAME,
        scale: float = WatermarkSession.DEFAULT_SCALE,
        position: Position = WatermarkSession.DEFAULT_POSITION,
        format: str = WatermarkSession.DEFAULT_FORMAT,
        quality: int = WatermarkSession.DEFAULT_QUALITY
) -> bool:
    """
    Convenience function to stamp one watermark image onto a photo.

    Args:
        image_path: Base image path.
        mark_path: Watermark image path.
        filename: Output path without extension.
        scale: Watermark width as a fraction of the base width.
        position: Named position or explicit (x, y).
        format: "jpg", "jpeg" or "png".
        quality: Encoder quality / compression level.

    Returns:
        Result of ``WatermarkSession.export``.
    """
    with WatermarkSession() as session:
        return (session
                .load(image_path)
                .add_mark(mark_path, scale=scale, position=position)
                .export(filename, format, quality))
