"""
Shared fixtures for layermark tests.

Run with: python -m pytest tests -v
"""

import sys
from pathlib import Path

import numpy as np
import pytest
from PIL import Image, ImageFont

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

SYSTEM_FONTS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/System/Library/Fonts/Supplemental/Arial.ttf",
    "C:/Windows/Fonts/arial.ttf",
]


def make_gradient_image(path: Path, width: int, height: int, alpha: bool = False) -> Path:
    """Write a simple gradient image and return its path."""
    xs = np.linspace(0, 255, width, dtype=np.uint8)
    ys = np.linspace(0, 255, height, dtype=np.uint8)
    arr = np.zeros((height, width, 4 if alpha else 3), dtype=np.uint8)
    arr[..., 0] = xs[np.newaxis, :]
    arr[..., 1] = ys[:, np.newaxis]
    arr[..., 2] = 128
    if alpha:
        arr[..., 3] = 255

    Image.fromarray(arr).save(path)
    return path


def make_solid_image(path: Path, width: int, height: int, color) -> Path:
    with Image.new("RGBA" if len(color) == 4 else "RGB", (width, height), color) as img:
        img.save(path)
    return path


@pytest.fixture
def base_image(tmp_path) -> Path:
    """1000x800 gradient photo."""
    return make_gradient_image(tmp_path / "base.png", 1000, 800)


@pytest.fixture
def mark_image(tmp_path) -> Path:
    """400x200 opaque red watermark."""
    return make_solid_image(tmp_path / "mark.png", 400, 200, (255, 0, 0, 255))


@pytest.fixture
def font_path(tmp_path) -> Path:
    """A TrueType font from the system, or Pillow's bundled default."""
    for candidate in SYSTEM_FONTS:
        if Path(candidate).exists():
            return Path(candidate)

    default = ImageFont.load_default(size=20)
    font_bytes = getattr(default, "font_bytes", None)
    if not font_bytes:
        pytest.skip("No TrueType font available")

    path = tmp_path / "default.ttf"
    path.write_bytes(font_bytes)
    return path
