"""PNG preview of converted bit-planes."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from PIL import Image

from .converter import BitPlaneImage
from .errors import IoError
from .palette import Color


def render_preview(image: BitPlaneImage, palette: Sequence[Color]) -> Image.Image:
    """Rebuild the picture the cards will display.

    Indices are read back from the planes, so anything lost in conversion
    (for example the high bit of a non power-of-two palette) shows up here.
    """

    preview = Image.new("P", (image.width, image.height))
    flat = [component for color in palette for component in color]
    preview.putpalette(flat)
    preview.putdata(list(image.to_indices()))
    return preview


def save_preview(image: BitPlaneImage, palette: Sequence[Color], path: str | Path) -> Path:
    path = Path(path)
    try:
        render_preview(image, palette).save(path, format="PNG")
    except OSError as exc:
        raise IoError(f"Failed to write preview: {path}") from exc
    return path
