"""GIMP palette (.gpl) reading."""

from __future__ import annotations

import math
import re
import warnings
from pathlib import Path
from typing import List, Sequence, Tuple

from .errors import CapacityError, FormatError, IoError
from .hardware import MAX_CARDS, MAX_PALETTE_SIZE

Color = Tuple[int, int, int]
Palette = Tuple[Color, ...]

PALETTE_SIGNATURE = "GIMP Palette"
DEFAULT_PALETTE: Palette = ((0, 0, 0), (255, 255, 255))

# Up to three leading decimal fields; anything after them (the color name) is ignored.
_COLOR_LINE = re.compile(r"\s*(\d+)(?:\s+(\d+)(?:\s+(\d+))?)?")


def _parse_color_line(line: str, lineno: int) -> Color | None:
    match = _COLOR_LINE.match(line)
    if match is None:
        return None
    values = [int(value) for value in match.groups() if value is not None]
    if len(values) != 3:
        raise FormatError(f"Bad palette file: line {lineno} has {len(values)} color components")
    if any(value > 255 for value in values):
        raise FormatError(f"Bad palette file: line {lineno} has a component above 255")
    return values[0], values[1], values[2]


def parse_palette(text: str) -> Palette:
    lines = text.splitlines()
    if not lines or lines[0].rstrip() != PALETTE_SIGNATURE:
        raise FormatError("Unknown palette file format")

    colors: List[Color] = []
    for lineno, line in enumerate(lines[1:], start=2):
        color = _parse_color_line(line, lineno)
        if color is None:
            continue
        if len(colors) == MAX_PALETTE_SIZE:
            raise CapacityError(f"Too many colors (max. is {MAX_PALETTE_SIZE})")
        colors.append(color)

    if len(colors) < 2:
        raise FormatError("Palette must define at least 2 colors")
    if len(colors) & (len(colors) - 1):
        warnings.warn(
            f"Palette has {len(colors)} colors; only the first "
            f"{1 << color_bits(colors)} are fully representable",
            RuntimeWarning,
            stacklevel=2,
        )
    return tuple(colors)


def read_palette(path: str | Path) -> Palette:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise IoError(f"Error opening palette file: {path}") from exc
    return parse_palette(text)


def color_bits(palette: Sequence[Color]) -> int:
    """Number of bit-planes (cards) needed for ``palette``."""

    bits = int(math.log2(len(palette))) if palette else 0
    if bits < 1 or bits > MAX_CARDS:
        raise CapacityError(f"Palette of {len(palette)} colors needs 1 to {MAX_CARDS} cards")
    return bits


def format_palette_text(palette: Sequence[Color]) -> str:
    entries = [f"{idx}: ({r},{g},{b})" for idx, (r, g, b) in enumerate(palette)]
    return ", ".join(entries)
