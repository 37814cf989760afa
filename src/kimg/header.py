"""Parser for images exported by GIMP as C source headers.

GIMP's "C source header" export of an indexed image looks like::

    static unsigned int width = 16;
    static unsigned int height = 8;
    ...
    static unsigned char header_data_cmap[256][3] = {
        {  0,  0,  0},
        {255,255,255},
        ...
        };
    static unsigned char header_data[] = {
        0,0,1,1,0,0,1,1,
        ...
        };

Each part is found by its own scan over the lines, so unrelated lines (macros,
comments) may appear anywhere. Pixel values are local color-table indices and
are translated to palette indices while they are read.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple

from .errors import (
    CapacityError,
    DimensionMismatchError,
    FormatError,
    IoError,
    MissingDataError,
    PaletteMismatchError,
)
from .hardware import MAX_IMAGE_SIZE, MAX_ROWS, MAX_WIDTH
from .palette import Color

PIXEL_DATA_MARKER = "static unsigned char header_data[] = {"
PIXEL_DATA_END = "};"

_WIDTH = re.compile(r"\bwidth\s*=\s*(\d+)\s*;")
_HEIGHT = re.compile(r"\bheight\s*=\s*(\d+)\s*;")
_COLOR_TUPLE = re.compile(r"\s*\{\s*(\d+)(?:\s*,\s*(\d+)(?:\s*,\s*(\d+))?)?")
_PIXEL_LINE = re.compile(r"[\d,\s]*")
_PIXEL_TOKEN = re.compile(r"\d+")


@dataclass(frozen=True)
class HeaderImage:
    """Pixel data of a parsed header, already in palette-index space."""

    width: int
    height: int
    translation: Tuple[int, ...]
    raster: bytes


def parse_dimensions(lines: Sequence[str]) -> Tuple[int, int]:
    width = height = 0
    for line in lines:
        match = _WIDTH.search(line)
        if match:
            width = int(match.group(1))
        match = _HEIGHT.search(line)
        if match:
            height = int(match.group(1))
        if width and height:
            return width, height
    raise MissingDataError("Can't get image dimensions")


def parse_color_table(lines: Sequence[str], palette: Sequence[Color]) -> Tuple[int, ...]:
    """Map each ``{r, g, b},`` entry of the header color table to a palette index.

    Exactly ``len(palette)`` entries are read; the table may be longer (GIMP
    pads it to 256 entries) but never shorter.
    """

    ncolors = len(palette)
    translation: List[int] = []
    for lineno, line in enumerate(lines, start=1):
        match = _COLOR_TUPLE.match(line)
        if match is None:
            if translation:
                break
            continue

        components = [int(value) for value in match.groups() if value is not None]
        if len(components) != 3:
            raise FormatError(f"Bad color table entry on line {lineno}: {line.strip()}")
        color = (components[0], components[1], components[2])
        try:
            index = palette.index(color)
        except ValueError:
            raise PaletteMismatchError(
                f"Image color {color} on line {lineno} is not in the palette"
            ) from None
        translation.append(index)
        if len(translation) == ncolors:
            return tuple(translation)

    raise PaletteMismatchError(
        f"Palette does not match: image color table has {len(translation)} "
        f"of {ncolors} colors"
    )


def parse_pixels(lines: Sequence[str], translation: Sequence[int]) -> bytes:
    lines_iter = iter(enumerate(lines, start=1))
    for _lineno, line in lines_iter:
        if line.rstrip() == PIXEL_DATA_MARKER:
            break
    else:
        raise MissingDataError("Can't find image data")

    raster = bytearray()
    for lineno, line in lines_iter:
        if PIXEL_DATA_END in line:
            return bytes(raster)
        if not _PIXEL_LINE.fullmatch(line):
            raise FormatError(f"Bad image data format on line {lineno}")
        for token in _PIXEL_TOKEN.findall(line):
            local_index = int(token)
            if local_index >= len(translation):
                raise FormatError(
                    f"Pixel value {local_index} on line {lineno} is outside the color table"
                )
            if len(raster) == MAX_IMAGE_SIZE:
                raise CapacityError("Image is too big")
            raster.append(translation[local_index])

    raise MissingDataError("Can't find image data end")


def check_dimensions(width: int, height: int) -> None:
    if width > MAX_WIDTH or height > MAX_ROWS:
        raise CapacityError(f"Max. image size is {MAX_WIDTH}x{MAX_ROWS}")


def parse_header(text: str, palette: Sequence[Color]) -> HeaderImage:
    lines = text.splitlines()
    width, height = parse_dimensions(lines)
    check_dimensions(width, height)
    translation = parse_color_table(lines, tuple(palette))
    raster = parse_pixels(lines, translation)
    if len(raster) != width * height:
        raise DimensionMismatchError(
            f"Expected image size is {width * height} pixels, found {len(raster)} (bad image file?)"
        )
    return HeaderImage(width, height, translation, raster)


def read_header(path: str | Path, palette: Sequence[Color]) -> HeaderImage:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise IoError(f"Error opening image file: {path}") from exc
    return parse_header(text, palette)
