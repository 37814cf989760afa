from typing import Sequence, Tuple

import pytest

Color = Tuple[int, int, int]


def _header_text(
    width: int,
    height: int,
    colors: Sequence[Color],
    pixels: Sequence[int],
    per_line: int = 16,
    cmap_size: int | None = None,
) -> str:
    """Build text shaped like GIMP's C source header export."""

    lines = [
        "/*  GIMP header image file format (INDEXED): /tmp/test.h  */",
        "",
        f"static unsigned int width = {width};",
        f"static unsigned int height = {height};",
        "",
        "/*  Call this macro repeatedly.  After each use, the pixel data can be extracted  */",
        "",
        "#define HEADER_PIXEL(data,pixel) {\\",
        "pixel[0] = header_data_cmap[(unsigned char)data[0]][0]; \\",
        "data ++; }",
        "",
        f"static unsigned char header_data_cmap[{cmap_size or 256}][3] = {{",
    ]
    padded = list(colors) + [(255, 255, 255)] * ((cmap_size or len(colors)) - len(colors))
    lines.extend(f"\t{{{r:3d},{g:3d},{b:3d}}}," for r, g, b in padded)
    lines.append("\t};")
    lines.append("static unsigned char header_data[] = {")
    for start in range(0, len(pixels), per_line):
        lines.append("\t" + ",".join(str(p) for p in pixels[start : start + per_line]) + ",")
    lines.append("\t};")
    return "\n".join(lines) + "\n"


def _palette_text(colors: Sequence[Color]) -> str:
    lines = ["GIMP Palette", "Name: test", "Columns: 4", "#"]
    lines.extend(f"{r:3d} {g:3d} {b:3d}\tUntitled" for r, g, b in colors)
    return "\n".join(lines) + "\n"


@pytest.fixture
def bw_header() -> str:
    # Local index 0 is white and 1 is black, the reverse of the default palette.
    return _header_text(8, 1, [(255, 255, 255), (0, 0, 0)], [1, 1, 1, 1, 0, 0, 0, 0])


@pytest.fixture
def make_header():
    return _header_text


@pytest.fixture
def make_palette_text():
    return _palette_text
