"""Bit-plane conversion for K-1008 cards."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .errors import CapacityError, DimensionMismatchError
from .header import HeaderImage, check_dimensions
from .hardware import CARD_MEMORY_SIZE, MAX_CARDS
from .palette import Color, color_bits


@dataclass(frozen=True)
class BitPlaneImage:
    """One packed 1-bit plane per card; plane ``b`` holds bit ``b`` of each index."""

    width: int
    height: int
    planes: Tuple[bytes, ...]

    @property
    def color_bits(self) -> int:
        return len(self.planes)

    @property
    def row_bytes(self) -> int:
        return (self.width + 7) // 8

    def combined(self) -> bytes:
        """Return all planes in one buffer, plane ``b`` at ``b * CARD_MEMORY_SIZE``."""

        buffer = bytearray(CARD_MEMORY_SIZE * MAX_CARDS)
        for index, plane in enumerate(self.planes):
            offset = index * CARD_MEMORY_SIZE
            buffer[offset : offset + len(plane)] = plane
        return bytes(buffer)

    def to_indices(self) -> bytes:
        """Reassemble the palette-index raster from the planes."""

        raster = bytearray(self.width * self.height)
        row_bytes = self.row_bytes
        for y in range(self.height):
            for x in range(self.width):
                byte_offset = y * row_bytes + x // 8
                shift = 7 - (x % 8)
                value = 0
                for bit, plane in enumerate(self.planes):
                    value |= ((plane[byte_offset] >> shift) & 1) << bit
                raster[y * self.width + x] = value
        return bytes(raster)


def convert_to_planes(raster: Sequence[int], width: int, height: int, bits: int) -> BitPlaneImage:
    if bits < 1 or bits > MAX_CARDS:
        raise CapacityError(f"Color bits must be between 1 and {MAX_CARDS}, got {bits}")
    check_dimensions(width, height)
    if len(raster) != width * height:
        raise DimensionMismatchError(
            f"Raster has {len(raster)} pixels, expected {width}x{height}"
        )

    row_bytes = (width + 7) // 8
    if row_bytes * height > CARD_MEMORY_SIZE:
        raise CapacityError(f"Image needs {row_bytes * height} bytes per card")

    planes: List[bytearray] = [bytearray(row_bytes * height) for _ in range(bits)]
    for y in range(height):
        row = y * width
        for group in range(row_bytes):
            x = group * 8
            pixels = raster[row + x : row + min(x + 8, width)]
            for bit, plane in enumerate(planes):
                value = 0
                for offset, index in enumerate(pixels):
                    value |= ((index >> bit) & 1) << (7 - offset)
                plane[group + row_bytes * y] = value

    return BitPlaneImage(width, height, tuple(bytes(plane) for plane in planes))


def convert_header(image: HeaderImage, palette: Sequence[Color]) -> BitPlaneImage:
    return convert_to_planes(image.raster, image.width, image.height, color_bits(palette))
