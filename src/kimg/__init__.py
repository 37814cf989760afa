"""GIMP C header image to K-1008 card converter.

Turns an indexed image exported by GIMP as a C source header into one bit-plane
per K-1008 card and writes it as MOS papertape, Intel HEX or CA65 assembly.
It can be invoked through the CLI (``python -m kimg``) or imported.
"""

from .converter import BitPlaneImage, convert_header, convert_to_planes
from .errors import (
    CapacityError,
    ConversionError,
    DimensionMismatchError,
    FormatError,
    IoError,
    MissingDataError,
    PaletteMismatchError,
)
from .header import HeaderImage, parse_header, read_header
from .output import OutputFormat, write_asm, write_output
from .palette import DEFAULT_PALETTE, color_bits, parse_palette, read_palette
from .records import (
    write_ihex_records,
    write_ihex_terminator,
    write_image_records,
    write_papertape_records,
    write_papertape_terminator,
)

__all__ = [
    "BitPlaneImage",
    "CapacityError",
    "ConversionError",
    "DEFAULT_PALETTE",
    "DimensionMismatchError",
    "FormatError",
    "HeaderImage",
    "IoError",
    "MissingDataError",
    "OutputFormat",
    "PaletteMismatchError",
    "color_bits",
    "convert_header",
    "convert_to_planes",
    "parse_header",
    "parse_palette",
    "read_header",
    "read_palette",
    "write_asm",
    "write_ihex_records",
    "write_ihex_terminator",
    "write_image_records",
    "write_output",
    "write_papertape_records",
    "write_papertape_terminator",
]
