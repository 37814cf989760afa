"""Output format selection and the CA65 assembly emitter."""

from __future__ import annotations

from enum import Enum
from typing import TextIO

from .converter import BitPlaneImage
from .hardware import CARD_NAMES
from .records import (
    write_ihex_records,
    write_ihex_terminator,
    write_image_records,
    write_papertape_records,
    write_papertape_terminator,
    write_text,
)

ASM_BYTES_PER_LINE = 16


class OutputFormat(Enum):
    PAP = "pap"
    IHEX = "ihex"
    ASM = "asm"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def extension(self) -> str:
        return self.value


_DESCRIPTIONS = {
    OutputFormat.PAP: "MOS Papertape (default)",
    OutputFormat.IHEX: "Intel HEX",
    OutputFormat.ASM: "CA65 assembly code",
}


def format_help_text() -> str:
    return "\n".join(f"{fmt.value}\t- {fmt.description}" for fmt in OutputFormat)


def write_asm(stream: TextIO, image: BitPlaneImage) -> None:
    lines = [f"X_SIZE\t= {image.width}", f"Y_SIZE\t= {image.height}"]
    for index, plane in enumerate(image.planes):
        lines.extend(["", "", f"{CARD_NAMES[index]}:"])
        for start in range(0, len(plane), ASM_BYTES_PER_LINE):
            chunk = plane[start : start + ASM_BYTES_PER_LINE]
            lines.append("\t\t.BYTE\t" + ", ".join(f"${value:02x}" for value in chunk))
    write_text(stream, "\n".join(lines) + "\n")


def write_output(
    stream: TextIO,
    image: BitPlaneImage,
    output_format: OutputFormat,
    base_address: int,
) -> int:
    """Serialize ``image``; returns the number of load records (0 for assembly)."""

    if output_format is OutputFormat.PAP:
        return write_image_records(
            stream, image, base_address, write_papertape_records, write_papertape_terminator
        )
    if output_format is OutputFormat.IHEX:
        return write_image_records(
            stream, image, base_address, write_ihex_records, write_ihex_terminator
        )
    if output_format is OutputFormat.ASM:
        write_asm(stream, image)
        return 0
    raise ValueError(f"Unknown format: {output_format}")
