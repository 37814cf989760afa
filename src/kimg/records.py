"""Checksummed load records: MOS papertape and (simplified) Intel HEX.

Papertape record (24 data bytes max)::

    ;LLAAAADD...DDCCCC

``CCCC`` is the 16-bit sum of the count, both address bytes and the data.
The file ends with ``;00`` + record count + byte-sum of the record count.

Intel HEX record (32 data bytes max)::

    :LLAAAA00DD...DDCC

``CC`` is the two's complement of the 8-bit sum of count, address bytes and
data. The file ends with ``:00000001FF``.
"""

from __future__ import annotations

from typing import Callable, TextIO

from .converter import BitPlaneImage
from .errors import IoError
from .hardware import CARD_MEMORY_SIZE, MAX_COL_BYTES, check_card_range

PAPERTAPE_BYTES_PER_RECORD = 24
IHEX_BYTES_PER_RECORD = 32
IHEX_TERMINATOR = ":00000001FF\n"

# Images wider than this many pixels are written as one flat stream per plane.
FLAT_WIDTH_THRESHOLD = (MAX_COL_BYTES - 1) * 8

RecordWriter = Callable[[TextIO, int, bytes], int]
TerminatorWriter = Callable[[TextIO, int], None]


def write_text(stream: TextIO, text: str) -> None:
    try:
        stream.write(text)
    except OSError as exc:
        raise IoError(f"Error writing to file: {exc}") from exc


def _record_sum(address: int, chunk: bytes) -> int:
    return len(chunk) + ((address >> 8) & 0xFF) + (address & 0xFF) + sum(chunk)


def _chunks(address: int, data: bytes, size: int):
    for start in range(0, len(data), size):
        yield (address + start) & 0xFFFF, data[start : start + size]


def write_papertape_records(stream: TextIO, address: int, data: bytes) -> int:
    records = 0
    for record_address, chunk in _chunks(address, data, PAPERTAPE_BYTES_PER_RECORD):
        checksum = _record_sum(record_address, chunk) & 0xFFFF
        write_text(stream, f";{len(chunk):02X}{record_address:04X}{chunk.hex().upper()}{checksum:04X}\n")
        records += 1
    return records


def write_papertape_terminator(stream: TextIO, lines: int) -> None:
    # The trailing field is the byte-sum of the record count, not a data checksum.
    lines &= 0xFFFF
    write_text(stream, f";00{lines:04X}{((lines >> 8) & 0xFF) + (lines & 0xFF):04X}\n")


def write_ihex_records(stream: TextIO, address: int, data: bytes) -> int:
    records = 0
    for record_address, chunk in _chunks(address, data, IHEX_BYTES_PER_RECORD):
        checksum = -_record_sum(record_address, chunk) & 0xFF
        write_text(stream, f":{len(chunk):02X}{record_address:04X}00{chunk.hex().upper()}{checksum:02X}\n")
        records += 1
    return records


def write_ihex_terminator(stream: TextIO, lines: int) -> None:
    write_text(stream, IHEX_TERMINATOR)


def plane_address(base_address: int, plane: int) -> int:
    return base_address + plane * CARD_MEMORY_SIZE


def write_image_records(
    stream: TextIO,
    image: BitPlaneImage,
    base_address: int,
    write_records: RecordWriter,
    write_terminator: TerminatorWriter,
) -> int:
    """Write every plane of ``image`` and the terminator; return the record count.

    Narrow images get one record group per pixel row so that each row lands at
    its own ``MAX_COL_BYTES`` aligned address on the card. Wider images already
    fill the card rows, so each plane is written as one flat stream.
    """

    check_card_range(base_address, image.color_bits)

    memory = image.combined()
    plane_size = image.row_bytes * image.height
    lines = 0
    row_bytes = image.row_bytes
    for index in range(image.color_bits):
        offset = index * CARD_MEMORY_SIZE
        plane = memory[offset : offset + plane_size]
        address = plane_address(base_address, index)
        if image.width > FLAT_WIDTH_THRESHOLD:
            lines += write_records(stream, address, plane)
        else:
            for row in range(image.height):
                data = plane[row * row_bytes : (row + 1) * row_bytes]
                lines += write_records(stream, address + row * MAX_COL_BYTES, data)

    write_terminator(stream, lines)
    return lines
