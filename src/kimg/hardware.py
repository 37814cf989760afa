"""K-1008 card geometry and KIM-1 address limits."""

from .errors import CapacityError

# Reference: K-1008 visible memory card (one card per bit-plane)
# Item                  | Value        | Notes
# ----------------------|--------------|-----------------------------------------------
# Card memory           | 8192 bytes   | 320x200 pixels, 1 bit per pixel
# Row stride            | 40 bytes     | 8 pixels per byte, msb = leftmost pixel
# Cards per system      | 1-4          | card N holds bit N of the palette index
# Card base addresses   | 2000h-A000h  | must be aligned to the 8 KiB card size
#
# Card 0 is the "master"; cards 1-3 are "slaves" that follow at consecutive
# 8 KiB boundaries, so a 4-card system based at 2000h occupies 2000h-9FFFh.

MAX_PALETTE_SIZE = 16
MAX_COL_BYTES = 40
MAX_ROWS = 200
MAX_WIDTH = MAX_COL_BYTES * 8
MAX_IMAGE_SIZE = MAX_COL_BYTES * 8 * MAX_ROWS
MAX_CARDS = 4
CARD_MEMORY_SIZE = 8192
MIN_BASE_ADDRESS = 0x2000
MAX_BASE_ADDRESS = 0xA000
DEFAULT_BASE_ADDRESS = MIN_BASE_ADDRESS
ADDRESS_SPACE = 0x10000

CARD_NAMES = ("MASTER", "SLAVE_1", "SLAVE_2", "SLAVE_3")


def validate_base_address(address: int) -> int:
    if address < MIN_BASE_ADDRESS or address > MAX_BASE_ADDRESS:
        raise ValueError(
            f"Base address must be between {MIN_BASE_ADDRESS:04X} and {MAX_BASE_ADDRESS:04X}"
        )
    if address % CARD_MEMORY_SIZE:
        raise ValueError(f"Base address must be a multiple of {CARD_MEMORY_SIZE:04X}")
    return address


def check_card_range(base_address: int, color_bits: int) -> None:
    """Reject a card set whose last card would run past the 64 KiB address space."""

    if base_address + color_bits * CARD_MEMORY_SIZE > ADDRESS_SPACE:
        raise CapacityError(
            f"{color_bits} cards at {base_address:04X} do not fit in the address space"
        )
