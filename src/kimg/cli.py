"""Command line interface for kimg."""

from __future__ import annotations

import argparse
import sys
import warnings
from dataclasses import dataclass
from pathlib import Path

from .converter import convert_header
from .errors import ConversionError, IoError
from .hardware import (
    DEFAULT_BASE_ADDRESS,
    MAX_BASE_ADDRESS,
    MIN_BASE_ADDRESS,
    check_card_range,
    validate_base_address,
)
from .header import read_header
from .output import OutputFormat, format_help_text, write_output
from .palette import DEFAULT_PALETTE, format_palette_text, read_palette
from .preview import save_preview


@dataclass
class ConvertOptions:
    """Settings for one conversion run."""

    input_path: Path
    output_path: Path | None = None
    palette_path: Path | None = None
    output_format: OutputFormat = OutputFormat.PAP
    base_address: int = DEFAULT_BASE_ADDRESS
    preview_path: Path | None = None


def default_output_path(input_path: Path, output_format: OutputFormat) -> Path:
    return input_path.with_suffix(f".{output_format.extension}")


def parse_base_address(text: str) -> int:
    try:
        return validate_base_address(int(text, 16))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid base address {text!r}: {exc}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kimg",
        description=(
            "Convert GIMP C source header images for display on a KIM-1 with one to four "
            "K-1008 cards.\n\n"
            f"Supported formats:\n{format_help_text()}\n\n"
            "- If no output file is specified, the input file name with the format's\n"
            "  extension is used.\n"
            "- If no palette file is specified, 1-bit black & white is assumed.\n"
            f"- Default base address is {DEFAULT_BASE_ADDRESS:04X}. Min. is "
            f"{MIN_BASE_ADDRESS:04X}, max. is {MAX_BASE_ADDRESS:04X}."
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("-i", "--input", required=True, type=Path, help="GIMP C header image")
    parser.add_argument("-o", "--output", type=Path, help="Output file")
    parser.add_argument("-p", "--palette", type=Path, help="GIMP palette (.gpl) file")
    parser.add_argument(
        "-f",
        "--format",
        choices=[fmt.value for fmt in OutputFormat],
        default=OutputFormat.PAP.value,
        help="Output format",
    )
    parser.add_argument(
        "-a",
        "--address",
        type=parse_base_address,
        default=DEFAULT_BASE_ADDRESS,
        help="Hex base address of the master card",
    )
    parser.add_argument("--preview", type=Path, help="Also write a PNG preview of the result")
    return parser


def options_from_args(args: argparse.Namespace) -> ConvertOptions:
    return ConvertOptions(
        input_path=args.input,
        output_path=args.output,
        palette_path=args.palette,
        output_format=OutputFormat(args.format),
        base_address=args.address,
        preview_path=args.preview,
    )


def run(options: ConvertOptions) -> Path:
    output_path = options.output_path
    if output_path is None:
        output_path = default_output_path(options.input_path, options.output_format)
        print(f"Output file is '{output_path}'")

    if options.palette_path is not None:
        palette = read_palette(options.palette_path)
        print(f"Palette: {format_palette_text(palette)}")
    else:
        palette = DEFAULT_PALETTE
        print("Using default 1-bit black & white palette.")

    header = read_header(options.input_path, palette)
    print(f"Image dimensions: {header.width}x{header.height} pixels")
    print(f"Image size: {len(header.raster)} pixels")

    image = convert_header(header, palette)
    print(f"Color bits: {image.color_bits}")
    check_card_range(options.base_address, image.color_bits)

    try:
        stream = output_path.open("w", encoding="ascii", newline="\n")
    except OSError as exc:
        raise IoError(f"Error opening output file: {output_path}") from exc
    try:
        with stream:
            write_output(stream, image, options.output_format, options.base_address)
    except OSError as exc:
        raise IoError(f"Error writing output file: {output_path}") from exc
    print(f"wrote {output_path}")

    if options.preview_path is not None:
        save_preview(image, palette, options.preview_path)
        print(f"wrote {options.preview_path}")

    return output_path


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            run(options_from_args(args))
        for warning in caught:
            print(f"Warning: {warning.message}")
        return 0
    except ConversionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
