from pathlib import Path

import pytest
from PIL import Image

from kimg import cli
from kimg.output import OutputFormat


def _write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text)
    return path


def test_default_output_path() -> None:
    assert cli.default_output_path(Path("art/cat.h"), OutputFormat.IHEX) == Path("art/cat.ihex")
    assert cli.default_output_path(Path("cat"), OutputFormat.PAP) == Path("cat.pap")


def test_converts_with_default_palette(tmp_path: Path, bw_header: str, capsys) -> None:
    source = _write(tmp_path, "image.h", bw_header)

    assert cli.main(["-i", str(source)]) == 0

    output = tmp_path / "image.pap"
    assert output.read_text() == ";0120000F0030\n;0000010001\n"
    out = capsys.readouterr().out
    assert "Using default 1-bit black & white palette." in out
    assert "Image dimensions: 8x1 pixels" in out
    assert "Color bits: 1" in out


def test_palette_format_and_address_options(tmp_path: Path, make_header, make_palette_text) -> None:
    greys = [(0, 0, 0), (85, 85, 85), (170, 170, 170), (255, 255, 255)]
    source = _write(tmp_path, "grey.h", make_header(8, 1, greys, [0, 1, 2, 3, 3, 2, 1, 0]))
    palette = _write(tmp_path, "grey.gpl", make_palette_text(greys))
    output = tmp_path / "out.hex"

    result = cli.main(
        ["-i", str(source), "-o", str(output), "-p", str(palette), "-f", "ihex", "-a", "4000"]
    )

    assert result == 0
    lines = output.read_text().splitlines()
    assert [line[:9] for line in lines[:2]] == [":01400000", ":01600000"]
    assert lines[-1] == ":00000001FF"


def test_asm_output(tmp_path: Path, bw_header: str) -> None:
    source = _write(tmp_path, "image.h", bw_header)

    assert cli.main(["-i", str(source), "-f", "asm"]) == 0

    assert "MASTER:\n\t\t.BYTE\t$0f" in (tmp_path / "image.asm").read_text()


def test_preview_png(tmp_path: Path, bw_header: str) -> None:
    source = _write(tmp_path, "image.h", bw_header)
    preview = tmp_path / "preview.png"

    assert cli.main(["-i", str(source), "--preview", str(preview)]) == 0

    with Image.open(preview) as img:
        assert img.size == (8, 1)
        assert img.convert("RGB").getpixel((0, 0)) == (0, 0, 0)
        assert img.convert("RGB").getpixel((7, 0)) == (255, 255, 255)


@pytest.mark.parametrize("address", ["1000", "2100", "zz"])
def test_invalid_address_is_usage_error(tmp_path: Path, bw_header: str, address: str) -> None:
    source = _write(tmp_path, "image.h", bw_header)
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["-i", str(source), "-a", address])
    assert excinfo.value.code == 2


def test_conversion_error_returns_failure(tmp_path: Path, bw_header: str, capsys) -> None:
    source = _write(tmp_path, "image.h", bw_header.replace("header_data[]", "pixels[]"))

    assert cli.main(["-i", str(source)]) == 1

    assert "Error: Can't find image data" in capsys.readouterr().err
    assert not (tmp_path / "image.pap").exists()


def test_missing_input_returns_failure(tmp_path: Path, capsys) -> None:
    assert cli.main(["-i", str(tmp_path / "nope.h")]) == 1
    assert "Error opening image file" in capsys.readouterr().err


def test_palette_warning_is_reported(tmp_path: Path, capsys, make_header, make_palette_text) -> None:
    colors = [(0, 0, 0), (128, 128, 128), (255, 255, 255)]
    source = _write(tmp_path, "three.h", make_header(8, 1, colors, [0, 1, 2, 0, 1, 2, 0, 1]))
    palette = _write(tmp_path, "three.gpl", make_palette_text(colors))

    assert cli.main(["-i", str(source), "-p", str(palette)]) == 0

    assert "Warning: Palette has 3 colors" in capsys.readouterr().out


def test_cards_past_address_space_leave_no_output(
    tmp_path: Path, capsys, make_header, make_palette_text
) -> None:
    colors = [(i * 16, i * 16, i * 16) for i in range(16)]
    source = _write(tmp_path, "deep.h", make_header(8, 1, colors, list(range(8))))
    palette = _write(tmp_path, "deep.gpl", make_palette_text(colors))

    assert cli.main(["-i", str(source), "-p", str(palette), "-a", "A000"]) == 1

    assert not (tmp_path / "deep.pap").exists()
    assert "do not fit in the address space" in capsys.readouterr().err


def test_failure_after_open_is_write_error(
    tmp_path: Path, bw_header: str, capsys, monkeypatch
) -> None:
    source = _write(tmp_path, "image.h", bw_header)

    def broken_write(*args, **kwargs):
        raise OSError("device full")

    monkeypatch.setattr(cli, "write_output", broken_write)

    assert cli.main(["-i", str(source)]) == 1

    assert "Error writing output file" in capsys.readouterr().err
