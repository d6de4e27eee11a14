from __future__ import annotations

import pytest

from glyphpress.cli import main
from glyphpress.cli_args import build_argument_parser, get_output_base_name
from glyphpress.core.colour import WHITE, ColourTag
from glyphpress.core.error import FontNotFound
from glyphpress.core.system_fonts import (
    DEFAULT_FONT_ENV,
    FONT_PATH_ENV,
    find_font,
    font_dirs,
    resolve_font,
)
from glyphpress.devices import DEFAULT_DEVICE


def test_parser_defaults() -> None:
    args = build_argument_parser(["memory", "cairo"]).parse_args(["hi"])
    assert args.text == "hi"
    assert args.size == 24.0
    assert args.colour == ColourTag.new_opaque(255, 255, 255)
    assert args.background is None
    assert args.device == "memory"
    assert not args.monospaced


def test_parser_reads_colours() -> None:
    args = build_argument_parser(["memory"]).parse_args(["hi", "-c", "#0A141E", "-b", "00000080"])
    assert args.colour == ColourTag.new_opaque(10, 20, 30)
    assert args.background == ColourTag(0, 0, 0, 128)


def test_parser_prefers_the_default_device() -> None:
    assert build_argument_parser(["cairo", "memory"]).parse_args(["hi"]).device == DEFAULT_DEVICE
    assert build_argument_parser(["cairo"]).parse_args(["hi"]).device == "cairo"
    assert build_argument_parser(["memory"]).parse_args(["hi"]).colour is WHITE


@pytest.mark.parametrize("argv", [
    ["hi", "-c", "0A141"],
    ["hi", "-s", "0"],
    ["hi", "-W", "-3"],
    ["hi", "-d", "plotter"],
])
def test_parser_rejects_bad_arguments(argv: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        build_argument_parser(["memory"]).parse_args(argv)
    assert "error" in capsys.readouterr().err


def test_output_base_name() -> None:
    assert get_output_base_name("out/render.png", "whatever") == "render"
    assert get_output_base_name(None, "Hello, World!") == "hello_world"
    assert get_output_base_name(None, "!!!") == "text"


def test_font_path_env_is_searched_first(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "nested").mkdir()
    font_file = tmp_path / "nested" / "MyFont.TTF"
    font_file.write_bytes(b"")
    (tmp_path / "notes.txt").write_text("not a font")
    monkeypatch.setenv(FONT_PATH_ENV, str(tmp_path))

    assert font_dirs()[0] == str(tmp_path)
    assert find_font("myfont") == str(font_file)
    assert find_font("notes") is None


def test_resolve_font(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    font_file = tmp_path / "Face.otf"
    font_file.write_bytes(b"")
    monkeypatch.setenv(FONT_PATH_ENV, str(tmp_path))
    monkeypatch.delenv(DEFAULT_FONT_ENV, raising=False)

    assert resolve_font(str(font_file)) == str(font_file)
    assert resolve_font("face") == str(font_file)
    with pytest.raises(FontNotFound):
        resolve_font("no-such-font-anywhere-1234")
    with pytest.raises(FontNotFound):
        resolve_font(None)

    monkeypatch.setenv(DEFAULT_FONT_ENV, "Face")
    assert resolve_font(None) == str(font_file)


def test_main_reports_missing_font(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["hi", "-f", str(tmp_path / "missing.ttf"), "-o", str(tmp_path / "x.png")])
    assert code == 1
    assert "GlyphPress Error" in capsys.readouterr().err


def test_main_rejects_ppm_on_cairo(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["hi", "-d", "cairo", "-o", str(tmp_path / "x.ppm")])
    assert code == 1
    assert "PNG" in capsys.readouterr().err


@pytest.mark.parametrize("device, suffix", [("memory", ".ppm"), ("memory", ".png"), ("cairo", ".png")])
def test_main_renders_file(system_font, tmp_path, device: str, suffix: str,
                           capsys: pytest.CaptureFixture[str]) -> None:
    output = tmp_path / f"out{suffix}"
    code = main([
        "hElLo w0r1d!", "-f", system_font, "-d", device, "-o", str(output),
        "-W", "200", "-H", "40", "--repeat", "2", "--cache-stats",
    ])
    assert code == 0
    assert output.stat().st_size > 0
    assert "Glyph cache:" in capsys.readouterr().out


def test_main_monospaced_ppm_header(system_font, tmp_path) -> None:
    output = tmp_path / "mono.ppm"
    assert main(["ab\\ncd", "-f", system_font, "--monospaced", "-W", "48", "-H", "60", "-o", str(output)]) == 0
    assert output.read_bytes().startswith(b"P6\n48 60\n255\n")
