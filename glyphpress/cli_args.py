# GlyphPress - A Cached Glyph Text Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CLI argument parsing for GlyphPress.

Handles command-line argument definition, surface size validation and output
file naming.
"""

from __future__ import annotations

import argparse
import os
import re

from .core.colour import WHITE, ColourTag
from .core.error import ColourFormatError
from .devices import DEFAULT_DEVICE


def _colour_arg(value: str) -> ColourTag:
    """argparse type for ``RRGGBB`` / ``RRGGBBAA`` colour literals."""
    try:
        return ColourTag.parse(value)
    except ColourFormatError as exc:
        raise argparse.ArgumentTypeError(str(exc))


def _positive_int(value: str) -> int:
    try:
        num = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: '{value}'")
    if num < 1:
        raise argparse.ArgumentTypeError(f"must be positive: '{value}'")
    return num


def _positive_float(value: str) -> float:
    try:
        num = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: '{value}'")
    if num <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: '{value}'")
    return num


def get_output_base_name(outputfile: str | None, text: str) -> str:
    """
    Derive output base name from command-line arguments.

    Args:
        outputfile: The -o argument value (or None)
        text: The text being rendered

    Returns:
        Base name for the output file (without extension)
    """
    if outputfile:
        base = os.path.basename(outputfile)
        return os.path.splitext(base)[0]
    slug = re.sub(r"[^A-Za-z0-9]+", "_", text).strip("_").lower()[:32]
    return slug or "text"


def build_argument_parser(available_devices: list[str]) -> argparse.ArgumentParser:
    """
    Create and configure the GlyphPress argument parser.

    Args:
        available_devices: List of available output device names.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="glyphpress",
        description="GlyphPress - render text to an image through a glyph cache",
        epilog="FONT may be a font file or an installed font name; "
               "GLYPHPRESS_FONT sets the default.",
    )
    parser.add_argument("text", help="Text to render (use \\n in the shell string for new lines)")
    parser.add_argument("-f", "--font", help="Font file path or installed font name")
    parser.add_argument(
        "-s", "--size", type=_positive_float, default=24.0,
        help="Pixel size of the font (default: 24)"
    )
    parser.add_argument(
        "-c", "--colour", "--color", dest="colour", type=_colour_arg,
        default=WHITE,
        help="Text colour as RRGGBB or RRGGBBAA (default: FFFFFF)"
    )
    parser.add_argument(
        "-b", "--background", type=_colour_arg, default=None,
        help="Background colour as RRGGBB or RRGGBBAA (default: transparent)"
    )
    parser.add_argument(
        "--monospaced", action="store_true",
        help="Place glyphs on a fixed size/2 grid instead of proportional advances"
    )
    parser.add_argument("-W", "--width", type=_positive_int, default=256, help="Surface width in pixels (default: 256)")
    parser.add_argument("-H", "--height", type=_positive_int, default=256, help="Surface height in pixels (default: 256)")
    parser.add_argument("-x", type=float, default=0.0, help="Left edge of the text (default: 0)")
    parser.add_argument("-y", type=float, default=0.0, help="Top edge of the first line (default: 0)")
    parser.add_argument(
        "-d", "--device", choices=available_devices,
        default=DEFAULT_DEVICE if DEFAULT_DEVICE in available_devices else available_devices[0],
        help=f'Surface implementation ({", ".join(available_devices)})',
    )
    parser.add_argument(
        "-o", "--output", dest="outputfile",
        help="Output file; .ppm writes a raw dump, anything else a PNG (default: derived from the text)"
    )
    parser.add_argument(
        "--repeat", type=_positive_int, default=1,
        help="Draw the text this many times (exercises the glyph cache)"
    )
    parser.add_argument(
        "--cache-stats", action="store_true",
        help="Print glyph cache statistics after rendering"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose (debug) logging"
    )
    return parser
