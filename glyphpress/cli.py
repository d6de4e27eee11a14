#!/usr/bin/env python3
# GlyphPress - A Cached Glyph Text Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
GlyphPress - command line entry point.

Renders one string onto a fresh surface and writes it to disk.

Usage:
    glyphpress "Hello, world" -f DejaVuSans -s 32 -c FFCC00 -o hello.png
    glyphpress "hElLo w0r1d!" -f FreeMono.ttf --monospaced -o dump.ppm
"""

from __future__ import annotations

import logging
import os
import sys

from .cli_args import build_argument_parser, get_output_base_name
from .core.error import GlyphPressError
from .core.renderer import TextRenderer
from .core.system_fonts import resolve_font
from .devices import DEVICES, get_device

logger = logging.getLogger(__name__)


def _output_path(outputfile: str | None, text: str, device: str) -> str:
    if outputfile:
        if device == "cairo" and os.path.splitext(outputfile)[1].lower() == ".ppm":
            raise GlyphPressError("the cairo device only writes PNG output")
        return outputfile
    return f"{get_output_base_name(outputfile, text)}.png"


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for GlyphPress.

    Returns:
        Exit code: 0 for success, 1 for error
    """
    parser = build_argument_parser(list(DEVICES))
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    text = args.text.replace("\\n", "\n")
    surface_type = get_device(args.device)

    try:
        output = _output_path(args.outputfile, text, args.device)
        renderer = TextRenderer.load(resolve_font(args.font), surface_type)
    except GlyphPressError as e:
        print(f"GlyphPress Error: {e}", file=sys.stderr)
        return 1

    surface = surface_type.blank(args.width, args.height, args.background)
    draw = renderer.draw_monospaced if args.monospaced else renderer.draw
    for _ in range(args.repeat):
        draw(text, args.x, args.y, args.size, args.colour, surface)

    try:
        surface.save(output)
    except OSError as e:
        print(f"GlyphPress Error: cannot write {output}: {e}", file=sys.stderr)
        return 1
    logger.info("wrote %s (%dx%d, font %s from %s)", output, args.width, args.height,
                renderer.font.family_name, renderer.font.path)

    if args.cache_stats:
        stats = renderer.cache_stats()
        print(
            f"Glyph cache: {stats['entries']} entries in {stats['size_buckets']} size buckets, "
            f"{stats['hits']} hits, {stats['misses']} misses "
            f"({stats['hit_rate']:.1%} hit rate), {stats['memory_bytes']} bytes"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
