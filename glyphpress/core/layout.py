# GlyphPress - A Cached Glyph Text Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Layout engine - turns a string into positioned glyph descriptors.

Positions are y-down offsets from the layout origin (the top-left of the
first line); the renderer adds the caller's (x, y). Kerning comes from the
font's kern table. A ``\\n`` starts a new line; there is no wrapping.
Layout is recomputed on every call.
"""

from dataclasses import dataclass

from .font import GlyphKey


@dataclass(frozen=True)
class GlyphPosition:
    """One positioned glyph, ready to fetch from the glyph cache and paste."""
    key: GlyphKey
    char: str
    x: float
    y: float
    width: int
    height: int
    advance: float


class Layout:
    """Lays out single-style text with one font."""

    def __init__(self, font) -> None:
        self.font = font

    def glyphs(self, text: str, size: float) -> list[GlyphPosition]:
        """Lay out ``text`` at pixel size ``size``.

        Returns:
            Glyph descriptors in text order; line breaks produce no descriptor
        """
        line = self.font.line_metrics(size)
        baseline = line.ascent
        pen_x = 0.0
        previous = None
        positions = []

        for char in text:
            if char == "\n":
                pen_x = 0.0
                baseline += line.new_line_size
                previous = None
                continue

            index = self.font.glyph_index(char)
            if previous is not None:
                pen_x += self.font.kerning(previous, index, size)

            key = GlyphKey(index, float(size))
            metrics = self.font.metrics(key)
            positions.append(GlyphPosition(
                key=key,
                char=char,
                x=pen_x + metrics.xmin,
                y=baseline - (metrics.ymin + metrics.height),
                width=metrics.width,
                height=metrics.height,
                advance=metrics.advance_width,
            ))
            pen_x += metrics.advance_width
            previous = index

        return positions
