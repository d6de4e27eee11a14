# GlyphPress - A Cached Glyph Text Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

"""
Text renderer - draws strings onto a DrawableSurface through the glyph cache.

Each draw lays the string out afresh, fetches (or populates) one cached
artifact per glyph and pastes it onto the destination surface. Only the
rasterized, colourized glyphs are remembered between calls.

A renderer and its cache belong to one thread at a time. Clones share the
FontHandle but get their own cache.
"""

import copy
import logging
from typing import Generic, TypeVar

from .colour import ColourTag
from .font import FontHandle
from .glyph_cache import GlyphCache
from .layout import GlyphPosition, Layout
from .surface import DrawableSurface

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=DrawableSurface)


class TextRenderer(Generic[T]):
    """Draws text with one font onto surfaces of type ``surface_type``.

    ``surface_type`` supplies ``from_raw_mask`` to build glyph artifacts; the
    surfaces drawn onto must accept those artifacts in ``paste``.
    """

    def __init__(self, font: FontHandle, surface_type: type[T], layout: Layout | None = None) -> None:
        self.font = font
        self.surface_type = surface_type
        self.layout = layout if layout is not None else Layout(font)
        self._cache = GlyphCache(font.rasterize)

    @classmethod
    def load(cls, font_path: str, surface_type: type[T]) -> TextRenderer[T]:
        """Load a font file and build a renderer with an empty cache.

        Raises:
            FontNotFound: the font file is unreadable or not a usable font.
        """
        return cls(FontHandle.load(font_path), surface_type)

    @property
    def glyph_cache(self) -> GlyphCache:
        return self._cache

    def draw(self, string: str, x: float, y: float, size: float,
             colour: ColourTag, surface: T) -> None:
        """Draw ``string`` with proportional spacing, top-left of the first line at (x, y)."""
        for glyph in self.layout.glyphs(string, size):
            artifact = self._glyph_artifact(glyph, colour)
            surface.paste(
                int(x + glyph.x),
                int(y + glyph.y),
                glyph.width,
                glyph.height,
                artifact,
            )

    def draw_monospaced(self, string: str, x: float, y: float, size: float,
                        colour: ColourTag, surface: T) -> None:
        """Draw ``string`` on a fixed ``size / 2`` pixel grid.

        Glyph *i* goes to ``x + (size / 2) * i`` and is pasted ``size / 2``
        pixels wide; kerning and per-glyph advances are ignored. Proportional
        glyphs wider than the cell are cut off and narrow ones are not
        centred. Vertical placement is the same as ``draw``.
        """
        cell = size / 2.0
        for i, glyph in enumerate(self.layout.glyphs(string, size)):
            artifact = self._glyph_artifact(glyph, colour)
            surface.paste(
                int(x + cell * i),
                int(y + glyph.y),
                int(cell),
                glyph.height,
                artifact,
            )

    def cache_stats(self) -> dict:
        return self._cache.stats()

    def clone(self) -> TextRenderer[T]:
        """Return a renderer sharing this font with an independent copy of the cache."""
        return copy.copy(self)

    def __copy__(self) -> TextRenderer[T]:
        other = self.__class__.__new__(self.__class__)
        other.font = self.font
        other.surface_type = self.surface_type
        other.layout = self.layout
        other._cache = self._cache.copy()
        return other

    def _glyph_artifact(self, glyph: GlyphPosition, colour: ColourTag) -> T:
        # Size bucket is the rasterized height, not the requested size
        return self._cache.get_or_create(
            glyph.height,
            colour,
            glyph.key,
            glyph.width,
            glyph.height,
            self.surface_type.from_raw_mask,
        )
