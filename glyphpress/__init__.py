# GlyphPress - A Cached Glyph Text Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
GlyphPress - draws text onto pixel surfaces through a per-renderer glyph cache.
"""

from .core.colour import ColourTag
from .core.error import ColourFormatError, FontNotFound, GlyphPressError
from .core.font import FontHandle, GlyphKey, GlyphMetrics
from .core.glyph_cache import CacheEntry, GlyphCache, GlyphCacheKey
from .core.layout import GlyphPosition, Layout
from .core.renderer import TextRenderer
from .core.surface import DrawableSurface
from .devices import CairoSurface, RgbaSurface

__version__ = "0.1.0"

__all__ = [
    "CacheEntry",
    "CairoSurface",
    "ColourFormatError",
    "ColourTag",
    "DrawableSurface",
    "FontHandle",
    "FontNotFound",
    "GlyphCache",
    "GlyphCacheKey",
    "GlyphKey",
    "GlyphMetrics",
    "GlyphPosition",
    "GlyphPressError",
    "Layout",
    "RgbaSurface",
    "TextRenderer",
]
