# GlyphPress - A Cached Glyph Text Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Font handle - loads a TrueType/OpenType font through FreeType and rasterizes
glyphs into single-channel coverage masks.

A FontHandle is shared between renderers that were cloned from one another.
FreeType keeps the current size and glyph slot on the face, so every call that
sets a size and loads a glyph runs under the handle's lock; callers see the
handle as read-only.
"""

import io
import logging
import threading
from dataclasses import dataclass

import freetype
import numpy as np

from .error import FontNotFound

logger = logging.getLogger(__name__)

# FreeType 26.6 fixed point
_F26DOT6 = 64

_LOAD_FLAGS = freetype.FT_LOAD_DEFAULT | freetype.FT_LOAD_NO_BITMAP


@dataclass(frozen=True)
class GlyphKey:
    """Identity of one glyph rendered at one pixel size.

    Produced by the layout engine and used as the innermost cache key. The
    same character can map to different keys (different sizes, or different
    glyph indices after shaping).
    """
    glyph_index: int
    pixel_size: float


@dataclass(frozen=True)
class GlyphMetrics:
    """Pixel metrics of a rasterized glyph (y up, relative to the pen)."""
    xmin: int
    ymin: int
    width: int
    height: int
    advance_width: float


@dataclass(frozen=True)
class LineMetrics:
    """Vertical metrics of a face at one pixel size (y up)."""
    ascent: float
    descent: float
    line_gap: float

    @property
    def new_line_size(self) -> float:
        return self.ascent - self.descent + self.line_gap


class FontHandle:
    """Immutable view of one font face."""

    def __init__(self, path: str, data: bytes, face: freetype.Face) -> None:
        self.path = path
        self.data = data
        self._face = face
        self._lock = threading.RLock()

    @classmethod
    def load(cls, path: str) -> "FontHandle":
        """Read and parse a font file.

        Raises:
            FontNotFound: the file cannot be read, is not a font FreeType
                understands, or has no scalable outlines.
        """
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as exc:
            raise FontNotFound(str(path), exc.strerror or str(exc)) from exc

        try:
            face = freetype.Face(io.BytesIO(data))
        except freetype.FT_Exception as exc:
            raise FontNotFound(str(path), str(exc)) from exc

        if not face.is_scalable:
            raise FontNotFound(str(path), "font has no scalable outlines")

        logger.debug("loaded font %s (%s, %d glyphs)", path, face.family_name, face.num_glyphs)
        return cls(str(path), data, face)

    @property
    def family_name(self) -> str:
        name = self._face.family_name
        return name.decode("utf-8", "replace") if isinstance(name, bytes) else str(name)

    def glyph_index(self, char: str) -> int:
        """Map a character to its glyph index (0 = .notdef)."""
        with self._lock:
            return self._face.get_char_index(ord(char))

    def line_metrics(self, pixel_size: float) -> LineMetrics:
        with self._lock:
            self._set_size(pixel_size)
            size = self._face.size
            ascent = size.ascender / _F26DOT6
            descent = size.descender / _F26DOT6
            line_gap = size.height / _F26DOT6 - (ascent - descent)
        return LineMetrics(ascent, descent, max(line_gap, 0.0))

    def kerning(self, left_index: int, right_index: int, pixel_size: float) -> float:
        """Horizontal kerning adjustment in pixels between two glyph indices."""
        with self._lock:
            if not self._face.has_kerning:
                return 0.0
            self._set_size(pixel_size)
            vector = self._face.get_kerning(left_index, right_index)
            return vector.x / _F26DOT6

    def metrics(self, key: GlyphKey) -> GlyphMetrics:
        """Return the pixel box the rasterizer will produce for ``key``."""
        with self._lock:
            self._load(key)
            return self._box_metrics(self._face.glyph)

    def rasterize(self, key: GlyphKey) -> tuple[GlyphMetrics, bytes]:
        """Rasterize a glyph into a coverage mask.

        The mask is exactly ``metrics.width * metrics.height`` bytes, row-major,
        aligned to the box ``metrics`` reports so it matches the layout.

        Raises:
            freetype.FT_Exception: the glyph cannot be loaded or rendered.
        """
        with self._lock:
            self._load(key)
            slot = self._face.glyph
            metrics = self._box_metrics(slot)
            slot.render(freetype.FT_RENDER_MODE_NORMAL)
            bitmap = slot.bitmap
            left, top = slot.bitmap_left, slot.bitmap_top
            rows, cols, pitch = bitmap.rows, bitmap.width, abs(bitmap.pitch)
            buffer = bitmap.buffer

        mask = np.zeros((metrics.height, metrics.width), dtype=np.uint8)
        if rows and cols and metrics.width and metrics.height:
            rendered = np.array(buffer, dtype=np.uint8).reshape(rows, pitch)[:, :cols]
            # Offset of the rendered bitmap inside the metrics box
            dx = left - metrics.xmin
            dy = (metrics.ymin + metrics.height) - top
            x0, y0 = max(dx, 0), max(dy, 0)
            x1 = min(dx + cols, metrics.width)
            y1 = min(dy + rows, metrics.height)
            if x0 < x1 and y0 < y1:
                mask[y0:y1, x0:x1] = rendered[y0 - dy:y1 - dy, x0 - dx:x1 - dx]
        return metrics, mask.tobytes()

    def _set_size(self, pixel_size: float) -> None:
        self._face.set_char_size(height=max(int(round(pixel_size * _F26DOT6)), 1), hres=72, vres=72)

    def _load(self, key: GlyphKey) -> None:
        self._set_size(key.pixel_size)
        self._face.load_glyph(key.glyph_index, _LOAD_FLAGS)

    @staticmethod
    def _box_metrics(slot) -> GlyphMetrics:
        # Outline control box rounded outward to whole pixels, the same box
        # FreeType's smooth renderer allocates.
        cbox = slot.outline.get_cbox()
        xmin = cbox.xMin // _F26DOT6
        ymin = cbox.yMin // _F26DOT6
        xmax = -(-cbox.xMax // _F26DOT6)
        ymax = -(-cbox.yMax // _F26DOT6)
        return GlyphMetrics(
            xmin=xmin,
            ymin=ymin,
            width=max(xmax - xmin, 0),
            height=max(ymax - ymin, 0),
            advance_width=slot.advance.x / _F26DOT6,
        )

    def __repr__(self) -> str:
        return f"FontHandle({self.path!r})"
