# GlyphPress - A Cached Glyph Text Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

"""
Cairo Output Device

DrawableSurface backed by a Cairo ARGB32 image surface. Glyph artifacts are
converted once, at cache population, from straight RGBA into Cairo's
premultiplied native-endian layout; pastes then copy Cairo pixels directly.
"""

import sys

import cairo
import numpy as np

from ...core.colour import ColourTag
from ...core.surface import BYTES_PER_PIXEL, blit_rgba

# Cairo ARGB32 is one native-endian 32-bit word per pixel: BGRA in memory on
# little-endian hosts, ARGB on big-endian ones.
if sys.byteorder == "little":
    _RGBA_TO_CAIRO = [2, 1, 0, 3]
else:
    _RGBA_TO_CAIRO = [3, 0, 1, 2]
_CAIRO_TO_RGBA = [_RGBA_TO_CAIRO.index(i) for i in range(4)]


class CairoSurface:
    """Cairo ARGB32 image surface implementing the paste contract.

    ``width``/``height`` are the logical size; the backing Cairo surface is
    at least 1x1 because Cairo rejects zero-sized image data.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, max(width, 1), max(height, 1))

    @classmethod
    def blank(cls, width: int, height: int, colour: ColourTag | None = None) -> CairoSurface:
        """Create a surface filled with ``colour`` (transparent by default)."""
        surface = cls(width, height)
        if colour is not None:
            cc = cairo.Context(surface.surface)
            cc.set_operator(cairo.OPERATOR_SOURCE)
            cc.set_source_rgba(colour.r / 255.0, colour.g / 255.0, colour.b / 255.0, colour.a / 255.0)
            cc.paint()
            surface.surface.flush()
        return surface

    @classmethod
    def from_raw_mask(cls, width: int, height: int, data: bytes, colour: ColourTag) -> CairoSurface:
        """Build a Cairo surface from straight RGBA bytes.

        Missing trailing pixels are left transparent; extra bytes are ignored.
        """
        surface = cls(width, height)
        count = width * height
        if count == 0:
            return surface

        rgba = np.zeros(count * BYTES_PER_PIXEL, dtype=np.uint8)
        raw = np.frombuffer(bytes(data[:count * BYTES_PER_PIXEL]), dtype=np.uint8)
        raw = raw[:raw.size - raw.size % BYTES_PER_PIXEL]
        rgba[:raw.size] = raw
        rgba = rgba.reshape(height, width, BYTES_PER_PIXEL).astype(np.uint16)

        # Premultiply colour channels by alpha
        alpha = rgba[:, :, 3:4]
        rgba[:, :, :3] = (rgba[:, :, :3] * alpha + 127) // 255
        native = rgba.astype(np.uint8)[:, :, _RGBA_TO_CAIRO]

        target = surface.surface
        target.flush()
        stride = target.get_stride()
        view = np.ndarray(shape=(height, width, BYTES_PER_PIXEL), dtype=np.uint8,
                          buffer=target.get_data(), strides=(stride, BYTES_PER_PIXEL, 1))
        view[:, :, :] = native
        target.mark_dirty()
        return surface

    def paste(self, x: int, y: int, width: int, height: int, src: CairoSurface) -> None:
        """Copy a ``width x height`` block of ``src`` to (x, y), clipping at both edges."""
        self.surface.flush()
        src.surface.flush()
        blit_rgba(self.surface.get_data(), self.surface.get_stride(), self.width, self.height,
                  x, y, width, height,
                  src.surface.get_data(), src.surface.get_stride(), src.width, src.height)
        self.surface.mark_dirty()

    def to_rgba(self) -> bytes:
        """Return the logical area as straight, tightly packed RGBA bytes."""
        if self.width == 0 or self.height == 0:
            return b""
        self.surface.flush()
        stride = self.surface.get_stride()
        view = np.ndarray(shape=(self.height, self.width, BYTES_PER_PIXEL), dtype=np.uint8,
                          buffer=self.surface.get_data(), strides=(stride, BYTES_PER_PIXEL, 1))
        rgba = view[:, :, _CAIRO_TO_RGBA].astype(np.uint16)
        alpha = rgba[:, :, 3:4]
        # Undo premultiplication where there is any coverage
        safe_alpha = np.where(alpha == 0, 1, alpha)
        rgba[:, :, :3] = np.where(alpha == 0, 0, (rgba[:, :, :3] * 255 + safe_alpha // 2) // safe_alpha)
        return rgba.astype(np.uint8).tobytes()

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the straight (r, g, b, a) pixel at (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} surface")
        i = (y * self.width + x) * BYTES_PER_PIXEL
        return tuple(self.to_rgba()[i:i + BYTES_PER_PIXEL])

    def write_to_png(self, path: str) -> None:
        self.surface.flush()
        self.surface.write_to_png(path)

    def save(self, path: str) -> None:
        """Save as PNG (Cairo only writes PNG)."""
        self.write_to_png(path)

    def __copy__(self) -> CairoSurface:
        clone = CairoSurface(self.width, self.height)
        self.surface.flush()
        clone.surface.flush()
        src = self.surface.get_data()
        dst = clone.surface.get_data()
        dst[:len(src)] = src
        clone.surface.mark_dirty()
        return clone

    def __repr__(self) -> str:
        return f"CairoSurface({self.width}x{self.height})"
