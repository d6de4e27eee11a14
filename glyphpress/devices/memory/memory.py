# GlyphPress - A Cached Glyph Text Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

"""
Memory Output Device

Reference DrawableSurface: a plain bytearray of straight (non-premultiplied)
RGBA pixels with no row padding. Used as the glyph artifact type, as a
destination surface, and for writing raw PPM dumps or Pillow images.
"""

import os

import numpy as np
from PIL import Image

from ...core.colour import ColourTag
from ...core.surface import BYTES_PER_PIXEL, blit_rgba


class RgbaSurface:
    """Tightly packed RGBA surface backed by a bytearray."""

    __slots__ = ("width", "height", "data")

    def __init__(self, width: int, height: int, data: bytearray | None = None) -> None:
        self.width = width
        self.height = height
        if data is None:
            data = bytearray(width * height * BYTES_PER_PIXEL)
        self.data = data

    @classmethod
    def blank(cls, width: int, height: int, colour: ColourTag | None = None) -> RgbaSurface:
        """Create a surface filled with ``colour`` (transparent black by default)."""
        surface = cls(width, height)
        if colour is not None:
            surface.fill(colour)
        return surface

    @classmethod
    def from_raw_mask(cls, width: int, height: int, data: bytes, colour: ColourTag) -> RgbaSurface:
        # colour only identifies the cache entry; data is already colourized
        return cls(width, height, bytearray(data))

    @property
    def stride(self) -> int:
        return self.width * BYTES_PER_PIXEL

    def paste(self, x: int, y: int, width: int, height: int, src: RgbaSurface) -> None:
        """Copy a ``width x height`` block of ``src`` to (x, y), clipping at both edges."""
        blit_rgba(self.data, self.stride, self.width, self.height,
                  x, y, width, height,
                  src.data, src.stride, src.width, src.height)

    def fill(self, colour: ColourTag) -> None:
        self.data[:] = bytes((colour.r, colour.g, colour.b, colour.a)) * (self.width * self.height)

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the (r, g, b, a) pixel at (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} surface")
        i = (y * self.width + x) * BYTES_PER_PIXEL
        return tuple(self.data[i:i + BYTES_PER_PIXEL])

    def as_array(self) -> np.ndarray:
        """Return a writable (height, width, 4) view of the pixel data."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(self.height, self.width, BYTES_PER_PIXEL)

    def to_image(self) -> Image.Image:
        """Convert to a Pillow RGBA image (copies the pixel data)."""
        return Image.frombytes("RGBA", (self.width, self.height), bytes(self.data))

    def to_rgb(self) -> bytes:
        """Flatten to RGB, painting fully transparent pixels black."""
        pixels = self.as_array()
        rgb = pixels[:, :, :3].copy()
        rgb[pixels[:, :, 3] == 0] = 0
        return rgb.tobytes()

    def write_ppm(self, path: str) -> None:
        """Write a binary PPM (P6) dump; transparent pixels become black."""
        with open(path, "wb") as f:
            f.write(f"P6\n{self.width} {self.height}\n255\n".encode("ascii"))
            f.write(self.to_rgb())

    def save(self, path: str) -> None:
        """Save by file extension: ``.ppm`` raw dump, anything else through Pillow."""
        if os.path.splitext(path)[1].lower() == ".ppm":
            self.write_ppm(path)
        else:
            self.to_image().save(path)

    def __copy__(self) -> RgbaSurface:
        return RgbaSurface(self.width, self.height, bytearray(self.data))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RgbaSurface):
            return NotImplemented
        return (self.width, self.height, self.data) == (other.width, other.height, other.data)

    __hash__ = None

    def __repr__(self) -> str:
        return f"RgbaSurface({self.width}x{self.height})"
