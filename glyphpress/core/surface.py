# GlyphPress - A Cached Glyph Text Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

"""
Drawable surface contract and the shared pixel blit.

Every surface type a TextRenderer draws onto implements DrawableSurface. The
renderer never looks inside a surface; it only builds glyph artifacts with
``from_raw_mask``, clones them with ``copy.copy`` and hands them to ``paste``.

Paste rule:
    Source pixel (c, r) of the ``width x height`` block is copied to
    destination pixel (x + c, y + r). Pixels that fall outside the destination
    or outside the source are skipped one by one; the rest of the block is
    still copied at the same relative alignment. Clipping never raises.
"""

from typing import Protocol, TypeVar, runtime_checkable

import numpy as np

from .colour import ColourTag

BYTES_PER_PIXEL = 4

S = TypeVar("S", bound="DrawableSurface")


@runtime_checkable
class DrawableSurface(Protocol):
    """Capability a glyph artifact and a destination surface must provide."""

    def paste(self, x: int, y: int, width: int, height: int, src: DrawableSurface) -> None:
        """Copy a ``width x height`` block of ``src`` with its top-left at (x, y)."""
        ...

    @classmethod
    def from_raw_mask(cls: type[S], width: int, height: int, data: bytes, colour: ColourTag) -> S:
        """Build a surface from already-colourized row-major RGBA bytes.

        ``colour`` identifies the cache entry; it is not applied again.
        """
        ...

    def __copy__(self: S) -> S:
        ...


def _pixel_view(buf, stride: int, rows: int, cols: int, offset: int = 0) -> np.ndarray:
    """Return a writable (rows, cols, 4) uint8 view over a strided pixel buffer."""
    return np.ndarray(
        shape=(rows, cols, BYTES_PER_PIXEL),
        dtype=np.uint8,
        buffer=buf,
        offset=offset,
        strides=(stride, BYTES_PER_PIXEL, 1),
    )


def _copy_rows(dst_view: np.ndarray, x: int, y: int, width: int, height: int,
               src_view: np.ndarray, row_start: int) -> None:
    """Copy the part of a source row band that lands inside the destination.

    ``src_view`` holds source rows ``row_start`` onward; block coordinates
    are shared between source and destination, so clipping one side also
    clips the other at the same offsets.
    """
    dst_rows, dst_cols = dst_view.shape[:2]
    src_rows, src_cols = src_view.shape[:2]

    c0 = max(0, -x)
    c1 = min(width, src_cols, dst_cols - x)
    r0 = max(row_start, -y)
    r1 = min(row_start + src_rows, height, dst_rows - y)
    if c0 >= c1 or r0 >= r1:
        return
    dst_view[y + r0:y + r1, x + c0:x + c1] = src_view[r0 - row_start:r1 - row_start, c0:c1]


def blit_rgba(dst, dst_stride: int, dst_width: int, dst_height: int,
              x: int, y: int, width: int, height: int,
              src, src_stride: int, src_width: int, src_height: int) -> None:
    """Copy a block of 4-byte pixels between two strided buffers, clipping silently.

    Both buffers are row-major with their own stride (bytes per row). Rows or
    pixels that the buffers do not actually hold are treated as out of bounds,
    so a source buffer shorter than ``src_stride * src_height`` is clipped at
    its last whole pixel.

    Args:
        dst: Writable destination buffer (bytearray or memoryview)
        dst_stride, dst_width, dst_height: Destination geometry
        x, y: Destination position of the block's top-left pixel; may be negative
        width, height: Block size in pixels
        src: Source buffer
        src_stride, src_width, src_height: Source geometry
    """
    if width <= 0 or height <= 0 or dst_stride <= 0 or src_stride <= 0:
        return

    dst_rows = min(dst_height, len(dst) // dst_stride)
    if dst_rows <= 0 or dst_width <= 0:
        return
    dst_view = _pixel_view(dst, dst_stride, dst_rows, dst_width)

    src_len = len(src)
    src_rows = min(src_height, src_len // src_stride)
    if src_rows > 0 and src_width > 0:
        _copy_rows(dst_view, x, y, width, height,
                   _pixel_view(src, src_stride, src_rows, src_width), 0)

    # Partial last row of a short source buffer
    if src_rows < src_height:
        tail = min(src_width, (src_len - src_rows * src_stride) // BYTES_PER_PIXEL)
        if tail > 0:
            _copy_rows(dst_view, x, y, width, height,
                       _pixel_view(src, src_stride, 1, tail, src_rows * src_stride), src_rows)
