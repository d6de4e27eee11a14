# GlyphPress - A Cached Glyph Text Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Colourizer - expands a single-channel coverage mask into RGBA pixels.

Each coverage byte becomes the alpha of one output pixel whose r, g, b come
from the requested colour. The colour's own alpha is not applied.
"""

import numpy as np

from .colour import ColourTag


def colourize(mask: bytes, colour: ColourTag) -> bytes:
    """Convert a coverage mask into row-major RGBA bytes.

    Args:
        mask: One coverage byte per pixel (0 = no ink, 255 = full ink)
        colour: Colour to paint; only r, g, b are used

    Returns:
        bytes of length ``4 * len(mask)`` laid out as r, g, b, coverage
    """
    coverage = np.frombuffer(bytes(mask), dtype=np.uint8)
    pixels = np.empty((coverage.size, 4), dtype=np.uint8)
    pixels[:, 0] = colour.r
    pixels[:, 1] = colour.g
    pixels[:, 2] = colour.b
    pixels[:, 3] = coverage
    return pixels.tobytes()
