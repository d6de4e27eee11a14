# GlyphPress - A Cached Glyph Text Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

"""
ColourTag - RGBA colour value used for rendering and cache partitioning.

A ColourTag is both the colour a glyph is painted in and one component of the
glyph cache key. Equality and hashing cover all four channels, including alpha,
even though colourization only uses r, g and b.
"""

import re
from dataclasses import dataclass

from .error import ColourFormatError

_HEX_RGB_RE = re.compile(r"[0-9A-Fa-f]{6}")
_HEX_RGBA_RE = re.compile(r"[0-9A-Fa-f]{8}")


@dataclass(frozen=True)
class ColourTag:
    """Immutable 8-bit-per-channel RGBA colour.

    Frozen dataclass gives structural __eq__ and __hash__, so instances can be
    used directly as cache keys.
    """
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 255:
                raise ColourFormatError(f"colour channel {name} out of range 0-255: {value!r}")

    @classmethod
    def new_opaque(cls, r: int, g: int, b: int) -> ColourTag:
        """Build a fully opaque colour (alpha 255)."""
        return cls(r, g, b, 255)

    @classmethod
    def from_hex(cls, literal: str) -> ColourTag:
        """Parse ``RRGGBB`` or ``#RRGGBB``; alpha defaults to 255.

        Only the first six digits are read; anything after them is ignored.

        Raises:
            ColourFormatError: fewer than six characters, or a non-hex digit
                among the first six.
        """
        digits = _strip_hash(literal)
        if not _HEX_RGB_RE.match(digits):
            raise ColourFormatError(f"expected 6 hex digits, got {literal!r}")
        r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
        return cls(r, g, b, 255)

    @classmethod
    def from_hex_with_alpha(cls, literal: str) -> ColourTag:
        """Parse ``RRGGBBAA`` or ``#RRGGBBAA``.

        Trailing characters after the eighth digit are ignored.

        Raises:
            ColourFormatError: fewer than eight characters, or a non-hex digit
                among the first eight.
        """
        digits = _strip_hash(literal)
        if not _HEX_RGBA_RE.match(digits):
            raise ColourFormatError(f"expected 8 hex digits, got {literal!r}")
        r, g, b, a = (int(digits[i:i + 2], 16) for i in (0, 2, 4, 6))
        return cls(r, g, b, a)

    @classmethod
    def parse(cls, literal: str) -> ColourTag:
        """Parse a hex literal: eight or more digits carry alpha, six do not."""
        if len(_strip_hash(literal)) >= 8:
            return cls.from_hex_with_alpha(literal)
        return cls.from_hex(literal)

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        """Return ``#RRGGBBAA``."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}{self.a:02X}"


def _strip_hash(literal: str) -> str:
    if not isinstance(literal, str):
        raise ColourFormatError(f"colour literal must be a string, got {type(literal).__name__}")
    if literal.startswith("#"):
        return literal[1:]
    return literal


WHITE = ColourTag.new_opaque(255, 255, 255)
