# GlyphPress - A Cached Glyph Text Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later
from __future__ import annotations

"""
Error types raised by GlyphPress.

Only two conditions are reported to callers: a font that cannot be loaded
(fatal at renderer construction) and a malformed colour literal (fatal at the
call site). Cache lookups, colourization and pasting are total over valid
input; out-of-range paste coordinates are clipped, not reported.
"""


class GlyphPressError(Exception):
    """Base class for all GlyphPress errors."""
    pass


class FontNotFound(GlyphPressError):
    """Font file is missing, unreadable, or not parsable by FreeType."""

    def __init__(self, path: str, reason: str | None = None) -> None:
        self.path = path
        self.reason = reason
        message = f"font not found: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ColourFormatError(GlyphPressError, ValueError):
    """Colour literal or channel value is malformed."""
    pass
