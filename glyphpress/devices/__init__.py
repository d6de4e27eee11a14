# GlyphPress - A Cached Glyph Text Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Output devices - DrawableSurface implementations selectable by name.
"""

from .cairo import CairoSurface
from .memory import RgbaSurface

DEVICES = {
    "memory": RgbaSurface,
    "cairo": CairoSurface,
}

DEFAULT_DEVICE = "memory"


def get_device(name: str) -> type:
    """Return the surface class registered under ``name``."""
    try:
        return DEVICES[name]
    except KeyError:
        raise ValueError(f"unknown device {name!r} (available: {', '.join(sorted(DEVICES))})") from None
