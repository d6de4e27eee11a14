# GlyphPress - A Cached Glyph Text Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

"""
System font lookup - resolves a font name such as ``DejaVuSans`` to a file in
the platform font directories.

Names match font file stems case-insensitively. Extra directories can be
listed in the ``GLYPHPRESS_FONT_PATH`` environment variable (os.pathsep
separated); they are searched before the platform directories.
"""

import logging
import os
import sys

from .error import FontNotFound

logger = logging.getLogger(__name__)

FONT_PATH_ENV = "GLYPHPRESS_FONT_PATH"
DEFAULT_FONT_ENV = "GLYPHPRESS_FONT"

# Platform-specific font directories
_FONT_DIRS = {
    "linux": [
        "/usr/share/fonts",
        "/usr/local/share/fonts",
        os.path.expanduser("~/.local/share/fonts"),
        os.path.expanduser("~/.fonts"),
    ],
    "darwin": [
        "/System/Library/Fonts",
        "/Library/Fonts",
        os.path.expanduser("~/Library/Fonts"),
    ],
    "win32": [
        os.path.join(os.environ.get("WINDIR", r"C:\Windows"), "Fonts"),
    ],
}

# Formats FreeType loads with scalable outlines
_SUPPORTED_EXTENSIONS = frozenset({".ttf", ".otf", ".ttc"})


def font_dirs() -> list[str]:
    """Return the directories searched for fonts, in search order."""
    extra = [d for d in os.environ.get(FONT_PATH_ENV, "").split(os.pathsep) if d]
    if sys.platform.startswith("linux"):
        key = "linux"
    elif sys.platform == "darwin":
        key = "darwin"
    elif sys.platform == "win32":
        key = "win32"
    else:
        key = "linux"  # best guess
    return extra + _FONT_DIRS.get(key, [])


def iter_font_files(dirs: list[str] | None = None):
    """Yield every supported font file below ``dirs`` (default: font_dirs())."""
    for root in dirs if dirs is not None else font_dirs():
        if not os.path.isdir(root):
            continue
        for dirpath, _dirnames, filenames in os.walk(root):
            for fname in sorted(filenames):
                if os.path.splitext(fname)[1].lower() in _SUPPORTED_EXTENSIONS:
                    yield os.path.join(dirpath, fname)


def find_font(name: str, dirs: list[str] | None = None) -> str | None:
    """Find a font file whose stem equals ``name`` (case-insensitive).

    Returns:
        Absolute file path, or None if no directory holds a match.
    """
    wanted = name.lower()
    for path in iter_font_files(dirs):
        if os.path.splitext(os.path.basename(path))[0].lower() == wanted:
            return os.path.abspath(path)
    return None


def resolve_font(name_or_path: str | None) -> str:
    """Turn a font argument into a file path.

    ``name_or_path`` may be a path to a font file or a font name. ``None`` falls back
    to the ``GLYPHPRESS_FONT`` environment variable.

    Raises:
        FontNotFound: nothing matches.
    """
    if not name_or_path:
        name_or_path = os.environ.get(DEFAULT_FONT_ENV)
        if not name_or_path:
            raise FontNotFound("<none>", f"no font given and {DEFAULT_FONT_ENV} is not set")
    if os.path.isfile(name_or_path):
        return name_or_path
    path = find_font(name_or_path)
    if path is None:
        raise FontNotFound(name_or_path, "no such file and no installed font with that name")
    logger.debug("resolved font %r to %s", name_or_path, path)
    return path
