# GlyphPress - A Cached Glyph Text Renderer
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

"""
Glyph Cache Infrastructure

This module implements the memoization table for colourized glyph bitmaps.
A glyph is rasterized and colourized at most once per (rendered height,
colour, glyph identity); every later request gets a clone of the drawable
artifact built the first time.

Architecture:
- GlyphCacheKey: (rendered_height, colour, glyph_key) composite key
- CacheEntry: colourized RGBA bytes plus the artifact built from them
- GlyphCache: insert-or-fetch table, owned by a single TextRenderer

Cache Key Design:
- rendered_height: the rasterized pixel height of the glyph, NOT the size the
  caller asked for. Two requested sizes that rasterize to the same height
  land in the same size bucket.
- colour: full RGBA ColourTag, alpha included
- glyph_key: opaque identity from the layout engine (GlyphKey)

There is no eviction. Entries accumulate for the lifetime of the owning
renderer and are never removed individually.
"""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Callable, Hashable

from .colour import ColourTag
from .colourize import colourize

logger = logging.getLogger(__name__)

# rasterize(glyph_key) -> (metrics, coverage mask)
Rasterizer = Callable[[Any], tuple[Any, bytes]]
# build(width, height, rgba_bytes, colour) -> artifact
ArtifactFactory = Callable[[int, int, bytes, ColourTag], Any]


@dataclass(frozen=True)
class GlyphCacheKey:
    """Unique identifier for a cached glyph.

    The three fields stand in for the size bucket, the colour map and the
    glyph map of a nested lookup; a flat dict keyed by this tuple has the same
    lookup and population behaviour without per-level lazy creation.
    """
    rendered_height: int   # rasterized pixel height - size bucket
    colour: ColourTag      # colour map key
    glyph_key: Hashable    # glyph map key, opaque to the cache


@dataclass(frozen=True)
class CacheEntry:
    """Colourized glyph pixels and the artifact built from them.

    ``pixels`` is immutable bytes so the stored buffer can never change after
    insertion. The artifact is only ever cloned out, never handed out itself.
    """
    pixels: bytes
    artifact: Any


class GlyphCache:
    """Memoization table for colourized glyph artifacts.

    Thread Safety: This implementation is NOT thread-safe. Population mutates
    the table in place; concurrent draws on one renderer need an external lock.
    """

    def __init__(self, rasterize: Rasterizer) -> None:
        """Initialize an empty cache.

        Args:
            rasterize: Rasterizer collaborator, called only on cache misses
        """
        self._rasterize = rasterize
        self._entries: dict[GlyphCacheKey, CacheEntry] = {}
        self._hits = 0
        self._misses = 0

    def get_or_create(self, rendered_height: int, colour: ColourTag, glyph_key: Hashable,
                      width: int, height: int, build: ArtifactFactory) -> Any:
        """Return a clone of the cached artifact, populating the entry on a miss.

        On a miss the glyph is rasterized, colourized with ``colour`` and passed
        to ``build`` to make the artifact; the pixels and artifact are stored
        before a clone is returned. Rasterizer errors propagate and leave the
        cache unchanged.

        Args:
            rendered_height: Rasterized pixel height (size bucket)
            colour: Colour to paint the glyph in
            glyph_key: Glyph identity from the layout engine
            width: Artifact width in pixels
            height: Artifact height in pixels
            build: Artifact factory, usually ``SurfaceType.from_raw_mask``

        Returns:
            A clone of the stored artifact
        """
        key = GlyphCacheKey(int(rendered_height), colour, glyph_key)
        entry = self._entries.get(key)
        if entry is not None:
            self._hits += 1
            return copy.copy(entry.artifact)

        self._misses += 1
        logger.debug("caching glyph: %r", key)
        _metrics, mask = self._rasterize(glyph_key)
        pixels = colourize(mask, colour)
        artifact = build(width, height, pixels, colour)
        entry = CacheEntry(pixels, artifact)
        self._entries[key] = entry
        return copy.copy(entry.artifact)

    def get(self, rendered_height: int, colour: ColourTag, glyph_key: Hashable) -> CacheEntry | None:
        """Look up an entry without populating it or touching statistics."""
        return self._entries.get(GlyphCacheKey(int(rendered_height), colour, glyph_key))

    def copy(self) -> GlyphCache:
        """Return an independent cache holding clones of every artifact.

        The rasterizer is shared. Adding entries to either cache afterwards
        is invisible to the other.
        """
        other = GlyphCache(self._rasterize)
        for key, entry in self._entries.items():
            other._entries[key] = CacheEntry(entry.pixels, copy.copy(entry.artifact))
        return other

    def size_buckets(self) -> list[int]:
        """Return the distinct rendered heights present, ascending."""
        return sorted({key.rendered_height for key in self._entries})

    def stats(self) -> dict:
        """Return cache statistics for debugging/profiling.

        Returns:
            Dictionary with entries, size_buckets, hits, misses, hit_rate
            and memory_bytes (colourized pixel bytes held)
        """
        total = self._hits + self._misses
        return {
            'entries': len(self._entries),
            'size_buckets': len(self.size_buckets()),
            'hits': self._hits,
            'misses': self._misses,
            'hit_rate': self._hits / total if total > 0 else 0.0,
            'memory_bytes': sum(len(entry.pixels) for entry in self._entries.values()),
        }

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        """Return number of cached entries."""
        return len(self._entries)
