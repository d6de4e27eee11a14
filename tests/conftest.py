"""Shared fixtures: fake font collaborators, a recording surface and a system font."""
from __future__ import annotations

import os
from dataclasses import dataclass, field

import pytest

from glyphpress.core.font import GlyphKey, GlyphMetrics, LineMetrics
from glyphpress.core.system_fonts import iter_font_files

_PREFERRED_FONTS = (
    "dejavusans.ttf",
    "freemono.ttf",
    "liberationsans-regular.ttf",
    "notosans-regular.ttf",
    "arial.ttf",
)


class FakeFont:
    """Deterministic stand-in for FontHandle.

    Glyph boxes depend only on the character and size: width is
    ``ord(char) % 5 + 3``, height is ``int(size * 0.75)``, spaces are empty.
    """

    path = "<fake>"

    def __init__(self, fail_on: tuple[str, ...] = (), kern: dict | None = None) -> None:
        self.fail_on = {ord(c) for c in fail_on}
        self.kern = kern or {}
        self.rasterize_calls: list[GlyphKey] = []

    def line_metrics(self, pixel_size: float) -> LineMetrics:
        return LineMetrics(ascent=pixel_size * 0.75, descent=-pixel_size * 0.25, line_gap=0.0)

    def glyph_index(self, char: str) -> int:
        return ord(char)

    def kerning(self, left_index: int, right_index: int, pixel_size: float) -> float:
        return self.kern.get((chr(left_index), chr(right_index)), 0.0)

    def metrics(self, key: GlyphKey) -> GlyphMetrics:
        if key.glyph_index == ord(" "):
            return GlyphMetrics(0, 0, 0, 0, key.pixel_size / 4)
        width = key.glyph_index % 5 + 3
        height = int(key.pixel_size * 0.75)
        return GlyphMetrics(xmin=1, ymin=0, width=width, height=height, advance_width=width + 2)

    def rasterize(self, key: GlyphKey) -> tuple[GlyphMetrics, bytes]:
        self.rasterize_calls.append(key)
        if key.glyph_index in self.fail_on:
            raise RuntimeError(f"cannot rasterize glyph {key.glyph_index}")
        metrics = self.metrics(key)
        count = metrics.width * metrics.height
        return metrics, bytes((i * 37 + key.glyph_index) % 256 for i in range(count))


@dataclass
class RecordingSurface:
    """DrawableSurface that records paste calls instead of copying pixels."""
    width: int = 0
    height: int = 0
    data: bytes = b""
    pastes: list = field(default_factory=list)

    @classmethod
    def from_raw_mask(cls, width, height, data, colour):
        return cls(width, height, bytes(data))

    def paste(self, x, y, width, height, src):
        self.pastes.append((x, y, width, height, src))

    def __copy__(self):
        return RecordingSurface(self.width, self.height, self.data)


@pytest.fixture
def fake_font() -> FakeFont:
    return FakeFont()


@pytest.fixture
def recording_surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture(scope="session")
def system_font() -> str:
    """Path of an installed TrueType font; skips the test when none exists."""
    candidates = list(iter_font_files())
    by_name = {os.path.basename(p).lower(): p for p in candidates}
    for name in _PREFERRED_FONTS:
        if name in by_name:
            return by_name[name]
    for path in candidates:
        if path.lower().endswith(".ttf"):
            return path
    pytest.skip("no TrueType font installed")


@pytest.fixture
def font_factory():
    """FakeFont class, for tests that need non-default behaviour."""
    return FakeFont
