from __future__ import annotations

import pytest

from glyphpress.core.colour import ColourTag
from glyphpress.core.error import FontNotFound
from glyphpress.core.font import FontHandle, GlyphKey
from glyphpress.core.layout import Layout
from glyphpress.core.renderer import TextRenderer
from glyphpress.devices.memory import RgbaSurface

WHITE = ColourTag.new_opaque(255, 255, 255)


@pytest.fixture(scope="module")
def font(system_font) -> FontHandle:
    return FontHandle.load(system_font)


def test_load_rejects_missing_and_invalid_files(tmp_path) -> None:
    with pytest.raises(FontNotFound):
        FontHandle.load(str(tmp_path / "nope.ttf"))
    empty = tmp_path / "empty.ttf"
    empty.write_bytes(b"")
    with pytest.raises(FontNotFound):
        FontHandle.load(str(empty))


def test_rasterize_mask_matches_metrics(font) -> None:
    key = GlyphKey(font.glyph_index("A"), 24.0)
    metrics, mask = font.rasterize(key)

    assert metrics.width > 0 and metrics.height > 0
    assert len(mask) == metrics.width * metrics.height
    assert max(mask) > 0
    assert metrics == font.metrics(key)


def test_rasterize_is_deterministic(font) -> None:
    key = GlyphKey(font.glyph_index("g"), 31.0)
    assert font.rasterize(key) == font.rasterize(key)


def test_space_rasterizes_to_empty_mask(font) -> None:
    metrics, mask = font.rasterize(GlyphKey(font.glyph_index(" "), 24.0))
    assert mask == b""
    assert metrics.advance_width > 0


def test_layout_matches_rasterizer_boxes(font) -> None:
    for glyph in Layout(font).glyphs("Hg", 24):
        metrics, mask = font.rasterize(glyph.key)
        assert (glyph.width, glyph.height) == (metrics.width, metrics.height)
        assert len(mask) == glyph.width * glyph.height


def test_layout_advances_left_to_right(font) -> None:
    glyphs = Layout(font).glyphs("HHH", 24)
    xs = [g.x for g in glyphs]
    assert xs[0] < xs[1] < xs[2]
    assert xs[2] - xs[1] == pytest.approx(xs[1] - xs[0])


def test_line_metrics(font) -> None:
    line = font.line_metrics(24)
    assert line.ascent > 0 > line.descent
    assert line.new_line_size >= line.ascent - line.descent


def test_renderer_draws_ink_and_reuses_cache(system_font) -> None:
    renderer = TextRenderer.load(system_font, RgbaSurface)
    surface = RgbaSurface.blank(256, 64)
    renderer.draw("Hello", 0, 0, 24, WHITE, surface)
    first = renderer.cache_stats()

    assert any(surface.data[3::4])
    assert first["misses"] == 4  # H, e, l, o

    renderer.draw("Hello", 0, 24, 24, WHITE, surface)
    second = renderer.cache_stats()
    assert second["misses"] == 4
    assert second["hits"] == first["hits"] + 5


def test_cloned_renderers_share_the_font_handle(system_font) -> None:
    renderer = TextRenderer.load(system_font, RgbaSurface)
    clone = renderer.clone()
    surface = RgbaSurface.blank(64, 32)
    clone.draw("x", 0, 0, 24, WHITE, surface)

    assert clone.font is renderer.font
    assert len(renderer.glyph_cache) == 0
    assert len(clone.glyph_cache) == 1


def test_family_name_is_text(font) -> None:
    assert isinstance(font.family_name, str)
    assert font.family_name
