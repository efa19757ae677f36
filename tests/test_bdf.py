from __future__ import annotations

import pytest

from bdf_atlas import ConversionConfig, convert
from bdf_atlas.bdf import hex_row_to_bits, load_bdf, parse_bdf
from bdf_atlas.descriptor import parse_text
from bdf_atlas.errors import InvalidFont


def test_parses_font_metrics(bdf_text):
    font = parse_bdf(bdf_text)
    assert font.name.startswith("-misc-tiny-medium")
    assert font.size == 6
    assert (font.cell_width, font.cell_height) == (4, 6)
    assert font.bounding_box.y == -1
    assert font.baseline == 5
    assert sorted(font.glyphs) == [32, 65, 103]


def test_parses_glyph_bitmaps(bdf_text):
    font = parse_bdf(bdf_text)
    a = font.glyph_for("A")
    assert a.bounding_box.width == 3 and a.bounding_box.height == 5
    assert a.bitmap[0] == (False, True, False)
    assert a.bitmap[2] == (True, True, True)
    g = font.glyph_for("g")
    assert g.bounding_box.y == -1
    assert g.bitmap[3] == (True, True, False)
    assert font.glyph_for(" ").bitmap == ()


def test_hex_rows_are_msb_left():
    assert hex_row_to_bits("18", 8) == [False, False, False, True, True, False, False, False]
    assert hex_row_to_bits("C0", 3) == [True, True, False]
    assert hex_row_to_bits("8000", 9) == [True] + [False] * 8


def test_parsed_font_converts(bdf_text):
    font = parse_bdf(bdf_text)
    result = convert(font, ConversionConfig(charset="Ag ", emit_secondary_lossless=False))
    parsed = parse_text(result.descriptor)
    assert parsed["common"]["lineHeight"] == 6
    assert parsed["common"]["base"] == 5
    assert [c["id"] for c in parsed["chars"]] == [65, 103, 32]


def test_missing_bounding_box_is_invalid(bdf_text):
    text = "\n".join(l for l in bdf_text.splitlines() if not l.startswith("FONTBOUNDINGBOX"))
    with pytest.raises(InvalidFont, match="FONTBOUNDINGBOX"):
        parse_bdf(text)


def test_short_bitmap_is_invalid(bdf_text):
    text = bdf_text.replace("E0\nA0\nA0\n", "E0\n")
    with pytest.raises(InvalidFont, match="bitmap rows"):
        parse_bdf(text)


def test_bad_integer_is_invalid(bdf_text):
    with pytest.raises(InvalidFont):
        parse_bdf(bdf_text.replace("BBX 3 5 0 0", "BBX 3 five 0 0"))


def test_unterminated_glyph_is_invalid(bdf_text):
    text = bdf_text[: bdf_text.index("STARTCHAR g")] + "STARTCHAR g\nENCODING 103\n"
    with pytest.raises(InvalidFont, match="ENDCHAR"):
        parse_bdf(text)


def test_load_bdf_falls_back_to_file_name(tmp_path, bdf_text):
    path = tmp_path / "tiny.bdf"
    path.write_text("\n".join(l for l in bdf_text.splitlines() if not l.startswith("FONT ")))
    assert load_bdf(path).name == "tiny"
