from __future__ import annotations

import pytest

from bdf_atlas.font import BoundingBox, Font, Glyph, bitmap_from_rows


def make_glyph(char: str, rows, x: int = 0, y: int = 0) -> Glyph:
    bitmap = bitmap_from_rows(rows)
    width = len(bitmap[0]) if bitmap else 0
    return Glyph(
        code=ord(char),
        bounding_box=BoundingBox(width=width, height=len(bitmap), x=x, y=y),
        bitmap=bitmap,
    )


def make_font(*glyphs: Glyph, width: int = 4, height: int = 4, y: int = -1) -> Font:
    return Font(
        name="test",
        size=height,
        bounding_box=BoundingBox(width=width, height=height, x=0, y=y),
        glyphs={glyph.code: glyph for glyph in glyphs},
    )


@pytest.fixture
def font() -> Font:
    # 4x4 cells, baseline three rows down from the top of each cell
    return make_font(
        make_glyph("A", ["###", "#.#", "###"]),
        make_glyph("B", ["##", "##"], x=1, y=-1),
        make_glyph(".", ["#"], x=1),
        make_glyph(" ", []),
    )


SAMPLE_BDF = """\
STARTFONT 2.1
FONT -misc-tiny-medium-r-normal--6-60-75-75-c-40-iso10646-1
SIZE 6 75 75
FONTBOUNDINGBOX 4 6 0 -1
STARTPROPERTIES 2
FONT_ASCENT 5
FONT_DESCENT 1
ENDPROPERTIES
CHARS 4
STARTCHAR space
ENCODING 32
SWIDTH 666 0
DWIDTH 4 0
BBX 0 0 0 0
BITMAP
ENDCHAR
STARTCHAR A
ENCODING 65
SWIDTH 666 0
DWIDTH 4 0
BBX 3 5 0 0
BITMAP
40
A0
E0
A0
A0
ENDCHAR
STARTCHAR g
ENCODING 103
SWIDTH 666 0
DWIDTH 4 0
BBX 3 4 0 -1
BITMAP
60
A0
60
C0
ENDCHAR
STARTCHAR unencoded
ENCODING -1
BBX 1 1 0 0
BITMAP
80
ENDCHAR
ENDFONT
"""


@pytest.fixture
def bdf_text() -> str:
    return SAMPLE_BDF
