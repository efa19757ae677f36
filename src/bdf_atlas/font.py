"""In-memory bitmap font model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from .errors import InvalidFont, MissingGlyph

Bitmap = Tuple[Tuple[bool, ...], ...]


@dataclass(frozen=True)
class BoundingBox:
    width: int
    height: int
    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class Glyph:
    code: int
    bounding_box: BoundingBox
    bitmap: Bitmap

    @property
    def char(self) -> str:
        return chr(self.code)


@dataclass(frozen=True)
class Font:
    name: str
    size: int
    bounding_box: BoundingBox
    glyphs: Dict[int, Glyph] = field(default_factory=dict)

    @property
    def cell_width(self) -> int:
        return self.bounding_box.width

    @property
    def cell_height(self) -> int:
        return self.bounding_box.height

    @property
    def baseline(self) -> int:
        """Distance from the top of a cell to the shared baseline."""
        return self.bounding_box.height + self.bounding_box.y

    def glyph_for(self, char: str) -> Glyph:
        glyph = self.glyphs.get(ord(char))
        if glyph is None:
            raise MissingGlyph(char)
        return glyph

    def validate(self) -> None:
        box = self.bounding_box
        if box.width <= 0 or box.height <= 0:
            raise InvalidFont(
                f"font {self.name!r} has an empty bounding box {box.width}x{box.height}"
            )
        if not self.glyphs:
            raise InvalidFont(f"font {self.name!r} has no glyphs")
        for code, glyph in self.glyphs.items():
            if code != glyph.code:
                raise InvalidFont(f"glyph stored under code {code} reports code {glyph.code}")
            check_bitmap(glyph)


def check_bitmap(glyph: Glyph) -> None:
    box = glyph.bounding_box
    if box.width < 0 or box.height < 0:
        raise InvalidFont(f"glyph {glyph.char!r} has a negative size {box.width}x{box.height}")
    if len(glyph.bitmap) != box.height:
        raise InvalidFont(
            f"glyph {glyph.char!r} has {len(glyph.bitmap)} bitmap rows, expected {box.height}"
        )
    for index, row in enumerate(glyph.bitmap):
        if len(row) != box.width:
            raise InvalidFont(
                f"glyph {glyph.char!r} row {index} has {len(row)} pixels, expected {box.width}"
            )


def bitmap_from_rows(rows) -> Bitmap:
    """Build a bitmap from strings like ``"#..#"`` or iterables of truthy values."""
    bitmap = []
    for row in rows:
        if isinstance(row, str):
            bitmap.append(tuple(ch not in ". " for ch in row))
        else:
            bitmap.append(tuple(bool(value) for value in row))
    return tuple(bitmap)
