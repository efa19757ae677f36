"""
Reader for Glyph Bitmap Distribution Format (BDF) fonts.

Only the parts the atlas needs are read:
  - FONT, SIZE, FONTBOUNDINGBOX
  - STARTCHAR ... ENDCHAR blocks with ENCODING, BBX and BITMAP rows (hex, MSB-left)

Glyphs with ENCODING -1 are unencoded and skipped.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .errors import InvalidFont
from .font import BoundingBox, Font, Glyph, bitmap_from_rows

logger = logging.getLogger(__name__)

_HEX_ROW = re.compile(r"[0-9A-Fa-f]+")


def _parse_ints(value: str, count: int, keyword: str) -> Tuple[int, ...]:
    parts = value.split()
    if len(parts) < count:
        raise InvalidFont(f"expected {count} integers after {keyword}, got {value!r}")
    try:
        return tuple(int(p, 10) for p in parts[:count])
    except ValueError as exc:
        raise InvalidFont(f"bad integer in {keyword} {value!r}") from exc


def hex_row_to_bits(hex_str: str, width: int) -> List[bool]:
    """
    Convert a BITMAP hex row into `width` coverage flags, leftmost pixel first.

    Rows are padded to whole bytes; trailing padding bits are dropped.
    """
    val = int(hex_str, 16)
    row_bits = len(hex_str) * 4
    if row_bits < width:
        val <<= width - row_bits
        row_bits = width
    return [bool(val >> (row_bits - 1 - i) & 1) for i in range(width)]


def parse_bdf(text: str) -> Font:
    meta: Dict[str, str] = {}
    font_box: Optional[BoundingBox] = None
    glyphs: Dict[int, Glyph] = {}

    lines = text.splitlines()
    i = 0
    n = len(lines)

    while i < n:
        line = lines[i].strip()
        i += 1

        if line.startswith("FONT "):
            meta["name"] = line.split(" ", 1)[1].strip()
        elif line.startswith("SIZE "):
            meta["size"] = line.split(" ", 1)[1].strip()
        elif line.startswith("FONTBOUNDINGBOX "):
            w, h, x, y = _parse_ints(line.split(" ", 1)[1], 4, "FONTBOUNDINGBOX")
            font_box = BoundingBox(width=w, height=h, x=x, y=y)
        elif line.startswith("STARTCHAR"):
            name = line[len("STARTCHAR"):].strip()
            code: Optional[int] = None
            box: Optional[BoundingBox] = None
            rows: List[str] = []
            in_bitmap = False

            while i < n:
                l = lines[i].strip()
                i += 1

                if l.startswith("ENCODING "):
                    code = _parse_ints(l.split(" ", 1)[1], 1, "ENCODING")[0]
                elif l.startswith("BBX "):
                    w, h, x, y = _parse_ints(l.split(" ", 1)[1], 4, "BBX")
                    box = BoundingBox(width=w, height=h, x=x, y=y)
                elif l == "BITMAP":
                    in_bitmap = True
                elif l == "ENDCHAR":
                    break
                elif in_bitmap and l:
                    if not _HEX_ROW.fullmatch(l):
                        raise InvalidFont(f"bad bitmap row {l!r} in glyph {name!r}")
                    rows.append(l)
            else:
                raise InvalidFont(f"glyph {name!r} is missing ENDCHAR")

            if code is None or code < 0:
                logger.debug("skipping unencoded glyph %r", name)
                continue
            if box is None:
                raise InvalidFont(f"glyph {name!r} has no BBX")
            if len(rows) < box.height:
                raise InvalidFont(
                    f"glyph {name!r} has {len(rows)} bitmap rows, BBX says {box.height}"
                )

            bitmap = bitmap_from_rows(
                hex_row_to_bits(row, box.width) for row in rows[: box.height]
            )
            glyphs[code] = Glyph(code=code, bounding_box=box, bitmap=bitmap)

    if font_box is None:
        raise InvalidFont("missing FONTBOUNDINGBOX")

    size = meta.get("size", "").split()
    try:
        point_size = int(size[0]) if size else font_box.height
    except ValueError as exc:
        raise InvalidFont(f"bad SIZE {meta['size']!r}") from exc

    font = Font(
        name=meta.get("name", ""),
        size=point_size,
        bounding_box=font_box,
        glyphs=glyphs,
    )
    logger.debug("parsed font %r with %d glyphs", font.name, len(glyphs))
    return font


def load_bdf(path: Path) -> Font:
    font = parse_bdf(path.read_text(encoding="utf-8", errors="replace"))
    if not font.name:
        font = replace(font, name=path.stem)
    return font
