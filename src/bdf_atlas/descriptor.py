"""
BMFont descriptor files (text `.fnt` and XML).

Field names and order follow the AngelCode BMFont conventions:
https://www.angelcode.com/products/bmfont/doc/file_format.html

Every glyph reserves its full cell, so `x`/`y` are the cell origin,
`width`/`height` the cell size and both offsets are zero. `base` is the
distance from the top of a cell to the baseline the glyphs were drawn on.
"""

from __future__ import annotations

import shlex
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Sequence

from .font import Font
from .layout import AtlasPlan

FORMATS = ("text", "xml")
EXTENSIONS = {"text": "fnt", "xml": "xml"}


def _common(font: Font, plan: AtlasPlan) -> Dict[str, int]:
    return {
        "lineHeight": plan.cell_height,
        "base": plan.cell_height + font.bounding_box.y,
        "scaleW": plan.width,
        "scaleH": plan.height,
        # one atlas; secondary encodings of it are not extra pages
        "pages": 1,
    }


def _chars(
    font: Font,
    plan: AtlasPlan,
    charset: Sequence[str],
    xadvance_padding: int,
) -> List[Dict[str, int]]:
    chars = []
    for index, char in enumerate(charset):
        glyph = font.glyph_for(char)
        x, y = plan.cell(index)
        chars.append(
            {
                "id": glyph.code,
                "x": x,
                "y": y,
                "width": plan.cell_width,
                "height": plan.cell_height,
                "xoffset": 0,
                "yoffset": 0,
                "xadvance": plan.cell_width + xadvance_padding,
                "page": 0,
            }
        )
    return chars


def _textline(tag: str, fields: Dict[str, Any], trailing: str = "") -> str:
    return "{} {}{}\n".format(
        tag, " ".join(f"{key}={value}" for key, value in fields.items()), trailing
    )


def _write_text(common, pages, chars) -> bytes:
    out = [_textline("common", common)]
    # primary atlas only; encoded variants appear in the XML page list
    out.append(f'page id=0 file="{pages[0]}"\n')
    out.append(f"chars count={len(chars)}\n")
    for char in chars:
        # consumers of the historical format expect the trailing space
        out.append(_textline("char", char, trailing=" "))
    return "".join(out).encode("utf-8")


def _write_xml(font: Font, common, pages, chars, pretty: bool) -> bytes:
    def _strs(fields: Dict[str, Any]) -> Dict[str, str]:
        return {key: str(value) for key, value in fields.items()}

    root = ET.Element("font")
    ET.SubElement(root, "info", _strs({"face": font.name, "size": font.size}))
    ET.SubElement(root, "common", _strs(common))
    pages_el = ET.SubElement(root, "pages")
    for index, name in enumerate(pages):
        ET.SubElement(pages_el, "page", _strs({"id": index, "file": name}))
    chars_el = ET.SubElement(root, "chars", {"count": str(len(chars))})
    for char in chars:
        ET.SubElement(chars_el, "char", _strs(char))

    if pretty:
        ET.indent(root, space="  ")
    body = ET.tostring(root, encoding="unicode")
    return b'<?xml version="1.0"?>\n' + body.encode("utf-8") + b"\n"


def serialize(
    font: Font,
    plan: AtlasPlan,
    charset: Sequence[str],
    pages: Sequence[str],
    fmt: str = "text",
    *,
    pretty: bool = False,
    xadvance_padding: int = 0,
) -> bytes:
    if fmt not in FORMATS:
        raise ValueError(f"descriptor format should be one of {FORMATS}, not {fmt!r}")
    if not pages:
        raise ValueError("at least one page file is required")

    common = _common(font, plan)
    chars = _chars(font, plan, charset, xadvance_padding)
    if fmt == "xml":
        return _write_xml(font, common, pages, chars, pretty)
    return _write_text(common, pages, chars)


def _parse_fields(line: str) -> Dict[str, str]:
    return dict(item.split("=", 1) for item in shlex.split(line) if item)


def _to_ints(fields: Dict[str, str]) -> Dict[str, int]:
    return {key: int(value) for key, value in fields.items()}


def parse_text(data: bytes) -> Dict[str, Any]:
    """Read a text descriptor back into its `common`, `pages` and `chars` records."""
    parsed: Dict[str, Any] = {"common": {}, "pages": [], "chars": []}
    for line in data.decode("utf-8").splitlines():
        if " " not in line:
            continue
        tag, rest = line.split(" ", 1)
        fields = _parse_fields(rest)
        if tag == "common":
            parsed["common"] = _to_ints(fields)
        elif tag == "page":
            parsed["pages"].append({"id": int(fields["id"]), "file": fields["file"]})
        elif tag == "char":
            parsed["chars"].append(_to_ints(fields))
    return parsed
