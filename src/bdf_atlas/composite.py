from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from PIL import Image

from .errors import InvalidFont, PackingOverflow
from .font import Font, check_bitmap
from .layout import AtlasPlan

INK = (255, 255, 255, 255)
TRANSPARENT = (0, 0, 0, 0)


@dataclass(frozen=True)
class PixelBuffer:
    width: int
    height: int
    data: bytes

    def to_image(self) -> Image.Image:
        return Image.frombytes("RGBA", (self.width, self.height), self.data)

    def pixel(self, x: int, y: int) -> bytes:
        offset = (y * self.width + x) * 4
        return self.data[offset:offset + 4]


def composite(font: Font, plan: AtlasPlan, charset: Sequence[str]) -> PixelBuffer:
    """Draw every glyph of `charset` into its planned cell, sitting on the font baseline."""
    if len(charset) != len(plan.cells):
        raise PackingOverflow(
            f"plan has {len(plan.cells)} cells for {len(charset)} characters"
        )

    canvas = Image.new("RGBA", (plan.width, plan.height), TRANSPARENT)
    pixels = canvas.load()
    baseline = plan.cell_height + font.bounding_box.y

    for index, char in enumerate(charset):
        glyph = font.glyph_for(char)
        cell_x, cell_y = plan.cell(index)
        if (
            cell_x < 0
            or cell_y < 0
            or cell_x + plan.cell_width > plan.width
            or cell_y + plan.cell_height > plan.height
        ):
            raise PackingOverflow(
                f"cell ({cell_x}, {cell_y}) for {char!r} lies outside the "
                f"{plan.width}x{plan.height} atlas"
            )

        box = glyph.bounding_box
        left = cell_x + box.x
        top = cell_y + baseline - box.height - box.y

        if (
            left < cell_x
            or top < cell_y
            or left + box.width > cell_x + plan.cell_width
            or top + box.height > cell_y + plan.cell_height
        ):
            raise InvalidFont(
                f"glyph {char!r} box {box.width}x{box.height}{box.x:+d}{box.y:+d} "
                f"does not fit the {plan.cell_width}x{plan.cell_height} cell"
            )
        check_bitmap(glyph)

        for row, values in enumerate(glyph.bitmap):
            for column, value in enumerate(values):
                if value:
                    pixels[left + column, top + row] = INK

    return PixelBuffer(width=plan.width, height=plan.height, data=canvas.tobytes())
