"""Atlas geometry: charset ordering and grid cell assignment."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AtlasPlan:
    width: int
    height: int
    columns: int
    rows: int
    cell_width: int
    cell_height: int
    cells: Tuple[Tuple[int, int], ...]

    def cell(self, index: int) -> Tuple[int, int]:
        return self.cells[index]


def ordered_charset(chars: Iterable[str]) -> Tuple[str, ...]:
    """Deduplicate `chars`, keeping the first occurrence of each."""
    charset = tuple(dict.fromkeys(chars))
    if not charset:
        raise ValueError("charset is empty")
    for char in charset:
        if len(char) != 1:
            raise ValueError(f"charset entries must be single characters, got {char!r}")
    return charset


def _next_power_of_two(value: int) -> int:
    return 1 << max(value - 1, 0).bit_length()


def plan(charset_size: int, cell_width: int, cell_height: int) -> AtlasPlan:
    if charset_size <= 0:
        raise ValueError(f"charset_size must be positive, got {charset_size}")
    if cell_width <= 0 or cell_height <= 0:
        raise ValueError(f"cell size must be positive, got {cell_width}x{cell_height}")

    area = charset_size * cell_width * cell_height
    side = 2 ** math.ceil(math.log2(math.sqrt(area)))

    # a single cell wider than the square still needs one column
    width = max(side, _next_power_of_two(cell_width))
    columns = width // cell_width
    rows = math.ceil(charset_size / columns)
    height = side
    if rows * cell_height > height:
        height = rows * cell_height

    cells = tuple(
        ((i % columns) * cell_width, (i // columns) * cell_height)
        for i in range(charset_size)
    )
    logger.debug(
        "planned %dx%d atlas, %d columns x %d rows of %dx%d cells",
        width, height, columns, rows, cell_width, cell_height,
    )
    return AtlasPlan(
        width=width,
        height=height,
        columns=columns,
        rows=rows,
        cell_width=cell_width,
        cell_height=cell_height,
        cells=cells,
    )
