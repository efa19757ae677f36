"""Pack bitmap fonts into a texture atlas with a BMFont descriptor."""

from __future__ import annotations

from .config import DEFAULT_CHARSET, ConversionConfig
from .errors import (
    ConversionError,
    EncodingFailure,
    InvalidFont,
    MissingGlyph,
    PackingOverflow,
)
from .font import BoundingBox, Font, Glyph
from .pipeline import ConversionResult, convert, convert_async

__all__ = [
    "DEFAULT_CHARSET",
    "BoundingBox",
    "ConversionConfig",
    "ConversionError",
    "ConversionResult",
    "EncodingFailure",
    "Font",
    "Glyph",
    "InvalidFont",
    "MissingGlyph",
    "PackingOverflow",
    "convert",
    "convert_async",
]
