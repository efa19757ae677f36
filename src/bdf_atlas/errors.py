"""Errors raised while converting a font into an atlas."""

from __future__ import annotations


class ConversionError(Exception):
    pass


class InvalidFont(ConversionError):
    """Font metrics or glyph data cannot be laid out."""


class MissingGlyph(ConversionError):
    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(f"font has no glyph for {char!r} (code {ord(char)})")


class PackingOverflow(ConversionError):
    """A planned cell falls outside the atlas."""


class EncodingFailure(ConversionError):
    def __init__(self, kind: str, message: str) -> None:
        self.kind = kind
        super().__init__(f"{kind} encoder failed: {message}")
