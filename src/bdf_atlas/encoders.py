"""Raster encoders turning a composited pixel buffer into image file bytes."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Callable

from .composite import PixelBuffer

logger = logging.getLogger(__name__)

PRIMARY = "primary"
SECONDARY = "secondary"


@dataclass(frozen=True)
class RasterArtifact:
    data: bytes
    extension: str
    kind: str


Encoder = Callable[[PixelBuffer], RasterArtifact]


def _encode(buffer: PixelBuffer, fmt: str, **params) -> bytes:
    out = io.BytesIO()
    buffer.to_image().save(out, format=fmt, **params)
    return out.getvalue()


def encode_png(buffer: PixelBuffer) -> RasterArtifact:
    """Optimized PNG; the primary atlas page."""
    data = _encode(buffer, "PNG", optimize=True)
    logger.debug("encoded %dx%d png, %d bytes", buffer.width, buffer.height, len(data))
    return RasterArtifact(data=data, extension="png", kind=PRIMARY)


def encode_webp_lossless(buffer: PixelBuffer) -> RasterArtifact:
    data = _encode(buffer, "WEBP", lossless=True, quality=100, method=6, exact=True)
    logger.debug("encoded %dx%d webp, %d bytes", buffer.width, buffer.height, len(data))
    return RasterArtifact(data=data, extension="webp", kind=SECONDARY)
