from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from .composite import PixelBuffer, composite
from .config import ConversionConfig
from .descriptor import EXTENSIONS, serialize
from .encoders import (
    PRIMARY,
    SECONDARY,
    Encoder,
    RasterArtifact,
    encode_png,
    encode_webp_lossless,
)
from .errors import ConversionError, EncodingFailure
from .font import Font
from .layout import AtlasPlan, ordered_charset, plan
from .sink import content_hash_name

logger = logging.getLogger(__name__)

Namer = Callable[[RasterArtifact], str]

DEFAULT_ENCODERS: Dict[str, Encoder] = {
    PRIMARY: encode_png,
    SECONDARY: encode_webp_lossless,
}


@dataclass(frozen=True)
class ConversionResult:
    pages: List[RasterArtifact]
    page_names: List[str]
    descriptor: bytes
    descriptor_extension: str
    plan: AtlasPlan


def default_namer(artifact: RasterArtifact) -> str:
    return content_hash_name(artifact.data, artifact.extension)


def encode_pages(
    buffer: PixelBuffer,
    encoders: List[Tuple[str, Encoder]],
) -> List[RasterArtifact]:
    """Run every encoder on `buffer` concurrently; any failure fails them all."""
    with ThreadPoolExecutor(max_workers=len(encoders)) as pool:
        futures = [(kind, pool.submit(encoder, buffer)) for kind, encoder in encoders]
        pages = []
        for kind, future in futures:
            try:
                pages.append(future.result())
            except ConversionError:
                raise
            except Exception as exc:
                raise EncodingFailure(kind, str(exc) or type(exc).__name__) from exc
    return pages


def convert(
    font: Font,
    config: Optional[ConversionConfig] = None,
    *,
    namer: Optional[Namer] = None,
    encoders: Optional[Dict[str, Encoder]] = None,
) -> ConversionResult:
    """
    Lay out, draw and encode `font`, then describe the atlas.

    `encoders` replaces the default encoder for the `"primary"` or `"secondary"`
    page; `namer` picks the file name each encoded page is referenced by.
    """
    config = config or ConversionConfig()
    namer = namer or default_namer
    chosen = {**DEFAULT_ENCODERS, **(encoders or {})}
    unknown = set(chosen) - set(DEFAULT_ENCODERS)
    if unknown:
        raise ValueError(f"unknown encoder kinds: {sorted(unknown)}")

    font.validate()
    charset = ordered_charset(config.charset)
    for char in charset:
        font.glyph_for(char)

    atlas = plan(len(charset), font.cell_width, font.cell_height)
    buffer = composite(font, atlas, charset)

    fan_out: List[Tuple[str, Encoder]] = [(PRIMARY, chosen[PRIMARY])]
    if config.emit_secondary_lossless:
        fan_out.append((SECONDARY, chosen[SECONDARY]))
    pages = encode_pages(buffer, fan_out)

    page_names = [namer(page) for page in pages]
    descriptor = serialize(
        font,
        atlas,
        charset,
        page_names,
        config.descriptor_format,
        pretty=config.pretty_print_xml,
        xadvance_padding=config.xadvance_padding,
    )
    logger.debug(
        "converted %r: %d glyphs, pages %s", font.name, len(charset), ", ".join(page_names)
    )
    return ConversionResult(
        pages=pages,
        page_names=page_names,
        descriptor=descriptor,
        descriptor_extension=EXTENSIONS[config.descriptor_format],
        plan=atlas,
    )


def convert_async(
    executor: Executor,
    font: Font,
    config: Optional[ConversionConfig] = None,
    **kwargs,
) -> Future:
    """Submit a conversion; the future resolves once, with the result or the first error."""
    return executor.submit(convert, font, config, **kwargs)
