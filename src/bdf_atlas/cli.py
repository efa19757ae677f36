"""Command line entry point: BDF fonts in, atlas pages and descriptors out."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .bdf import parse_bdf
from .cache import ConversionCache
from .config import ConversionConfig
from .descriptor import FORMATS
from .errors import ConversionError
from .pipeline import ConversionResult, convert
from .sink import DirectorySink, content_hash_name


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Pack BDF bitmap fonts into texture atlases with BMFont descriptors."
    )
    parser.add_argument("fonts", nargs="+", help="BDF font files to convert.")
    parser.add_argument(
        "--output-dir",
        required=True,
        help="Directory to write atlas pages and descriptors.",
    )
    parser.add_argument(
        "--charset",
        default=None,
        help="Characters to pack (default: BDF_ATLAS_CHARSET or letters, digits, space and period).",
    )
    parser.add_argument(
        "--format",
        dest="descriptor_format",
        choices=FORMATS,
        default=None,
        help="Descriptor format.",
    )
    parser.add_argument(
        "--pretty",
        dest="pretty_print_xml",
        action="store_true",
        default=None,
        help="Indent XML descriptors.",
    )
    parser.add_argument(
        "--no-secondary",
        dest="emit_secondary_lossless",
        action="store_false",
        default=None,
        help="Skip the lossless WebP copy of each atlas.",
    )
    parser.add_argument(
        "--xadvance-padding",
        type=int,
        default=None,
        help="Extra pixels added to every glyph's xadvance.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log debug output.")
    return parser.parse_args(argv)


def _convert_source(source: bytes, config: ConversionConfig) -> ConversionResult:
    font = parse_bdf(source.decode("utf-8", errors="replace"))
    return convert(font, config)


def write_result(result: ConversionResult, sink: DirectorySink) -> Dict[str, Any]:
    pages = [
        str(sink.emit(name, page.data))
        for name, page in zip(result.page_names, result.pages)
    ]
    descriptor_name = content_hash_name(result.descriptor, result.descriptor_extension)
    descriptor_path = sink.emit(descriptor_name, result.descriptor)
    return {
        "descriptor": str(descriptor_path),
        "pages": pages,
        "width": result.plan.width,
        "height": result.plan.height,
        "glyphs": len(result.plan.cells),
    }


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ConversionConfig.from_env(
            charset=args.charset,
            descriptor_format=args.descriptor_format,
            pretty_print_xml=args.pretty_print_xml,
            emit_secondary_lossless=args.emit_secondary_lossless,
            xadvance_padding=args.xadvance_padding,
        )
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    sink = DirectorySink(Path(args.output_dir).expanduser().resolve())
    cache = ConversionCache()
    converted = []

    for font_arg in args.fonts:
        font_path = Path(font_arg).expanduser().resolve()
        try:
            source = font_path.read_bytes()
            result = cache.get_or_convert(source, config, _convert_source)
            entry = write_result(result, sink)
        except (OSError, ConversionError) as exc:
            print(f"error: {font_path}: {exc}", file=sys.stderr)
            return 1
        entry["font"] = str(font_path)
        converted.append(entry)

    summary = {
        "output_dir": str(sink.root),
        "fonts": converted,
        "cache_hits": cache.hits,
        "config": config.as_dict(),
    }
    print(json.dumps(summary))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
