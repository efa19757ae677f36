"""Caller-side memoization of conversions, keyed by font source bytes plus config."""

from __future__ import annotations

import hashlib
import json
import logging
from typing import Callable, Dict

from .config import ConversionConfig
from .pipeline import ConversionResult

logger = logging.getLogger(__name__)


def fingerprint(source: bytes, config: ConversionConfig) -> str:
    digest = hashlib.sha256(source)
    digest.update(json.dumps(config.as_dict(), sort_keys=True).encode("utf-8"))
    return digest.hexdigest()


class ConversionCache:
    def __init__(self) -> None:
        self._results: Dict[str, ConversionResult] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._results)

    def get_or_convert(
        self,
        source: bytes,
        config: ConversionConfig,
        convert_fn: Callable[[bytes, ConversionConfig], ConversionResult],
    ) -> ConversionResult:
        key = fingerprint(source, config)
        result = self._results.get(key)
        if result is not None:
            self.hits += 1
            logger.debug("cache hit %s", key[:12])
            return result
        self.misses += 1
        result = convert_fn(source, config)
        self._results[key] = result
        return result
