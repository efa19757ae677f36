"""Naming and persisting conversion artifacts."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def content_hash_name(data: bytes, extension: str) -> str:
    return f"{hashlib.md5(data).hexdigest()}.{extension}"


class DirectorySink:
    def __init__(self, root: Path) -> None:
        self.root = root

    def emit(self, name: str, data: bytes) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        path = self.root / name
        path.write_bytes(data)
        logger.debug("wrote %s (%d bytes)", path, len(data))
        return path
