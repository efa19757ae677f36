from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv

from .descriptor import FORMATS

DEFAULT_CHARSET = " ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz.0123456789"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _env_bool(name: str) -> Optional[bool]:
    raw = os.environ.get(name)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} should be a boolean, got {raw!r}")


def _env_int(name: str) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} should be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class ConversionConfig:
    charset: str = DEFAULT_CHARSET
    emit_secondary_lossless: bool = True
    descriptor_format: str = "text"
    pretty_print_xml: bool = False
    xadvance_padding: int = 0

    def __post_init__(self) -> None:
        if not self.charset:
            raise ValueError("charset must not be empty")
        if self.descriptor_format not in FORMATS:
            raise ValueError(
                f"descriptor_format should be one of {FORMATS}, not {self.descriptor_format!r}"
            )
        if self.xadvance_padding < 0:
            raise ValueError(f"xadvance_padding must be >= 0, got {self.xadvance_padding}")

    @classmethod
    def from_env(cls, **overrides: Any) -> "ConversionConfig":
        """Build a config from BDF_ATLAS_* variables (and a .env file); non-None overrides win."""
        load_dotenv(find_dotenv(usecwd=True))
        values: Dict[str, Any] = {
            "charset": os.environ.get("BDF_ATLAS_CHARSET"),
            "emit_secondary_lossless": _env_bool("BDF_ATLAS_SECONDARY"),
            "descriptor_format": os.environ.get("BDF_ATLAS_FORMAT"),
            "pretty_print_xml": _env_bool("BDF_ATLAS_PRETTY_XML"),
            "xadvance_padding": _env_int("BDF_ATLAS_XADVANCE_PADDING"),
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**{key: value for key, value in values.items() if value is not None})

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
