"""Hello message field extraction."""

from __future__ import annotations

from .hello import EXTENSION_DECODERS, highest_version, parse_hello

__all__ = [
    "EXTENSION_DECODERS",
    "highest_version",
    "parse_hello",
]
