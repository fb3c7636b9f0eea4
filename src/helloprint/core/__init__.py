"""Core data structures: byte cursor, value types, tables and configuration."""

from __future__ import annotations

from .config import FingerprintConfig
from .cursor import ByteCursor
from .types import Extension, FieldSet, Fingerprint, FingerprintResult, HandshakeRole, TransportMode

__all__ = [
    "ByteCursor",
    "Extension",
    "FieldSet",
    "Fingerprint",
    "FingerprintConfig",
    "FingerprintResult",
    "HandshakeRole",
    "TransportMode",
]
