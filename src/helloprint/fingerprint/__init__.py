"""Canonicalization, hashing and assembly of hello fingerprints."""

from __future__ import annotations

from .assemble import assemble, fingerprint_fields, fingerprint_handshake
from .canonical import CanonicalHello, canonicalize

__all__ = [
    "CanonicalHello",
    "assemble",
    "canonicalize",
    "fingerprint_fields",
    "fingerprint_handshake",
]
