"""Hashing utilities for fingerprint computation."""

from __future__ import annotations

import hashlib

from ..core.tables import EMPTY_HASH, HASH_LENGTH


def hash12(canonical: str) -> str:
    """Hash a canonical string into a fixed-width fingerprint segment.

    The segment is the first 12 hex characters of the SHA-256 digest of
    the UTF-8 encoded string. An empty string is not hashed; it maps to
    twelve zeros.

    Args:
        canonical: Canonical, already filtered and ordered field string.

    Returns:
        12-character lowercase hex segment.

    Example:
        >>> hash12("551d0f,551d25,551d11")
        'aae71e8db6d7'
        >>> hash12("")
        '000000000000'
    """
    if not canonical:
        return EMPTY_HASH
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:HASH_LENGTH]
