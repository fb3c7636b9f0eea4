"""Utility functions for fingerprint computation."""

from __future__ import annotations

from .grease import filter_grease, is_grease
from .hashing import hash12

__all__ = [
    # GREASE
    "filter_grease",
    "is_grease",
    # Hashing
    "hash12",
]
