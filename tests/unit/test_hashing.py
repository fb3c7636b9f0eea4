"""Tests for fingerprint segment hashing."""

from __future__ import annotations

import hashlib

from helloprint.utils.hashing import hash12


def test_reference_vector() -> None:
    assert hash12("551d0f,551d25,551d11") == "aae71e8db6d7"


def test_empty_input_sentinel() -> None:
    assert hash12("") == "000000000000"


def test_truncated_sha256() -> None:
    canonical = "1301,1302,1303,c02b"
    assert hash12(canonical) == hashlib.sha256(canonical.encode()).hexdigest()[:12]


def test_shape_and_determinism() -> None:
    first = hash12("0005,000a,000b")
    assert first == hash12("0005,000a,000b")
    assert len(first) == 12
    assert first == first.lower()
    int(first, 16)
