"""GREASE value detection and filtering."""

from __future__ import annotations

from typing import Iterable

from ..core.tables import GREASE_VALUES


def is_grease(value: int) -> bool:
    """Check whether a 16-bit code is a reserved GREASE value.

    GREASE (Generate Random Extensions And Sustain Extensibility)
    values follow the pattern 0x?a?a where both bytes are equal.
    """
    return value in GREASE_VALUES


def filter_grease(values: Iterable[int]) -> list[int]:
    """Filter out GREASE values from a sequence.

    Order of the remaining values is preserved.

    Args:
        values: Sequence of 16-bit codes (ciphers, groups, extension types).

    Returns:
        List with GREASE values removed.
    """
    return [v for v in values if v not in GREASE_VALUES]
