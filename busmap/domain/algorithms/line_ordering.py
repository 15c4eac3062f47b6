from __future__ import annotations

from functools import cmp_to_key
from typing import Iterable

_DIGITS = frozenset("0123456789")


def _letter_part(label: str) -> str:
    return "".join(ch for ch in label if ch.isalpha())


def _digit_part(label: str) -> str:
    # Only ASCII 0-9 count as numeric.
    return "".join(ch for ch in label if ch in _DIGITS)


def _cmp(a: object, b: object) -> int:
    return (a > b) - (a < b)  # type: ignore[operator]


def compare_lines(a: str, b: str) -> int:
    """Natural ordering of line labels: letters first, then the number.

    ``"20" < "34" < "200" < "N61"``; labels with equal letter parts and a
    missing number fall back to plain string comparison.
    """

    by_letters = _cmp(_letter_part(a), _letter_part(b))
    if by_letters != 0:
        return by_letters

    digits_a = _digit_part(a)
    digits_b = _digit_part(b)
    if digits_a and digits_b:
        by_number = _cmp(int(digits_a), int(digits_b))
        if by_number != 0:
            return by_number

    return _cmp(a, b)


line_sort_key = cmp_to_key(compare_lines)


def sort_lines(lines: Iterable[str]) -> list[str]:
    """Return a new sorted list; the input is left untouched."""

    return sorted(lines, key=line_sort_key)
