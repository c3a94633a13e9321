"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/natural.py
Natural ("human") string ordering: "img2" sorts before "img10".

Strings are split into maximal runs of digits and non-digits and compared
run by run. Non-digit runs compare ordinally, digit runs by numeric value
(leading zeros ignored, no upper bound). A string whose runs are a prefix
of the other's sorts first. Strings equal under these rules are finally ordered
ordinally so the order is total.

The reversed variant only flips the numeric comparison of digit runs;
text runs still sort ascending.
"""

import re
from functools import cmp_to_key, lru_cache
from typing import Iterable, List, Tuple

_PATTERN_RUNS = re.compile(r'[0-9]+|[^0-9]+')


@lru_cache(maxsize=8192)
def split_runs(value: str) -> Tuple[str, ...]:
    """
    Examples:
        "img10.png" → ("img", "10", ".png")
        "2024-01"   → ("2024", "-", "01")
    """
    return tuple(_PATTERN_RUNS.findall(value))


def _ordinal(left: str, right: str) -> int:
    return (left > right) - (left < right)


def _is_digits(run: str) -> bool:
    return run[0] in "0123456789"


def _compare_runs(left: str, right: str, reverse_numeric: bool) -> int:
    if not (_is_digits(left) and _is_digits(right)):
        return _ordinal(left, right)

    # Without leading zeros, longer runs are larger and equal lengths compare ordinally
    x, y = left.lstrip("0"), right.lstrip("0")
    result = (len(x) > len(y)) - (len(x) < len(y)) or _ordinal(x, y)
    return -result if reverse_numeric else result


def _compare(left: str, right: str, reverse_numeric: bool) -> int:
    if left == right:
        return 0

    left_runs = split_runs(left)
    right_runs = split_runs(right)
    for l_run, r_run in zip(left_runs, right_runs):
        if l_run != r_run:
            result = _compare_runs(l_run, r_run, reverse_numeric)
            if result:
                return result

    if len(left_runs) != len(right_runs):
        return -1 if len(left_runs) < len(right_runs) else 1

    # Only leading zeros differ, e.g. "a01" vs "a1"
    return _ordinal(left, right)


def natural_compare(left: str, right: str) -> int:
    """Three-way natural comparison: negative, zero or positive."""
    return _compare(left, right, reverse_numeric=False)


def natural_reversed_compare(left: str, right: str) -> int:
    """Natural comparison with digit runs ordered descending."""
    return _compare(left, right, reverse_numeric=True)


natural_key = cmp_to_key(natural_compare)
natural_reversed_key = cmp_to_key(natural_reversed_compare)


def natural_sorted(values: Iterable[str], reverse_numeric: bool = False) -> List[str]:
    """
    Examples:
        natural_sorted(["img2", "img10", "img1"])  → ["img1", "img2", "img10"]
        natural_sorted(["img2", "img10", "img1"], reverse_numeric=True)
            → ["img10", "img2", "img1"]
    """
    return sorted(values, key=natural_reversed_key if reverse_numeric else natural_key)
