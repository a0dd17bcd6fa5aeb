"""Longest common subsequence over an arbitrary equality predicate.

Used twice by the engine: to anchor array elements (structural equality of
JSON values) and to score string similarity (character equality).

The table is the classic ``(n+1) x (m+1)`` bottom-up LCS table where
``table[x][y]`` is the LCS length of ``left[:x]`` and ``right[:y]``.
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Sequence
from typing import Any, NamedTuple, TypeVar

__all__ = ["LCSPair", "lcs_index_pairs", "lcs_length", "lcs_table"]

T = TypeVar("T")

Equality = Callable[[Any, Any], bool]


class LCSPair(NamedTuple):
    """Indices of one matched element in the left and right sequences."""

    left: int
    right: int


def lcs_table(
    left: Sequence[T],
    right: Sequence[T],
    eq: Equality = operator.eq,
) -> list[list[int]]:
    """Build the LCS length table for ``left`` and ``right``.

    Args:
        left:  First sequence.
        right: Second sequence.
        eq:    Equality predicate.  Defaults to ``==``.

    Returns:
        ``(len(left)+1) x (len(right)+1)`` table of prefix LCS lengths.
    """
    size_x = len(left) + 1
    size_y = len(right) + 1

    table = [[0] * size_y for _ in range(size_x)]

    for y in range(1, size_y):
        for x in range(1, size_x):
            increment = 1 if eq(left[x - 1], right[y - 1]) else 0
            table[x][y] = max(
                table[x - 1][y - 1] + increment,
                table[x - 1][y],
                table[x][y - 1],
            )
    return table


def lcs_length(
    left: Sequence[T],
    right: Sequence[T],
    eq: Equality = operator.eq,
) -> int:
    """Return the length of an LCS of ``left`` and ``right``."""
    return lcs_table(left, right, eq)[len(left)][len(right)]


def lcs_index_pairs(
    left: Sequence[T],
    right: Sequence[T],
    eq: Equality = operator.eq,
) -> list[LCSPair]:
    """Recover one LCS as ascending index pairs.

    Backtracks from ``(n, m)``; on a non-match, steps on the left side when
    ``table[x-1][y] >= table[x][y-1]``, otherwise on the right side.  The
    tie-break fixes which LCS is reported when several exist.

    Returns:
        List of ``LCSPair`` sorted by both ``left`` and ``right`` index.
    """
    table = lcs_table(left, right, eq)
    pairs: list[LCSPair] = []

    x, y = len(left), len(right)
    while x > 0 and y > 0:
        if eq(left[x - 1], right[y - 1]):
            pairs.append(LCSPair(x - 1, y - 1))
            x -= 1
            y -= 1
        elif table[x - 1][y] >= table[x][y - 1]:
            x -= 1
        else:
            y -= 1

    pairs.reverse()
    return pairs
