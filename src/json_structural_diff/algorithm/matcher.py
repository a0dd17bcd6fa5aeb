"""Order-preserving similarity matcher for one bucket of array candidates.

Given the deletions ``D`` and additions ``A`` left in a bucket, chooses a
monotone partial pairing that maximizes the summed similarity of the paired
deltas.  This is a weighted alignment DP, not a bipartite assignment: pairs
never cross.

DP table, filled from the bottom-right corner with zero margins::

    T[x][y] = max(T[x+1][y], T[x][y+1], S[x][y] + T[x+1][y+1])

Traceback from ``(0, 0)`` prefers skipping a deletion, then skipping an
addition, then pairing, on equal scores.  With ``k = min(n, m) - 1`` a skip
is only allowed while enough items remain on the other side, so at least one
pair is always formed when both sides are non-empty.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

import numpy as np

from json_structural_diff.deltas import Delta

__all__ = ["MatchResult", "maximize_similarities"]

T = TypeVar("T")

PairFn = Callable[[T, T], Delta | None]


@dataclass(frozen=True, slots=True)
class MatchResult(Generic[T]):
    """Outcome of ``maximize_similarities``.

    Attributes:
        deltas:     Deltas of the paired items, in traceback order.
        free_left:  Deletions left unpaired, in input order.
        free_right: Additions left unpaired, in input order.
    """

    deltas: list[Delta]
    free_left: list[T]
    free_right: list[T]


def maximize_similarities(
    left: Sequence[T],
    right: Sequence[T],
    pair: PairFn[T],
) -> MatchResult[T]:
    """Pair items of ``left`` with items of ``right`` maximizing total similarity.

    Args:
        left:  Deletion candidates, in old-array order.
        right: Addition candidates, in new-array order.
        pair:  Builds the delta describing ``left[i]`` turned into ``right[j]``.
            ``None`` means the two items are equal (similarity 1.0, no delta).

    Returns:
        A ``MatchResult``.  When either side is empty no pairing happens and
        every item is returned as free.
    """
    n = len(left)
    m = len(right)

    if n == 0 or m == 0:
        return MatchResult(deltas=[], free_left=list(left), free_right=list(right))

    delta_table: list[list[Delta | None]] = [
        [pair(left_item, right_item) for right_item in right] for left_item in left
    ]

    similarity_matrix = np.empty((n, m), dtype=float)
    for i in range(n):
        for j in range(m):
            delta = delta_table[i][j]
            similarity_matrix[i, j] = 1.0 if delta is None else delta.similarity

    dp = np.zeros((n + 1, m + 1), dtype=float)
    for x in range(n - 1, -1, -1):
        for y in range(m - 1, -1, -1):
            dp[x, y] = max(
                dp[x + 1, y],
                dp[x, y + 1],
                similarity_matrix[x, y] + dp[x + 1, y + 1],
            )

    max_unpaired = min(n, m) - 1

    deltas: list[Delta] = []
    free_left: list[T] = []
    free_right: list[T] = []

    x = y = 0
    while x < n and y < m:
        current = dp[x, y]
        x_limit = n - max_unpaired + y
        y_limit = m - max_unpaired + x

        if x + 1 < x_limit and current == dp[x + 1, y]:
            free_left.append(left[x])
            x += 1
        elif y + 1 < y_limit and current == dp[x, y + 1]:
            free_right.append(right[y])
            y += 1
        else:
            delta = delta_table[x][y]
            if delta is not None:
                deltas.append(delta)
            x += 1
            y += 1

    free_left.extend(left[x:])
    free_right.extend(right[y:])

    return MatchResult(deltas=deltas, free_left=free_left, free_right=free_right)
