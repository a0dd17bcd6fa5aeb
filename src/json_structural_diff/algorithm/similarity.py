"""Similarity heuristics for deltas.

Every delta carries a similarity in [0, 1] estimating how close the old and
new states are: 0 for plain insertions and deletions, up to 1 for a change
that barely changes anything.

- Modified: 0.3 (same position) + 0.3 (same kind) + 0.4 x content ratio,
  where the content ratio is ``string_similarity`` for strings and
  ``number_ratio`` for numbers (other kinds get no content bonus).
- Moved: 0.6 (identical content) + 0.4 x ``number_ratio(old_index, new_index)``.
- Containers: arithmetic mean of their children.

Ratios with a zero, non-finite, or opposite-sign operand are pinned to 0.0
so no similarity is ever NaN or negative.
"""

from __future__ import annotations

import math
import threading
from collections.abc import Iterable
from typing import Any, Protocol

import numpy as np
from cachetools import LRUCache, cached
from cachetools.keys import hashkey

from json_structural_diff.algorithm.lcs import lcs_length
from json_structural_diff.tree.values import ValueKind, kind_of

__all__ = [
    "deltas_similarity",
    "modified_similarity",
    "moved_similarity",
    "number_ratio",
    "string_similarity",
]

SAME_POSITION_SCORE = 0.3
SAME_KIND_SCORE = 0.3
CONTENT_WEIGHT = 0.4
MOVE_BASE_SCORE = 0.6
MOVE_DISTANCE_WEIGHT = 0.4

# String LCS is quadratic; the DP matcher scores every deletion/addition pair
# of a bucket, so the same pair of strings is often scored more than once.
_STRING_CACHE_SIZE = 4096


class _HasSimilarity(Protocol):
    @property
    def similarity(self) -> float: ...


def number_ratio(a: float, b: float) -> float:
    """Return ``min(a/b, b/a)``, a symmetric closeness ratio in [0, 1].

    - Equal operands (including ``0 == 0``) give 1.0.
    - A zero operand, operands of opposite sign, or a non-finite ratio give 0.0.
    - Integers whose quotient does not fit in a float also give 0.0.
    """
    if a == b:
        return 1.0
    if a == 0 or b == 0 or (a < 0) != (b < 0):
        return 0.0
    try:
        ratio = a / b
    except OverflowError:
        return 0.0
    if ratio > 1:
        ratio = 1 / ratio
    if not math.isfinite(ratio):
        return 0.0
    return float(ratio)


@cached(
    cache=LRUCache(maxsize=_STRING_CACHE_SIZE),
    key=hashkey,
    lock=threading.Lock(),
)
def string_similarity(a: str, b: str) -> float:
    """Return ``(l / len(a)) * (l / len(b))`` where ``l`` is the character LCS length.

    Two empty strings are identical (1.0); an empty string against a
    non-empty one shares nothing (0.0).
    """
    if not a or not b:
        return 1.0 if a == b else 0.0
    matching = float(lcs_length(a, b))
    return (matching / len(a)) * (matching / len(b))


def modified_similarity(old_value: Any, new_value: Any) -> float:
    """Similarity of replacing ``old_value`` with ``new_value`` in place."""
    similarity = SAME_POSITION_SCORE
    kind = kind_of(old_value)
    if kind != kind_of(new_value):
        return similarity

    similarity += SAME_KIND_SCORE
    if kind == ValueKind.STRING:
        similarity += CONTENT_WEIGHT * string_similarity(old_value, new_value)
    elif kind == ValueKind.NUMBER:
        similarity += CONTENT_WEIGHT * number_ratio(old_value, new_value)
    return similarity


def moved_similarity(old_index: int, new_index: int) -> float:
    """Similarity of moving an unchanged element from ``old_index`` to ``new_index``."""
    return MOVE_BASE_SCORE + MOVE_DISTANCE_WEIGHT * number_ratio(old_index, new_index)


def deltas_similarity(deltas: Iterable[_HasSimilarity]) -> float:
    """Arithmetic mean of the similarities of ``deltas``.

    Raises:
        ValueError: If ``deltas`` is empty (the mean is undefined).
    """
    scores = np.fromiter((d.similarity for d in deltas), dtype=float)
    if scores.size == 0:
        msg = "similarity of an empty delta list is undefined"
        raise ValueError(msg)
    return float(np.mean(scores))
