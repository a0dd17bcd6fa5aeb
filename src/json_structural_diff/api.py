"""Public API functions for json-structural-diff.

This module provides the user-facing functions: compare, compare_objects,
compare_arrays, format_diff, apply_diff, is_equal and similarity_score.
Each comparison creates a fresh StructuralDiffer to guarantee zero shared
state between calls.
"""

from __future__ import annotations

from typing import Any

from json_structural_diff import patch
from json_structural_diff.algorithm.config import DiffConfig, FormatOptions
from json_structural_diff.algorithm.differ import StructuralDiffer
from json_structural_diff.result import Diff
from json_structural_diff.tree.positions import Name
from json_structural_diff.tree.values import ValueKind, kind_of, values_equal

__all__ = [
    "ROOT",
    "apply_diff",
    "compare",
    "compare_arrays",
    "compare_objects",
    "format_diff",
    "is_equal",
    "similarity_score",
]

# Position of a root-level replacement (the JSON Pointer of the root is "").
ROOT = Name("")


def compare(left: Any, right: Any, config: DiffConfig | None = None) -> Diff:
    """Return the structural diff turning ``left`` into ``right``.

    Two objects (or two arrays) yield the container's delta list directly.
    Any other pair of unequal values yields a single ``Modified`` at ``ROOT``
    and a ``Diff`` with ``replaces_root=True``.

    Args:
        left:   Old JSON value (dict, list, str, int, float, bool, None).
        right:  New JSON value.
        config: Engine settings.  Defaults to ``DiffConfig()`` when None.

    Returns:
        A ``Diff``; empty when the values are structurally equal.

    Raises:
        UnsupportedValueError: If either tree holds a non-JSON value.
        MaxDepthExceededError: If nesting exceeds ``config.max_depth``.
    """
    kind = kind_of(left)
    if kind == kind_of(right):
        if kind == ValueKind.OBJECT:
            return compare_objects(left, right, config=config)
        if kind == ValueKind.ARRAY:
            return compare_arrays(left, right, config=config)

    same, delta = StructuralDiffer(config).compare_values(ROOT, left, right)
    if same or delta is None:
        return Diff()
    return Diff((delta,), replaces_root=True)


def compare_objects(
    left: dict[str, Any],
    right: dict[str, Any],
    config: DiffConfig | None = None,
) -> Diff:
    """Return the key-wise diff of two objects."""
    return Diff(tuple(StructuralDiffer(config).compare_objects(left, right)))


def compare_arrays(
    left: list[Any],
    right: list[Any],
    config: DiffConfig | None = None,
) -> Diff:
    """Return the LCS-anchored diff of two arrays."""
    return Diff(tuple(StructuralDiffer(config).compare_arrays(left, right)))


def format_diff(
    diff: Diff,
    left: Any,
    show_array_index: bool = False,
    colored: bool = False,
) -> str:
    """Render ``diff`` against ``left`` as ``+``/``-`` marked lines.

    Args:
        diff:             Result of ``compare(left, ...)``.
        left:             The old tree (an object or an array).
        show_array_index: Prefix array elements with their index.
        colored:          Wrap changed lines in ANSI colour escapes.

    Returns:
        The rendered text, without a trailing newline.
    """
    options = FormatOptions(show_array_index=show_array_index, colored=colored)
    return diff.format(left, options)


def apply_diff(left: Any, diff: Diff) -> Any:
    """Return a new value equal to the right-hand side ``diff`` was computed for."""
    return patch.apply_diff(left, diff.deltas, replaces_root=diff.replaces_root)


def is_equal(left: Any, right: Any) -> bool:
    """Return True if the two JSON values are structurally equal."""
    return values_equal(left, right)


def similarity_score(
    left: Any,
    right: Any,
    config: DiffConfig | None = None,
) -> float:
    """Return the mean similarity of the diff of two values.

    Returns:
        A float in [0.0, 1.0].  1.0 means identical; 0.0 means every
        top-level delta is an insertion or a deletion.
    """
    return compare(left, right, config=config).similarity
