"""StructuralDiffer: recursive structural diff of two JSON values.

Architecture:
- compare_values: dispatches on the pair of value kinds.  Different kinds
  produce a Modified; two objects recurse via compare_objects; two arrays
  via compare_arrays; equal-kind scalars compare structurally.
- compare_objects: key-wise, in two passes over sorted keys (left keys, then
  right-only keys), so the delta order is stable.
- compare_arrays: three steps.

  A. Anchoring.  An LCS under structural equality fixes the elements that
     did not change; they never appear in the diff.  Every other element is
     a deletion (left) or addition (right) candidate, tagged with its bucket:
     the number of anchors that precede it on its own side.
  B. Move detection.  Each deletion candidate, in left order, takes the
     first still-free addition candidate that is structurally equal to it.
     First-fit, not optimal: the output must be reproducible.
  C. Bucketed alignment.  Per bucket, remaining deletions and additions are
     paired by the similarity matcher; paired items recurse through
     compare_values, the rest become Deleted and Added.

  Emission order: every Moved (discovery order), then per bucket the paired
  deltas, the free deletions, the free additions.

Every delta produced below the root carries its position relative to the
container that holds it.  Depth is bounded by ``DiffConfig.max_depth``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from json_structural_diff.algorithm.config import DiffConfig
from json_structural_diff.algorithm.lcs import lcs_index_pairs
from json_structural_diff.algorithm.matcher import maximize_similarities
from json_structural_diff.deltas import (
    Added,
    ArrayDelta,
    Deleted,
    Delta,
    Modified,
    Moved,
    ObjectDelta,
)
from json_structural_diff.errors import MaxDepthExceededError
from json_structural_diff.tree.positions import Index, Name, Position
from json_structural_diff.tree.values import (
    ValueKind,
    kind_of,
    sorted_keys,
    values_equal,
)

__all__ = ["StructuralDiffer"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Candidate:
    """A non-anchor array element.

    Attributes:
        index:    Index in its own array.
        bucket:   Number of anchors preceding it on its own side.
        item:     The element value.
        consumed: Set once move detection has paired it.
    """

    index: int
    bucket: int
    item: Any
    consumed: bool = False


class StructuralDiffer:
    """Recursive structural differ for JSON values.

    The differ holds no per-comparison state besides the current recursion
    path, so one instance can serve any number of sequential comparisons and
    always returns identical deltas for identical inputs.

    Example::

        from json_structural_diff.algorithm.differ import StructuralDiffer

        differ = StructuralDiffer()
        differ.compare_objects({"a": 1, "b": 2}, {"a": 1, "b": 3})
        # [Modified(position=Name(name='b'), old_value=2, new_value=3)]
    """

    def __init__(self, config: DiffConfig | None = None) -> None:
        """Initialise the differ.

        Args:
            config: Engine settings.  Defaults to ``DiffConfig()``.
        """
        self._config = config if config is not None else DiffConfig()
        self._path: list[str] = []

    @property
    def config(self) -> DiffConfig:
        return self._config

    # ------------------------------------------------------------------
    # Value dispatch
    # ------------------------------------------------------------------

    def compare_values(
        self, position: Position, left: Any, right: Any
    ) -> tuple[bool, Delta | None]:
        """Compare two values found at ``position``.

        Args:
            position: Address shared by both values in their parents.
            left:     Old value.
            right:    New value.

        Returns:
            ``(same, delta)``: ``(True, None)`` when the values are
            structurally equal, else ``(False, delta)``.

        Raises:
            UnsupportedValueError: If either value is not a JSON value.
            MaxDepthExceededError: If nesting exceeds ``config.max_depth``.
        """
        kind = kind_of(left, self._pointer(position))
        if kind != kind_of(right, self._pointer(position)):
            return False, Modified(position, left, right)

        if kind == ValueKind.OBJECT:
            children = self._descend(position, self.compare_objects, left, right)
            if children:
                return False, ObjectDelta(position, tuple(children))
            return True, None

        if kind == ValueKind.ARRAY:
            children = self._descend(position, self.compare_arrays, left, right)
            if children:
                return False, ArrayDelta(position, tuple(children))
            return True, None

        if not values_equal(left, right):
            return False, Modified(position, left, right)
        return True, None

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    def compare_objects(
        self, left: dict[str, Any], right: dict[str, Any]
    ) -> list[Delta]:
        """Key-wise diff of two objects.

        Keys are never matched across names: a renamed key is reported as a
        Deleted plus an Added even when the values are identical.
        """
        deltas: list[Delta] = []
        path = self._pointer()

        for name in sorted_keys(left, path):
            if name in right:
                same, delta = self.compare_values(Name(name), left[name], right[name])
                if not same and delta is not None:
                    deltas.append(delta)
            else:
                deltas.append(Deleted(Name(name), left[name]))

        for name in sorted_keys(right, path):
            if name not in left:
                deltas.append(Added(Name(name), right[name]))

        return deltas

    # ------------------------------------------------------------------
    # Arrays
    # ------------------------------------------------------------------

    def compare_arrays(self, left: list[Any], right: list[Any]) -> list[Delta]:
        """LCS-anchored, move-detecting diff of two arrays."""
        deltas: list[Delta] = []

        # Step A: anchors
        anchors = lcs_index_pairs(left, right, values_equal)
        anchored_left = {pair.left for pair in anchors}
        anchored_right = {pair.right for pair in anchors}

        maybe_deleted = self._candidates(left, anchored_left)
        maybe_added = self._candidates(right, anchored_right)

        # Step B: moves
        moves = 0
        if self._config.detect_moves:
            for deleted in maybe_deleted:
                for added in maybe_added:
                    if added.consumed or not values_equal(deleted.item, added.item):
                        continue
                    deltas.append(
                        Moved(Index(deleted.index), Index(added.index), deleted.item)
                    )
                    deleted.consumed = True
                    added.consumed = True
                    moves += 1
                    break

        # Step C: per-bucket alignment
        del_buckets = self._buckets(maybe_deleted, len(anchors))
        add_buckets = self._buckets(maybe_added, len(anchors))

        for bucket_dels, bucket_adds in zip(del_buckets, add_buckets, strict=True):
            match = maximize_similarities(bucket_dels, bucket_adds, self._pair)
            deltas.extend(match.deltas)
            deltas.extend(Deleted(Index(c.index), c.item) for c in match.free_left)
            deltas.extend(Added(Index(c.index), c.item) for c in match.free_right)

        logger.debug(
            "array diff at %r: %d/%d elements, %d anchors, %d moves, %d deltas",
            self._pointer(),
            len(left),
            len(right),
            len(anchors),
            moves,
            len(deltas),
        )
        return deltas

    def _pair(self, deleted: _Candidate, added: _Candidate) -> Delta | None:
        """Delta turning a deletion candidate into an addition candidate."""
        same, delta = self.compare_values(Index(added.index), deleted.item, added.item)
        if same or delta is None:
            return None
        if isinstance(delta, Modified):
            return Modified(
                delta.position,
                delta.old_value,
                delta.new_value,
                old_position=Index(deleted.index),
            )
        if isinstance(delta, ObjectDelta):
            return ObjectDelta(
                delta.position, delta.children, old_position=Index(deleted.index)
            )
        if isinstance(delta, ArrayDelta):
            return ArrayDelta(
                delta.position, delta.children, old_position=Index(deleted.index)
            )
        return delta

    @staticmethod
    def _candidates(items: list[Any], anchored: set[int]) -> list[_Candidate]:
        candidates: list[_Candidate] = []
        bucket = 0
        for index, item in enumerate(items):
            if index in anchored:
                bucket += 1
            else:
                candidates.append(_Candidate(index=index, bucket=bucket, item=item))
        return candidates

    @staticmethod
    def _buckets(
        candidates: list[_Candidate], anchor_count: int
    ) -> list[list[_Candidate]]:
        """Group the unconsumed candidates by bucket, ``anchor_count + 1`` buckets."""
        buckets: list[list[_Candidate]] = [[] for _ in range(anchor_count + 1)]
        for candidate in candidates:
            if not candidate.consumed:
                buckets[candidate.bucket].append(candidate)
        return buckets

    # ------------------------------------------------------------------
    # Depth tracking
    # ------------------------------------------------------------------

    def _descend(
        self,
        position: Position,
        compare: Callable[[Any, Any], list[Delta]],
        left: Any,
        right: Any,
    ) -> list[Delta]:
        self._path.append(str(position))
        try:
            if len(self._path) > self._config.max_depth:
                raise MaxDepthExceededError(self._config.max_depth, self._pointer())
            return compare(left, right)
        finally:
            self._path.pop()

    def _pointer(self, position: Position | None = None) -> str:
        """JSON Pointer of the current container, or of ``position`` inside it."""
        segments = self._path if position is None else [*self._path, str(position)]
        return "".join(f"/{segment}" for segment in segments)
