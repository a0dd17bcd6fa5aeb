"""Tests for apply_diff.

The central property: applying the diff of (left, right) to left rebuilds
right, and never mutates left.
"""

from __future__ import annotations

import copy
import json
from typing import Any

import pytest

from json_structural_diff import compare
from json_structural_diff.algorithm.config import DiffConfig
from json_structural_diff.deltas import (
    Added,
    ArrayDelta,
    Deleted,
    Modified,
    Moved,
    ObjectDelta,
)
from json_structural_diff.errors import DeltaTypeMismatchError, PatchError
from json_structural_diff.patch import apply_diff
from json_structural_diff.tree.positions import Index, Name
from json_structural_diff.tree.values import values_equal

_CASES: list[tuple[Any, Any]] = [
    ({"foo": 10, "bar": 20, "boz": 30}, {"foo": 10, "bar": 42}),
    ({"delete": {"x": [1, 2]}}, {"add": {"x": [1, 2]}}),
    (["a", "b", "c"], ["c", "a", "b"]),
    ([1, 2, 3, 4, 5], [5, 4, 3, 2, 1]),
    ([1, 2, 3], [4, 5, 6, 7]),
    ([1, 2, 3, 4], [2]),
    ([], [1, 2]),
    ([1, 2], []),
    ([1, 1, 2, 2], [2, 1, 2, 1]),
    (["a", "keep", "x"], ["keep", "x2"]),
    (
        [{"id": 1, "tags": ["a"]}, {"id": 2, "tags": []}, "s"],
        ["s", {"id": 2, "tags": ["b"]}, {"id": 1, "tags": ["a", "c"]}],
    ),
    (
        {"users": [{"name": "ann", "age": 30}, {"name": "bob", "age": 25}]},
        {"users": [{"name": "bob", "age": 26}, {"name": "cy", "age": 1}]},
    ),
    ({"a": {"b": {"c": [1, {"d": None}]}}}, {"a": {"b": {"c": [{"d": False}, 1]}}}),
    ({"k": [True, 1, None, "1"]}, {"k": ["1", None, 1, True]}),
    ({"a": 1}, {"a": [1]}),
    ({"": 1}, {"": 2}),
    (1, "one"),
    ({"a": 1}, [1]),
    (None, None),
]


class TestReconstruction:
    @pytest.mark.parametrize(("left", "right"), _CASES)
    def test_apply_rebuilds_right(self, left: Any, right: Any) -> None:
        diff = compare(left, right)
        assert values_equal(diff.apply(left), right)

    @pytest.mark.parametrize(("left", "right"), _CASES)
    def test_apply_without_moves_rebuilds_right(self, left: Any, right: Any) -> None:
        diff = compare(left, right, config=DiffConfig(detect_moves=False))
        assert values_equal(diff.apply(left), right)

    @pytest.mark.parametrize(("left", "right"), _CASES)
    def test_left_is_not_mutated(self, left: Any, right: Any) -> None:
        snapshot = copy.deepcopy(left)
        compare(left, right).apply(left)
        assert left == snapshot

    def test_result_shares_no_structure_with_inputs(self) -> None:
        left = {"a": [1, {"b": 2}], "c": 1}
        right = {"a": [1, {"b": 2}], "c": 2}
        result = compare(left, right).apply(left)
        result["a"][1]["b"] = 99
        assert left["a"][1]["b"] == 2

    def test_json_round_trip_documents(self) -> None:
        left = json.loads('{"items": [{"sku": "A", "qty": 1}, {"sku": "B", "qty": 2}]}')
        right = json.loads('{"items": [{"sku": "B", "qty": 2}, {"sku": "A", "qty": 3}]}')
        assert compare(left, right).apply(left) == right


class TestApplyDiffDirect:
    def test_empty_deltas_copy_left(self) -> None:
        left = {"a": [1]}
        result = apply_diff(left, [])
        assert result == left
        assert result is not left

    def test_root_replacement(self) -> None:
        assert apply_diff(1, [Modified(Name(""), 1, [2])], replaces_root=True) == [2]

    def test_root_replacement_requires_one_modified(self) -> None:
        with pytest.raises(PatchError, match="root replacement"):
            apply_diff(1, [Added(Name(""), 2)], replaces_root=True)

    def test_scalar_left_with_deltas_raises(self) -> None:
        with pytest.raises(PatchError):
            apply_diff("text", [Added(Name("a"), 1)])

    def test_object_and_array_deltas(self) -> None:
        left = {"o": {"x": 1}, "a": [1, 2]}
        deltas = [
            ArrayDelta(Name("a"), (Moved(Index(1), Index(0), 2),)),
            ObjectDelta(Name("o"), (Deleted(Name("x"), 1), Added(Name("y"), 2))),
        ]
        assert apply_diff(left, deltas) == {"o": {"y": 2}, "a": [2, 1]}


class TestPatchErrors:
    def test_added_key_already_present(self) -> None:
        with pytest.raises(PatchError, match="already exists") as exc_info:
            apply_diff({"a": 1}, [Added(Name("a"), 2)])
        assert exc_info.value.path == "/a"

    def test_missing_key(self) -> None:
        with pytest.raises(PatchError, match="missing key"):
            apply_diff({"a": 1}, [Deleted(Name("b"), 1)])

    def test_moved_inside_object(self) -> None:
        with pytest.raises(PatchError, match="Moved"):
            apply_diff({"a": 1}, [Moved(Index(0), Index(1), 1)])

    def test_index_position_in_object(self) -> None:
        with pytest.raises(PatchError):
            apply_diff({"a": 1}, [Deleted(Index(0), 1)])

    def test_name_position_in_array(self) -> None:
        with pytest.raises(PatchError):
            apply_diff([1], [Deleted(Name("0"), 1)])

    def test_old_index_out_of_range(self) -> None:
        with pytest.raises(PatchError, match="invalid old index"):
            apply_diff([1], [Deleted(Index(3), 1)])

    def test_old_index_removed_twice(self) -> None:
        with pytest.raises(PatchError, match="invalid old index"):
            apply_diff([1, 2], [Deleted(Index(0), 1), Moved(Index(0), Index(1), 1)])

    def test_new_index_produced_twice(self) -> None:
        with pytest.raises(PatchError, match="invalid new index"):
            apply_diff([1], [Added(Index(0), 2), Added(Index(0), 3)])

    def test_gap_in_new_indices(self) -> None:
        with pytest.raises(PatchError, match="contiguous"):
            apply_diff([1], [Added(Index(5), 2)])

    def test_container_delta_kind_mismatch(self) -> None:
        deltas = [ObjectDelta(Name("a"), (Added(Name("x"), 1),))]
        with pytest.raises(DeltaTypeMismatchError):
            apply_diff({"a": [1]}, deltas)
