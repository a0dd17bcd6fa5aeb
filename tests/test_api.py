"""Unit tests for the public API functions.

compare, compare_objects, compare_arrays, format_diff, apply_diff, is_equal,
similarity_score.
"""

from __future__ import annotations

import pytest

from json_structural_diff import (
    Added,
    Deleted,
    Diff,
    DiffConfig,
    Index,
    MaxDepthExceededError,
    Modified,
    Moved,
    Name,
    UnsupportedValueError,
    apply_diff,
    compare,
    compare_arrays,
    compare_objects,
    format_diff,
    is_equal,
    similarity_score,
)
from json_structural_diff.api import ROOT


class TestCompare:
    """Tests for the compare() function."""

    def test_objects(self) -> None:
        diff = compare({"foo": 10, "bar": 20, "boz": 30}, {"foo": 10, "bar": 42})
        assert isinstance(diff, Diff)
        assert list(diff) == [
            Modified(Name("bar"), 20, 42),
            Deleted(Name("boz"), 30),
        ]
        assert diff.replaces_root is False

    def test_arrays(self) -> None:
        assert list(compare(["a", "b", "c"], ["c", "a", "b"])) == [
            Moved(Index(2), Index(0), "c")
        ]

    def test_renamed_key(self) -> None:
        value = {"l0a": ["abcd", ["efcg"]]}
        assert list(compare({"delete": value}, {"add": value})) == [
            Deleted(Name("delete"), value),
            Added(Name("add"), value),
        ]

    def test_identical_values_yield_empty_diff(self) -> None:
        doc = {"a": [1, {"b": None}], "c": "x"}
        assert compare(doc, doc) == Diff()
        assert compare(3, 3) == Diff()
        assert compare(None, None) == Diff()

    def test_unequal_scalars_replace_the_root(self) -> None:
        diff = compare(1, 2)
        assert diff.replaces_root is True
        assert list(diff) == [Modified(ROOT, 1, 2)]

    def test_huge_integer_members(self) -> None:
        left = {"n": 10**400}
        right = {"n": 1}
        diff = compare(left, right)
        assert list(diff) == [Modified(Name("n"), 10**400, 1)]
        assert diff.similarity == pytest.approx(0.6)
        assert apply_diff(left, diff) == right

    def test_kind_change_replaces_the_root(self) -> None:
        diff = compare({"a": 1}, [1])
        assert diff.replaces_root is True
        assert list(diff) == [Modified(Name(""), {"a": 1}, [1])]

    def test_config_passthrough(self) -> None:
        diff = compare(["a", "b", "c"], ["c", "a", "b"], DiffConfig(detect_moves=False))
        assert list(diff) == [Added(Index(0), "c"), Deleted(Index(2), "c")]

    def test_max_depth(self) -> None:
        with pytest.raises(MaxDepthExceededError):
            compare({"a": {"b": {"c": 1}}}, {"a": {"b": {"c": 2}}}, DiffConfig(1))

    def test_unsupported_value(self) -> None:
        with pytest.raises(UnsupportedValueError):
            compare({"a": {1, 2}}, {"a": {1, 2}})

    def test_no_state_between_calls(self) -> None:
        first = compare({"a": [1, 2]}, {"a": [2, 1]})
        compare({"x": 1}, {"y": 2})
        assert compare({"a": [1, 2]}, {"a": [2, 1]}) == first

    def test_serialization_is_byte_identical(self) -> None:
        left = {"items": [{"id": 1}, {"id": 2}, "x"], "meta": {"v": 1}}
        right = {"items": ["x", {"id": 2, "n": 1}], "meta": {"v": 2}}
        assert compare(left, right).to_json() == compare(left, right).to_json()


class TestContainerEntryPoints:
    def test_compare_objects(self) -> None:
        assert list(compare_objects({"a": 1}, {"a": 2})) == [
            Modified(Name("a"), 1, 2)
        ]

    def test_compare_arrays(self) -> None:
        assert list(compare_arrays([1, 2], [1])) == [Deleted(Index(1), 2)]


class TestFormatDiff:
    def test_default(self) -> None:
        left = {"foo": 10, "bar": 20, "boz": 30}
        diff = compare(left, {"foo": 10, "bar": 42})
        assert format_diff(diff, left) == (
            " {\n"
            '-  "bar": 20,\n'
            '+  "bar": 42,\n'
            '-  "boz": 30,\n'
            '   "foo": 10\n'
            " }"
        )

    def test_options(self) -> None:
        left = [1, 2]
        diff = compare(left, [1, 3])
        rendered = format_diff(diff, left, show_array_index=True, colored=True)
        assert "\x1b[30;41m-  1: 2\x1b[0m" in rendered
        assert "\x1b[30;42m+  1: 3\x1b[0m" in rendered


class TestApplyDiff:
    def test_rebuilds_right(self) -> None:
        left = {"a": [1, 2, 3], "b": {"c": "x"}}
        right = {"a": [3, 1, 4], "b": {"c": "y", "d": None}}
        assert apply_diff(left, compare(left, right)) == right

    def test_root_replacement(self) -> None:
        assert apply_diff("old", compare("old", ["new"])) == ["new"]


class TestIsEqual:
    def test_equal(self) -> None:
        assert is_equal({"a": [1, 2]}, {"a": [1, 2]})
        assert is_equal(1, 1.0)

    def test_not_equal(self) -> None:
        assert not is_equal([1, 2], [2, 1])
        assert not is_equal(True, 1)


class TestSimilarityScore:
    def test_identical(self) -> None:
        assert similarity_score({"a": 1}, {"a": 1}) == 1.0

    def test_only_insertions_and_deletions(self) -> None:
        assert similarity_score({"a": 1}, {"b": 1}) == 0.0

    def test_partial(self) -> None:
        score = similarity_score({"a": 1, "b": 2}, {"a": 1, "b": 4})
        assert score == pytest.approx(0.6 + 0.4 * 0.5)

    def test_in_unit_interval(self) -> None:
        score = similarity_score(
            {"a": [1, "x", {"b": 2}], "c": None}, {"a": ["x", 1, {"b": 3}], "d": 1}
        )
        assert 0.0 <= score <= 1.0
