"""Test suite for the bucket matcher (maximize_similarities function).

Tests empty sides, the forced pairing when both sides are non-empty, the
preference for the best-scoring monotone pairing, traceback tie-breaks, and
handling of equal items (no delta, never reported as free).
"""

from __future__ import annotations

from json_structural_diff.algorithm.matcher import MatchResult, maximize_similarities
from json_structural_diff.deltas import Delta, Modified
from json_structural_diff.tree.positions import Index


def _pair(left: object, right: object) -> Delta | None:
    if left == right:
        return None
    return Modified(Index(0), left, right)


def _pairs(result: MatchResult[object]) -> list[tuple[object, object]]:
    return [
        (delta.old_value, delta.new_value)
        for delta in result.deltas
        if isinstance(delta, Modified)
    ]


class TestEmptySides:
    def test_both_empty(self) -> None:
        result = maximize_similarities([], [], _pair)
        assert result.deltas == []
        assert result.free_left == []
        assert result.free_right == []

    def test_empty_right_frees_every_deletion(self) -> None:
        result = maximize_similarities(["a", "b"], [], _pair)
        assert result.deltas == []
        assert result.free_left == ["a", "b"]

    def test_empty_left_frees_every_addition(self) -> None:
        result = maximize_similarities([], ["a", "b"], _pair)
        assert result.free_right == ["a", "b"]


class TestPairing:
    def test_single_pair(self) -> None:
        result = maximize_similarities(["abc"], ["abd"], _pair)
        assert _pairs(result) == [("abc", "abd")]
        assert result.free_left == []
        assert result.free_right == []

    def test_low_similarity_pair_is_still_formed(self) -> None:
        # a string turned into a number scores only 0.3, but one pair is forced
        result = maximize_similarities(["a"], [5], _pair)
        assert _pairs(result) == [("a", 5)]

    def test_best_candidate_wins(self) -> None:
        result = maximize_similarities(["xyz1", "hello"], ["hello!"], _pair)
        assert _pairs(result) == [("hello", "hello!")]
        assert result.free_left == ["xyz1"]
        assert result.free_right == []

    def test_free_items_keep_input_order(self) -> None:
        result = maximize_similarities(["q", "hello", "r"], ["hello!"], _pair)
        assert _pairs(result) == [("hello", "hello!")]
        assert result.free_left == ["q", "r"]

    def test_more_additions_than_deletions(self) -> None:
        result = maximize_similarities(["hello"], ["q", "hello!", "r"], _pair)
        assert _pairs(result) == [("hello", "hello!")]
        assert result.free_right == ["q", "r"]

    def test_pairs_never_cross(self) -> None:
        # crossing would pair equal items; the monotone optimum pairs in order
        result = maximize_similarities(["ab", "cd"], ["cd", "ab"], _pair)
        assert _pairs(result) == [("ab", "cd"), ("cd", "ab")]

    def test_equal_items_are_consumed_without_delta(self) -> None:
        result = maximize_similarities(["a"], ["a"], _pair)
        assert result.deltas == []
        assert result.free_left == []
        assert result.free_right == []


class TestTieBreak:
    def test_equal_scores_skip_the_earlier_deletion(self) -> None:
        result = maximize_similarities(["x1", "x2"], ["y"], _pair)
        assert _pairs(result) == [("x2", "y")]
        assert result.free_left == ["x1"]

    def test_equal_scores_skip_the_earlier_addition(self) -> None:
        result = maximize_similarities(["y"], ["x1", "x2"], _pair)
        assert _pairs(result) == [("y", "x2")]
        assert result.free_right == ["x1"]

    def test_deterministic(self) -> None:
        left = ["alpha", "beta", "gamma"]
        right = ["alpah", "gamma!", "delta"]
        first = maximize_similarities(left, right, _pair)
        second = maximize_similarities(left, right, _pair)
        assert first == second
