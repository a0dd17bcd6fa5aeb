"""pytest plugin for json-structural-diff.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from json_structural_diff import compare, format_diff


@pytest.fixture(scope="session")
def assert_json_equal() -> Any:
    """Fixture that returns a callable JSON equality asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to compare() which creates a fresh StructuralDiffer per call).

    Usage in tests::

        def test_payload(assert_json_equal):
            assert_json_equal({"id": 1, "tags": ["a"]}, {"id": 1, "tags": ["a"]})

        def test_changed(assert_json_equal):
            with pytest.raises(AssertionError, match=r'-  "id": 1'):
                assert_json_equal({"id": 1}, {"id": 2})

    Returns:
        A callable ``_assert(actual, expected, show_array_index=False) -> None``
        that raises ``AssertionError`` when the documents differ.
    """

    def _assert(actual: Any, expected: Any, show_array_index: bool = False) -> None:
        """Assert that two JSON documents are structurally equal.

        Args:
            actual:   The JSON value produced by the code under test.
            expected: The expected JSON value.
            show_array_index: Prefix array elements with their index in the
                rendered diff.

        Raises:
            AssertionError: When the documents differ.  The message holds the
                diff rendered against ``expected`` (``-`` lines are expected,
                ``+`` lines are actual) and its similarity.
        """
        diff = compare(expected, actual)
        if not diff:
            return

        rendered = format_diff(diff, expected, show_array_index=show_array_index)
        raise AssertionError(
            f"JSON documents differ: similarity={diff.similarity:.4f}\n{rendered}"
        )

    return _assert
