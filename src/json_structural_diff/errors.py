"""Exception hierarchy for json-structural-diff.

Every error raised on purpose by the package derives from ``JsonDiffError`` so
callers can catch the whole family with one ``except`` clause.  Errors that
describe a misuse of a Python type also derive from the matching builtin
(``UnsupportedValueError`` is a ``TypeError``).
"""

from __future__ import annotations

__all__ = [
    "DeltaTypeMismatchError",
    "JsonDiffError",
    "MaxDepthExceededError",
    "PatchError",
    "UnsupportedValueError",
]


class JsonDiffError(Exception):
    """Base exception for json-structural-diff errors."""


class UnsupportedValueError(JsonDiffError, TypeError):
    """Raised when a value is not one of the JSON value kinds."""

    def __init__(self, value: object, path: str = "") -> None:
        super().__init__(
            f"Unsupported JSON value of type {type(value).__name__!r} at path: {path!r}"
        )
        self.value = value
        self.path = path


class MaxDepthExceededError(JsonDiffError):
    """Raised when the compared trees nest deeper than the configured limit."""

    def __init__(self, depth: int, path: str) -> None:
        super().__init__(f"Maximum depth ({depth}) exceeded at path: {path!r}")
        self.depth = depth
        self.path = path


class DeltaTypeMismatchError(JsonDiffError):
    """Raised when a container delta addresses a value of another kind.

    An ``ObjectDelta`` must address an object and an ``ArrayDelta`` an array
    in the tree it is rendered or applied against.
    """

    def __init__(self, path: str, expected: str, actual: str) -> None:
        super().__init__(
            f"Type mismatch at path {path!r}: delta expects {expected}, value is {actual}"
        )
        self.path = path
        self.expected = expected
        self.actual = actual


class PatchError(JsonDiffError):
    """Raised when a diff cannot be applied to the given value."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(f"{message} (at path: {path!r})")
        self.message = message
        self.path = path
