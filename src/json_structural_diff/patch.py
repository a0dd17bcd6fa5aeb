"""apply_diff: replay a diff on the old tree to rebuild the new one.

Objects: Deleted keys are dropped, Added and Modified keys are set, and
container deltas recurse into the member they address.

Arrays: deltas address two index spaces.  Old-side addresses (Deleted, the
source of Moved, the source of paired Modified/ObjectDelta/ArrayDelta) name
the old elements that do not survive in place; new-side addresses (Added,
the target of Moved, the position of paired deltas) name the new elements
they produce.  Every remaining new index is filled with the untouched old
elements, in order; those are the anchors of the comparison.

The input is never mutated; a new tree is returned.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable
from typing import Any

from json_structural_diff.deltas import (
    Added,
    ArrayDelta,
    Deleted,
    Delta,
    Modified,
    Moved,
    ObjectDelta,
)
from json_structural_diff.errors import DeltaTypeMismatchError, PatchError
from json_structural_diff.tree.positions import Index, Name, Position
from json_structural_diff.tree.values import ValueKind, kind_of

__all__ = ["apply_diff"]

logger = logging.getLogger(__name__)


def apply_diff(
    left: Any, deltas: Iterable[Delta], replaces_root: bool = False
) -> Any:
    """Return the value obtained by applying ``deltas`` to ``left``.

    Args:
        left:   The old tree.
        deltas: Top-level deltas of a comparison of ``left``: the children of
            an object or array comparison.
        replaces_root: True when ``deltas`` is the single root ``Modified``
            of two values that are not both objects or both arrays.

    Raises:
        PatchError: If a delta does not fit ``left``.
        DeltaTypeMismatchError: If a container delta addresses a value of
            another kind.
    """
    deltas = tuple(deltas)
    logger.debug("applying %d top-level deltas", len(deltas))

    if replaces_root:
        if len(deltas) != 1 or not isinstance(deltas[0], Modified):
            raise PatchError("a root replacement must be a single Modified delta")
        return copy.deepcopy(deltas[0].new_value)

    if not deltas:
        return copy.deepcopy(left)

    kind = kind_of(left)
    if kind == ValueKind.OBJECT:
        return _apply_object(left, deltas, "")
    if kind == ValueKind.ARRAY:
        return _apply_array(left, deltas, "")
    raise PatchError(f"cannot apply {len(deltas)} deltas to a {kind} value")


def _child(value: Any, delta: ObjectDelta | ArrayDelta, path: str) -> Any:
    actual = kind_of(value)
    if isinstance(delta, ObjectDelta):
        if actual != ValueKind.OBJECT:
            raise DeltaTypeMismatchError(path, ValueKind.OBJECT, actual)
        return _apply_object(value, delta.children, path)
    if actual != ValueKind.ARRAY:
        raise DeltaTypeMismatchError(path, ValueKind.ARRAY, actual)
    return _apply_array(value, delta.children, path)


def _key(position: Position, path: str) -> str:
    if not isinstance(position, Name):
        raise PatchError(f"object member addressed by {position!r}", path)
    return position.name


def _apply_object(
    obj: dict[str, Any], deltas: Iterable[Delta], path: str
) -> dict[str, Any]:
    result = copy.deepcopy(obj)

    for delta in deltas:
        if isinstance(delta, Moved):
            raise PatchError("Moved delta inside an object", path)

        name = _key(delta.position, path)
        child_path = f"{path}/{name}"

        if isinstance(delta, Added):
            if name in result:
                raise PatchError("Added key already exists", child_path)
            result[name] = copy.deepcopy(delta.value)
            continue

        if name not in obj:
            raise PatchError("delta addresses a missing key", child_path)

        if isinstance(delta, Deleted):
            del result[name]
        elif isinstance(delta, Modified):
            result[name] = copy.deepcopy(delta.new_value)
        else:
            result[name] = _child(obj[name], delta, child_path)

    return result


def _index(position: Position, path: str) -> int:
    if not isinstance(position, Index):
        raise PatchError(f"array element addressed by {position!r}", path)
    return position.index


def _apply_array(arr: list[Any], deltas: Iterable[Delta], path: str) -> list[Any]:
    removed: set[int] = set()
    produced: dict[int, Any] = {}

    def remove(index: int) -> None:
        if not 0 <= index < len(arr) or index in removed:
            raise PatchError(f"invalid old index {index}", path)
        removed.add(index)

    def produce(index: int, value: Any) -> None:
        if index < 0 or index in produced:
            raise PatchError(f"invalid new index {index}", path)
        produced[index] = value

    for delta in deltas:
        if isinstance(delta, Added):
            produce(_index(delta.position, path), copy.deepcopy(delta.value))
        elif isinstance(delta, Deleted):
            remove(_index(delta.position, path))
        elif isinstance(delta, Moved):
            remove(delta.old_position.index)
            produce(delta.new_position.index, copy.deepcopy(delta.value))
        elif isinstance(delta, Modified):
            remove(_index(delta.source_position, path))
            produce(_index(delta.position, path), copy.deepcopy(delta.new_value))
        else:
            source = _index(delta.source_position, path)
            remove(source)
            produce(
                _index(delta.position, path),
                _child(arr[source], delta, f"{path}/{source}"),
            )

    size = len(arr) - len(removed) + len(produced)
    if any(index >= size for index in produced):
        raise PatchError("new indices do not form a contiguous array", path)

    # untouched elements fill the new indices no delta produced, in order
    kept = (copy.deepcopy(item) for i, item in enumerate(arr) if i not in removed)
    return [
        produced[index] if index in produced else next(kept) for index in range(size)
    ]
