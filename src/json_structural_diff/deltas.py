"""Delta dataclasses: the six change records a diff is made of.

- Added / Deleted:   a value that exists only on the new / old side.
- Modified:          a value replaced in place by a value it is not equal to.
- Moved:             an unchanged array element found at another index.
- ObjectDelta:       nested changes inside an object member.
- ArrayDelta:        nested changes inside an array element.

All deltas are frozen.  Similarities are computed once at construction time.
``Delta`` is the union of the six classes; code that consumes deltas
dispatches over it with ``isinstance``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from json_structural_diff.algorithm.similarity import (
    deltas_similarity,
    modified_similarity,
    moved_similarity,
)
from json_structural_diff.tree.positions import Index, Position

__all__ = [
    "Added",
    "ArrayDelta",
    "Deleted",
    "Delta",
    "Modified",
    "Moved",
    "ObjectDelta",
    "position_to_json",
]


def position_to_json(position: Position) -> str | int:
    """Return the JSON form of a position: the key for Name, the int for Index."""
    if isinstance(position, Index):
        return position.index
    return position.name


@dataclass(frozen=True, slots=True)
class Added:
    """A value present only in the new tree."""

    position: Position
    value: Any

    @property
    def similarity(self) -> float:
        return 0.0

    def position_matches(self, position: Position) -> bool:
        """True when ``position`` is the slot this delta is reported at.

        Renderers and other consumers use this to place a delta in a walk of
        the old tree without inspecting the concrete delta type.
        """
        return self.position == position

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "added",
            "position": position_to_json(self.position),
            "value": self.value,
        }


@dataclass(frozen=True, slots=True)
class Deleted:
    """A value present only in the old tree."""

    position: Position
    value: Any

    @property
    def similarity(self) -> float:
        return 0.0

    def position_matches(self, position: Position) -> bool:
        return self.position == position

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "deleted",
            "position": position_to_json(self.position),
            "value": self.value,
        }


@dataclass(frozen=True, slots=True)
class Modified:
    """A value replaced by another value at ``position``.

    Attributes:
        position:   Address of the new value.
        old_value:  Value in the old tree.
        new_value:  Value in the new tree.
        old_position: Address of the old value when it differs from
            ``position`` (array elements paired across indices); None otherwise.
        similarity: See ``modified_similarity``.
    """

    position: Position
    old_value: Any
    new_value: Any
    old_position: Position | None = None
    similarity: float = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "similarity", modified_similarity(self.old_value, self.new_value)
        )

    @property
    def source_position(self) -> Position:
        return self.old_position if self.old_position is not None else self.position

    def position_matches(self, position: Position) -> bool:
        return self.position == position

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "modified",
            "position": position_to_json(self.position),
            "old_position": position_to_json(self.source_position),
            "old_value": self.old_value,
            "new_value": self.new_value,
        }


@dataclass(frozen=True, slots=True)
class Moved:
    """An array element that kept its value but changed its index."""

    old_position: Index
    new_position: Index
    value: Any
    similarity: float = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.old_position, Index) or not isinstance(
            self.new_position, Index
        ):
            msg = (
                "Moved positions must be Index instances, got "
                f"{self.old_position!r} -> {self.new_position!r}"
            )
            raise TypeError(msg)
        object.__setattr__(
            self,
            "similarity",
            moved_similarity(self.old_position.index, self.new_position.index),
        )

    def position_matches(self, position: Position) -> bool:
        """Match the destination slot; the origin is ``old_position``."""
        return self.new_position == position

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "moved",
            "old_position": self.old_position.index,
            "position": self.new_position.index,
            "value": self.value,
        }


@dataclass(frozen=True, slots=True)
class ObjectDelta:
    """Changes inside the object found at ``position``.

    ``children`` must be non-empty; it is stored as a tuple.
    """

    position: Position
    children: tuple[Delta, ...]
    old_position: Position | None = None
    similarity: float = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        children = tuple(self.children)
        if not children:
            msg = "ObjectDelta requires at least one child delta"
            raise ValueError(msg)
        object.__setattr__(self, "children", children)
        object.__setattr__(self, "similarity", deltas_similarity(children))

    @property
    def source_position(self) -> Position:
        return self.old_position if self.old_position is not None else self.position

    def position_matches(self, position: Position) -> bool:
        return self.position == position

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "object",
            "position": position_to_json(self.position),
            "old_position": position_to_json(self.source_position),
            "children": [child.to_dict() for child in self.children],
        }


@dataclass(frozen=True, slots=True)
class ArrayDelta:
    """Changes inside the array found at ``position``.

    ``children`` must be non-empty; it is stored as a tuple.
    """

    position: Position
    children: tuple[Delta, ...]
    old_position: Position | None = None
    similarity: float = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        children = tuple(self.children)
        if not children:
            msg = "ArrayDelta requires at least one child delta"
            raise ValueError(msg)
        object.__setattr__(self, "children", children)
        object.__setattr__(self, "similarity", deltas_similarity(children))

    @property
    def source_position(self) -> Position:
        return self.old_position if self.old_position is not None else self.position

    def position_matches(self, position: Position) -> bool:
        return self.position == position

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "array",
            "position": position_to_json(self.position),
            "old_position": position_to_json(self.source_position),
            "children": [child.to_dict() for child in self.children],
        }


Delta = Added | Deleted | Modified | Moved | ObjectDelta | ArrayDelta
