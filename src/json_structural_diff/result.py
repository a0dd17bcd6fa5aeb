"""Diff: the ordered result of a comparison.

This module provides the sequence type returned by compare() calls.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any, overload

from json_structural_diff.algorithm.config import FormatOptions
from json_structural_diff.algorithm.similarity import deltas_similarity
from json_structural_diff.deltas import Delta, Modified
from json_structural_diff.formatter import AsciiFormatter
from json_structural_diff.patch import apply_diff

__all__ = ["Diff"]


@dataclass(frozen=True, slots=True)
class Diff(Sequence[Delta]):
    """Ordered, immutable sequence of deltas.

    The order is part of the result: comparing the same inputs twice yields
    equal ``Diff`` objects and identical ``to_json()`` output.

    Attributes:
        deltas: Top-level deltas, addressed relative to the compared container.
        replaces_root: True when the compared values were not both objects or
            both arrays and differ; ``deltas`` is then a single ``Modified``
            at ``Name("")``.
    """

    deltas: tuple[Delta, ...] = ()
    replaces_root: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "deltas", tuple(self.deltas))

    @overload
    def __getitem__(self, index: int) -> Delta: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Delta]: ...

    def __getitem__(self, index: int | slice) -> Delta | Sequence[Delta]:
        return self.deltas[index]

    def __len__(self) -> int:
        return len(self.deltas)

    def __iter__(self) -> Iterator[Delta]:
        return iter(self.deltas)

    def __bool__(self) -> bool:
        return bool(self.deltas)

    @property
    def similarity(self) -> float:
        """Mean similarity of the top-level deltas; 1.0 for an empty diff."""
        if not self.deltas:
            return 1.0
        return deltas_similarity(self.deltas)

    def format(self, left: Any, options: FormatOptions | None = None) -> str:
        """Render this diff against ``left`` (see ``AsciiFormatter``).

        A root replacement renders the old value as ``-`` lines followed by
        the new value as ``+`` lines; ``left`` may then be any value.
        """
        formatter = AsciiFormatter(options)
        if self.replaces_root:
            (delta,) = self.deltas
            if not isinstance(delta, Modified):
                msg = f"root replacement must be a Modified delta, got {delta!r}"
                raise TypeError(msg)
            return formatter.format_replacement(delta.old_value, delta.new_value)
        return formatter.format(left, self.deltas)

    def apply(self, left: Any) -> Any:
        """Return ``left`` with this diff applied (see ``apply_diff``)."""
        return apply_diff(left, self.deltas, replaces_root=self.replaces_root)

    def to_list(self) -> list[dict[str, Any]]:
        return [delta.to_dict() for delta in self.deltas]

    def to_json(self, indent: int | None = None) -> str:
        """Serialize the deltas to JSON with sorted keys."""
        return json.dumps(
            self.to_list(), sort_keys=True, indent=indent, ensure_ascii=False
        )
