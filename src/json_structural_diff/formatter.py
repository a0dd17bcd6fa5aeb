"""AsciiFormatter: renders a diff against the old tree as marked text lines.

Each output line is ``marker + indent * depth + content`` where the marker is
``" "`` (unchanged), ``"+"`` (added) or ``"-"`` (deleted)::

     {
    -  "bar": 20,
    +  "bar": 42,
    -  "boz": 30,
       "foo": 10
     }

Rendering walks the old tree.  Object members are visited in sorted key
order, then keys that exist only on the new side are appended.  Array slots
are visited in old-index order; inserted elements are shown at their new
index, elements past the end of the old array come last.
Strings and object keys are JSON-escaped, so every value stays on its line.

Trailing commas follow a per-level counter of old-side siblings: a line that
renders an old sibling consumes it, and a comma is printed while siblings
remain.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from enum import Enum, auto
from typing import Any

from json_structural_diff.algorithm.config import FormatOptions
from json_structural_diff.deltas import (
    Added,
    ArrayDelta,
    Deleted,
    Delta,
    Modified,
    Moved,
    ObjectDelta,
)
from json_structural_diff.errors import DeltaTypeMismatchError, UnsupportedValueError
from json_structural_diff.tree.positions import Index, Name, Position
from json_structural_diff.tree.values import ValueKind, kind_of, sorted_keys

__all__ = ["ADDED", "ANSI_STYLES", "AsciiFormatter", "DELETED", "SAME"]

logger = logging.getLogger(__name__)

SAME = " "
ADDED = "+"
DELETED = "-"

# SGR parameters: black text on green / red background.
ANSI_STYLES = {
    ADDED: "30;42",
    DELETED: "30;41",
}


class _Sibling(Enum):
    """How a rendered line affects the old-side sibling counter."""

    CONSUME = auto()  # renders an old sibling
    REPLACED = auto()  # old half of a modification; the new half consumes
    INSERT = auto()  # new-side only; old siblings are untouched


class _LineWriter:
    """Line buffer plus the per-level sibling counters of one render."""

    def __init__(self, options: FormatOptions) -> None:
        self._options = options
        self._lines: list[str] = []
        self._names: list[str] = []
        self._sizes: list[int] = []
        self._in_array: list[bool] = []

    @property
    def path(self) -> str:
        return "".join(f"/{name}" for name in self._names[1:])

    def push(self, name: str, size: int, in_array: bool) -> None:
        self._names.append(name)
        self._sizes.append(size)
        self._in_array.append(in_array)

    def pop(self) -> None:
        self._names.pop()
        self._sizes.pop()
        self._in_array.pop()

    def emit(self, marker: str, content: str) -> None:
        line = f"{marker}{self._options.indent * len(self._sizes)}{content}"
        style = ANSI_STYLES.get(marker)
        if self._options.colored and style is not None:
            line = f"\x1b[{style}m{line}\x1b[0m"
        self._lines.append(line)

    def key(self, name: str) -> str:
        if not self._in_array:
            return ""
        if not self._in_array[-1]:
            return f"{json.dumps(name, ensure_ascii=False)}: "
        if self._options.show_array_index:
            return f"{name}: "
        return ""

    def comma(self, sibling: _Sibling) -> str:
        if not self._sizes:
            return ""
        if sibling is _Sibling.CONSUME:
            self._sizes[-1] -= 1
            remaining = self._sizes[-1]
        elif sibling is _Sibling.REPLACED:
            remaining = self._sizes[-1] - 1
        else:
            remaining = self._sizes[-1]
        return "," if remaining > 0 else ""

    def getvalue(self) -> str:
        return "\n".join(self._lines)


def _format_scalar(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def _insertion_index(delta: Delta) -> int | None:
    """New-side index of an array insertion (Added or the target of a Moved)."""
    if isinstance(delta, Added) and isinstance(delta.position, Index):
        return delta.position.index
    if isinstance(delta, Moved):
        return delta.new_position.index
    return None


class AsciiFormatter:
    """Renders a diff against the old tree it was computed from.

    Example::

        from json_structural_diff.formatter import AsciiFormatter

        left = {"foo": 10, "bar": 20}
        diff = compare(left, {"foo": 10, "bar": 42})
        print(AsciiFormatter().format(left, diff))
    """

    def __init__(self, options: FormatOptions | None = None) -> None:
        self._options = options if options is not None else FormatOptions()

    @property
    def options(self) -> FormatOptions:
        return self._options

    def format(self, left: Any, deltas: Iterable[Delta]) -> str:
        """Render ``deltas`` against ``left``.

        Args:
            left:   The old tree; must be an object or an array.
            deltas: Deltas computed for ``left`` (a ``Diff`` or any iterable).

        Returns:
            The rendered lines joined with newlines, without a trailing newline.

        Raises:
            UnsupportedValueError: If ``left`` is not an object or an array.
            DeltaTypeMismatchError: If a container delta addresses a value of
                another kind.
        """
        deltas = tuple(deltas)
        logger.debug("rendering %d top-level deltas", len(deltas))

        writer = _LineWriter(self._options)
        kind = kind_of(left)
        if kind == ValueKind.OBJECT:
            writer.emit(SAME, "{")
            writer.push("", len(left), False)
            self._process_object(writer, left, deltas)
            writer.pop()
            writer.emit(SAME, "}")
        elif kind == ValueKind.ARRAY:
            writer.emit(SAME, "[")
            writer.push("", len(left), True)
            self._process_array(writer, left, deltas)
            writer.pop()
            writer.emit(SAME, "]")
        else:
            raise UnsupportedValueError(left)

        return writer.getvalue()

    def format_replacement(self, old_value: Any, new_value: Any) -> str:
        """Render the replacement of a whole document: old lines, then new lines.

        Used for diffs whose root is replaced (values that are not both
        objects or both arrays).  Any value kind is accepted.
        """
        writer = _LineWriter(self._options)
        self._print_recursive(writer, "", old_value, DELETED, _Sibling.REPLACED)
        self._print_recursive(writer, "", new_value, ADDED, _Sibling.CONSUME)
        return writer.getvalue()

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def _process_object(
        self, writer: _LineWriter, obj: dict[str, Any], deltas: tuple[Delta, ...]
    ) -> None:
        for name in sorted_keys(obj, writer.path):
            self._process_item(writer, obj[name], deltas, Name(name))

        for delta in deltas:
            if (
                isinstance(delta, Added)
                and isinstance(delta.position, Name)
                and delta.position.name not in obj
            ):
                self._print_recursive(
                    writer, str(delta.position), delta.value, ADDED, _Sibling.INSERT
                )

    def _process_array(
        self, writer: _LineWriter, arr: list[Any], deltas: tuple[Delta, ...]
    ) -> None:
        for index, value in enumerate(arr):
            self._process_item(writer, value, deltas, Index(index))

        for delta in deltas:
            target = _insertion_index(delta)
            if target is not None and target >= len(arr):
                value = delta.value  # type: ignore[union-attr]
                self._print_recursive(
                    writer, str(target), value, ADDED, _Sibling.INSERT
                )

    # ------------------------------------------------------------------
    # One old-side slot
    # ------------------------------------------------------------------

    def _process_item(
        self,
        writer: _LineWriter,
        value: Any,
        deltas: tuple[Delta, ...],
        position: Position,
    ) -> None:
        name = str(position)
        consumed = False

        for delta in deltas:
            if isinstance(delta, (Added, Moved)) and isinstance(position, Index):
                if delta.position_matches(position):
                    self._print_recursive(
                        writer, name, delta.value, ADDED, _Sibling.INSERT
                    )

            if isinstance(delta, Moved):
                if delta.old_position == position:
                    self._print_recursive(
                        writer, name, delta.value, DELETED, _Sibling.CONSUME
                    )
                    consumed = True
            elif isinstance(delta, Deleted):
                if delta.position_matches(position):
                    self._print_recursive(
                        writer, name, delta.value, DELETED, _Sibling.CONSUME
                    )
                    consumed = True
            elif isinstance(delta, Modified):
                if delta.source_position == position:
                    self._print_recursive(
                        writer, name, delta.old_value, DELETED, _Sibling.REPLACED
                    )
                    self._print_recursive(
                        writer, name, delta.new_value, ADDED, _Sibling.CONSUME
                    )
                    consumed = True
            elif isinstance(delta, ObjectDelta):
                if delta.source_position == position:
                    self._print_nested(writer, name, value, delta, ValueKind.OBJECT)
                    consumed = True
            elif isinstance(delta, ArrayDelta):
                if delta.source_position == position:
                    self._print_nested(writer, name, value, delta, ValueKind.ARRAY)
                    consumed = True

        if not consumed:
            self._print_recursive(writer, name, value, SAME, _Sibling.CONSUME)

    def _print_nested(
        self,
        writer: _LineWriter,
        name: str,
        value: Any,
        delta: ObjectDelta | ArrayDelta,
        expected: ValueKind,
    ) -> None:
        actual = kind_of(value)
        if actual != expected:
            raise DeltaTypeMismatchError(f"{writer.path}/{name}", expected, actual)

        opening, closing = ("{", "}") if expected == ValueKind.OBJECT else ("[", "]")
        writer.emit(SAME, writer.key(name) + opening)
        writer.push(name, len(value), expected == ValueKind.ARRAY)
        if expected == ValueKind.OBJECT:
            self._process_object(writer, value, delta.children)
        else:
            self._process_array(writer, value, delta.children)
        writer.pop()
        writer.emit(SAME, closing + writer.comma(_Sibling.CONSUME))

    # ------------------------------------------------------------------
    # Whole values
    # ------------------------------------------------------------------

    def _print_recursive(
        self,
        writer: _LineWriter,
        name: str,
        value: Any,
        marker: str,
        sibling: _Sibling,
    ) -> None:
        kind = kind_of(value)

        if kind == ValueKind.OBJECT:
            writer.emit(marker, writer.key(name) + "{")
            writer.push(name, len(value), False)
            for key in sorted_keys(value, writer.path):
                self._print_recursive(
                    writer, key, value[key], marker, _Sibling.CONSUME
                )
            writer.pop()
            writer.emit(marker, "}" + writer.comma(sibling))

        elif kind == ValueKind.ARRAY:
            writer.emit(marker, writer.key(name) + "[")
            writer.push(name, len(value), True)
            for index, item in enumerate(value):
                self._print_recursive(
                    writer, str(index), item, marker, _Sibling.CONSUME
                )
            writer.pop()
            writer.emit(marker, "]" + writer.comma(sibling))

        else:
            writer.emit(
                marker, writer.key(name) + _format_scalar(value) + writer.comma(sibling)
            )
