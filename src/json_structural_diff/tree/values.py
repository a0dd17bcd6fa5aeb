"""ValueKind StrEnum and helpers over JSON-compatible Python values.

The comparison engine works directly on decoded JSON values (the output of
``json.loads``): ``None``, ``bool``, ``int``/``float``, ``str``, ``dict`` and
``list``.  This module classifies such values into a closed set of kinds and
provides the structural equality the engine uses for anchoring and move
detection.
"""

from __future__ import annotations

from enum import StrEnum, auto
from typing import Any

from json_structural_diff.errors import UnsupportedValueError

__all__ = ["JsonValue", "ValueKind", "kind_of", "sorted_keys", "values_equal"]

# Type alias for valid JSON values
JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None


class ValueKind(StrEnum):
    """Enumeration of the six JSON value kinds.

    StrEnum values are the lowercased member names:
    - NULL    -> "null"
    - BOOL    -> "bool"
    - NUMBER  -> "number" : int and float alike
    - STRING  -> "string"
    - OBJECT  -> "object" : dict with str keys
    - ARRAY   -> "array"  : list
    """

    NULL = auto()
    BOOL = auto()
    NUMBER = auto()
    STRING = auto()
    OBJECT = auto()
    ARRAY = auto()

    @property
    def is_container(self) -> bool:
        return self in (ValueKind.OBJECT, ValueKind.ARRAY)


def kind_of(value: Any, path: str = "") -> ValueKind:
    """Classify a JSON value.

    bool MUST be checked before int: bool subclasses int in Python
    (``isinstance(True, int)`` is True).

    Args:
        value: Any decoded JSON value.
        path:  JSON Pointer of the value, used only in the error message.

    Returns:
        The ValueKind of ``value``.

    Raises:
        UnsupportedValueError: If ``value`` is not a JSON value.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, dict):
        return ValueKind.OBJECT
    if isinstance(value, list):
        return ValueKind.ARRAY
    raise UnsupportedValueError(value, path)


def sorted_keys(obj: dict[str, Any], path: str = "") -> list[str]:
    """Return the keys of ``obj`` in ascending code point order.

    Raises:
        UnsupportedValueError: If any key is not a string.
    """
    for key in obj:
        if not isinstance(key, str):
            raise UnsupportedValueError(key, f"{path}/{key!r}")
    return sorted(obj)


def values_equal(a: Any, b: Any) -> bool:
    """Structural equality over JSON values.

    Kinds are compared first, so ``True`` never equals ``1`` and ``0`` never
    equals ``False``; within the NUMBER kind ``1 == 1.0``.  Objects are equal
    when they hold the same key set with pairwise equal values, arrays when
    they are element-wise equal.
    """
    kind = kind_of(a)
    if kind != kind_of(b):
        return False

    if kind == ValueKind.OBJECT:
        if len(a) != len(b):
            return False
        for key, val in a.items():
            if key not in b or not values_equal(val, b[key]):
                return False
        return True

    if kind == ValueKind.ARRAY:
        if len(a) != len(b):
            return False
        return all(values_equal(x, y) for x, y in zip(a, b, strict=True))

    return bool(a == b)
