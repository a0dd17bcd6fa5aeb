"""Tree subpackage for the value and position model.

Re-exports the public API for the tree module:
- ValueKind: StrEnum of the six JSON value kinds
- kind_of / values_equal / sorted_keys: classification and structural equality
- Name / Index / Position: addresses of a child within its parent
"""

from json_structural_diff.tree.positions import Index, Name, Position
from json_structural_diff.tree.values import (
    JsonValue,
    ValueKind,
    kind_of,
    sorted_keys,
    values_equal,
)

__all__ = [
    "Index",
    "JsonValue",
    "Name",
    "Position",
    "ValueKind",
    "kind_of",
    "sorted_keys",
    "values_equal",
]
