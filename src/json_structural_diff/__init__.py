"""Structural diff - ordered, similarity-scored deltas between JSON documents."""

from __future__ import annotations

import logging

from json_structural_diff.algorithm.config import DiffConfig, FormatOptions
from json_structural_diff.algorithm.differ import StructuralDiffer
from json_structural_diff.api import (
    apply_diff,
    compare,
    compare_arrays,
    compare_objects,
    format_diff,
    is_equal,
    similarity_score,
)
from json_structural_diff.deltas import (
    Added,
    ArrayDelta,
    Deleted,
    Delta,
    Modified,
    Moved,
    ObjectDelta,
)
from json_structural_diff.errors import (
    DeltaTypeMismatchError,
    JsonDiffError,
    MaxDepthExceededError,
    PatchError,
    UnsupportedValueError,
)
from json_structural_diff.formatter import AsciiFormatter
from json_structural_diff.result import Diff
from json_structural_diff.tree.positions import Index, Name, Position

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "Added",
    "ArrayDelta",
    "AsciiFormatter",
    "Deleted",
    "Delta",
    "DeltaTypeMismatchError",
    "Diff",
    "DiffConfig",
    "FormatOptions",
    "Index",
    "JsonDiffError",
    "MaxDepthExceededError",
    "Modified",
    "Moved",
    "Name",
    "ObjectDelta",
    "PatchError",
    "Position",
    "StructuralDiffer",
    "UnsupportedValueError",
    "apply_diff",
    "compare",
    "compare_arrays",
    "compare_objects",
    "format_diff",
    "is_equal",
    "similarity_score",
]
