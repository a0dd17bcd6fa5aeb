"""algorithm subpackage: public API for the comparison engine.

Provides the structural differ, its configuration, and the primitives it is
built from (LCS, similarity heuristics, bucket matcher).  Import from this
module (not from sub-modules directly) to stay on the stable public
interface.

Example::

    from json_structural_diff.algorithm import DiffConfig, StructuralDiffer

    differ = StructuralDiffer(DiffConfig(max_depth=64))
    deltas = differ.compare_arrays(["a", "b", "c"], ["c", "a", "b"])
    # [Moved(old_position=Index(index=2), new_position=Index(index=0), value='c')]
"""

from __future__ import annotations

from json_structural_diff.algorithm.config import DiffConfig, FormatOptions
from json_structural_diff.algorithm.differ import StructuralDiffer
from json_structural_diff.algorithm.lcs import (
    LCSPair,
    lcs_index_pairs,
    lcs_length,
    lcs_table,
)
from json_structural_diff.algorithm.matcher import MatchResult, maximize_similarities
from json_structural_diff.algorithm.similarity import (
    deltas_similarity,
    modified_similarity,
    moved_similarity,
    number_ratio,
    string_similarity,
)

__all__ = [
    "DiffConfig",
    "FormatOptions",
    "LCSPair",
    "MatchResult",
    "StructuralDiffer",
    "deltas_similarity",
    "lcs_index_pairs",
    "lcs_length",
    "lcs_table",
    "maximize_similarities",
    "modified_similarity",
    "moved_similarity",
    "number_ratio",
    "string_similarity",
]
