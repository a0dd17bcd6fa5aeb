"""DiffConfig and FormatOptions for comparison and rendering configuration.

Both are frozen (immutable) dataclasses validated in ``__post_init__``.
DiffConfig governs the comparison engine; FormatOptions governs the text
renderer only and never changes which deltas are produced.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["DiffConfig", "FormatOptions"]


@dataclass(frozen=True, slots=True)
class DiffConfig:
    """Immutable configuration for the structural differ.

    Attributes:
        max_depth: Maximum nesting depth the differ descends into (>= 1).
            Deeper trees raise ``MaxDepthExceededError`` instead of
            exhausting the interpreter stack.  Default 256, which keeps
            the deepest comparison within the default recursion limit.
        detect_moves: When True (default), equal non-anchor array elements
            are reported as ``Moved``.  When False they are left to the
            similarity matcher and show up as Deleted/Added pairs or as
            paired deltas.
    """

    max_depth: int = 256
    detect_moves: bool = True

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            msg = f"max_depth must be >= 1, got {self.max_depth}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class FormatOptions:
    """Immutable options for the ASCII diff renderer.

    Attributes:
        show_array_index: Prefix array elements with ``"N: "``.  Default False.
        colored: Wrap added/deleted lines in ANSI colour escapes.  Default False.
        indent: Indentation unit per nesting level.  Must be non-empty
            whitespace.  Default two spaces.
    """

    show_array_index: bool = False
    colored: bool = False
    indent: str = "  "

    def __post_init__(self) -> None:
        if not self.indent or not self.indent.isspace():
            msg = f"indent must be non-empty whitespace, got {self.indent!r}"
            raise ValueError(msg)
