"""Name and Index: the two ways a delta addresses a child in its parent.

A ``Name`` addresses an object member, an ``Index`` an array element.  Both
are frozen, ordered dataclasses; ordering is only defined between positions
of the same variant (comparing a ``Name`` with an ``Index`` raises
``TypeError``), which is all the engine ever needs since siblings always live
in the same container.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Index", "Name", "Position"]


@dataclass(frozen=True, slots=True, order=True)
class Name:
    """Position of a member inside an object."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True, order=True)
class Index:
    """Position of an element inside an array."""

    index: int

    def __str__(self) -> str:
        return str(self.index)

    def __int__(self) -> int:
        return self.index


Position = Name | Index
