"""Decisions returned by material rules.

A rule only reads the grid; it answers with one of these values and the
simulation step applies it.  Keeping the answer as data lets each rule be
tested on its own.
"""

from __future__ import annotations

from dataclasses import dataclass

from sandsim.world.material import MaterialKind


@dataclass(frozen=True)
class Stay:
    """The cell does nothing this tick."""


@dataclass(frozen=True)
class Swap:
    """Move the acting cell's material into ``target``.

    Attributes:
        target: Flat index the material moves into.
        left_behind: Material written into the vacated source cell.
    """

    target: int
    left_behind: MaterialKind = MaterialKind.EMPTY


@dataclass(frozen=True)
class Convert:
    """Rewrite one or more cells in place.

    Attributes:
        changes: ``(index, kind)`` pairs applied in order.
    """

    changes: tuple[tuple[int, MaterialKind], ...]


@dataclass(frozen=True)
class ClearArea:
    """Empty every cell within ``radius`` of the acting cell, itself included."""

    radius: int


Decision = Stay | Swap | Convert | ClearArea

STAY = Stay()
