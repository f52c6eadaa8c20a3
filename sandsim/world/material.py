"""Material kinds and the per-cell record stored in the grid.

A cell only carries its material and a transient ``moved`` flag.  Cosmetic
shading lives in separate texture arrays so the cell itself stays
lightweight.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MaterialKind(Enum):
    """Closed set of materials a cell can hold."""

    EMPTY = 0
    SAND = 1
    WATER = 2
    STONE = 3
    LAVA = 4
    STEEL = 5
    ICE = 6
    BOMB = 7
    AIRPLANE = 8

    @classmethod
    def from_name(cls, name: str) -> MaterialKind:
        """Look up a kind by case-insensitive name.

        Raises:
            ValueError: If no kind has that name.
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            msg = f"unknown material {name!r}"
            raise ValueError(msg) from None


# Everything the brush can cycle through; EMPTY is the eraser, not a choice.
PLACEABLE_KINDS: tuple[MaterialKind, ...] = tuple(
    kind for kind in MaterialKind if kind is not MaterialKind.EMPTY
)


@dataclass
class Cell:
    """A single slot in the grid.

    Attributes:
        kind: Material currently occupying the slot.
        moved: Set when the cell was the destination of a move or
            conversion during the current tick.  Cleared at tick end.
    """

    kind: MaterialKind = MaterialKind.EMPTY
    moved: bool = False
