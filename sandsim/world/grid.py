"""Grid — the flat, row-major store of cell state.

Row 0 is the top of the world and ``y`` grows downward, so "below" a cell
is ``y + 1``.  Every coordinate-taking method validates bounds before it
computes an index; nothing wraps.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from sandsim.world.material import Cell, MaterialKind


class OutOfBounds(IndexError):
    """Raised when a coordinate or index falls outside the grid."""


class InvalidMaterial(ValueError):
    """Raised when something other than a MaterialKind reaches the grid."""


@dataclass
class Grid:
    """A fixed-size 2D grid of cells stored as one flat list.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        cells: ``width * height`` cells, indexed ``x + y * width``.
    """

    width: int
    height: int
    cells: list[Cell] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate dimensions and fill the grid with empty cells."""
        if self.width <= 0 or self.height <= 0:
            msg = f"grid dimensions must be positive, got {self.width}x{self.height}"
            raise ValueError(msg)
        self.cells = [Cell() for _ in range(self.width * self.height)]

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.width * self.height

    def in_bounds(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` addresses a cell of this grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def index(self, x: int, y: int) -> int:
        """Return the flat index of ``(x, y)``.

        Raises:
            OutOfBounds: If the coordinates are outside the grid.
        """
        if not self.in_bounds(x, y):
            msg = f"({x}, {y}) out of bounds for {self.width}x{self.height}"
            raise OutOfBounds(msg)
        return x + y * self.width

    def coords(self, index: int) -> tuple[int, int]:
        """Return the ``(x, y)`` coordinates of a flat index."""
        self._check_index(index)
        y, x = divmod(index, self.width)
        return x, y

    def cell(self, index: int) -> Cell:
        """Return the Cell stored at a flat index."""
        self._check_index(index)
        return self.cells[index]

    def kind_at(self, index: int) -> MaterialKind:
        """Return the material stored at a flat index."""
        return self.cell(index).kind

    def set_at(self, index: int, kind: MaterialKind, *, moved: bool = False) -> None:
        """Overwrite the material at a flat index.

        Args:
            index: Flat cell index.
            kind: New material.
            moved: Value for the cell's moved flag.

        Raises:
            OutOfBounds: If the index is outside the grid.
            InvalidMaterial: If ``kind`` is not a MaterialKind.
        """
        if not isinstance(kind, MaterialKind):
            msg = f"{kind!r} is not a MaterialKind"
            raise InvalidMaterial(msg)
        cell = self.cell(index)
        cell.kind = kind
        cell.moved = moved

    def get(self, x: int, y: int) -> MaterialKind:
        """Return the material at ``(x, y)``."""
        return self.cells[self.index(x, y)].kind

    def set(self, x: int, y: int, kind: MaterialKind) -> None:
        """Overwrite the material at ``(x, y)``."""
        self.set_at(self.index(x, y), kind)

    def fill(self, kind: MaterialKind) -> None:
        """Overwrite every cell with ``kind``."""
        for index in range(self.size):
            self.set_at(index, kind)

    def clear_moved(self) -> None:
        """Reset the per-tick moved flag on every cell."""
        for cell in self.cells:
            cell.moved = False

    def kinds(self) -> NDArray[np.uint8]:
        """Return a ``(height, width)`` snapshot of material values."""
        flat = np.fromiter(
            (cell.kind.value for cell in self.cells),
            dtype=np.uint8,
            count=self.size,
        )
        return flat.reshape(self.height, self.width)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.size:
            msg = f"index {index} out of bounds for {self.width}x{self.height}"
            raise OutOfBounds(msg)
