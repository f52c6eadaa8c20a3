"""SimulationEngine — the host-facing sandbox API.

Owns the grid, the cosmetic textures, the tie-break generator and the
material selection.  A host applies brush edits between ticks and calls
``tick`` once per generation; a tick always runs to completion before the
next edit, which keeps every cell to a single evaluation per tick.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np
from numpy.random import Generator
from numpy.typing import NDArray

from sandsim.simulation.config import SimulationConfig
from sandsim.simulation.step import StepReport, step
from sandsim.texture.noise import ice_cracks, rock_shading
from sandsim.world.grid import Grid
from sandsim.world.material import MaterialKind
from sandsim.world.neighbours import indices_in_circle

logger = logging.getLogger(__name__)


class CellView(NamedTuple):
    """Read-only per-cell data for rendering."""

    kind: MaterialKind
    rock_brightness: int
    ice_brightness: int


@dataclass
class SimulationEngine:
    """Drives the sandbox forward tick by tick.

    Attributes:
        config: Loaded configuration.
        rng: Tie-break generator.  Built from ``config.seed`` unless one is
            injected.
        grid: The cell grid.
        texture_seed: Seed actually used for the textures.
        rock_texture: Per-cell stone brightness, ``[y, x]``.
        ice_texture: Per-cell ice brightness, ``[y, x]``.
        palette: Placeable kinds in selection-cycle order.
        selected: Index into ``palette``.
        generation: Number of ticks run so far.
    """

    config: SimulationConfig
    rng: Generator | None = None
    grid: Grid = field(init=False)
    texture_seed: int = field(init=False)
    rock_texture: NDArray[np.uint8] = field(init=False, repr=False)
    ice_texture: NDArray[np.uint8] = field(init=False, repr=False)
    palette: tuple[MaterialKind, ...] = field(init=False)
    selected: int = 0
    generation: int = 0

    def __post_init__(self) -> None:
        """Build grid, textures and selection from config."""
        if self.rng is None:
            self.rng = np.random.default_rng(self.config.seed)
        self.palette = self._build_palette(self.config.materials)
        self.grid = Grid(
            width=self.config.world_width,
            height=self.config.world_height,
        )

        seed = self.config.texture_seed
        if seed is None:
            seed = int(np.random.SeedSequence().entropy % (2**63))
        self.texture_seed = seed
        # Separate child streams so rock and ice shading are unrelated
        rock_stream, ice_stream = np.random.SeedSequence(seed).spawn(2)
        self.rock_texture = rock_shading(
            self.grid.width,
            self.grid.height,
            np.random.default_rng(rock_stream),
        )
        self.ice_texture = ice_cracks(
            self.grid.width,
            self.grid.height,
            seed=ice_stream,
            sites=self.config.voronoi_sites,
        )
        logger.info(
            "Created %dx%d grid (texture seed %d, %d voronoi sites)",
            self.grid.width,
            self.grid.height,
            self.texture_seed,
            self.config.voronoi_sites,
        )

    @property
    def selected_material(self) -> MaterialKind:
        """The material the brush currently paints."""
        return self.palette[self.selected]

    def cycle_selection(self, delta: int) -> MaterialKind:
        """Move the selection by ``delta`` steps, wrapping around.

        Args:
            delta: Signed number of steps (e.g. a mouse-wheel delta).

        Returns:
            The newly selected material.
        """
        self.selected = (self.selected + delta) % len(self.palette)
        logger.debug("Selected %s", self.selected_material.name)
        return self.selected_material

    def place(self, kind: MaterialKind, x: int, y: int, radius: int = 0) -> None:
        """Overwrite cells around ``(x, y)`` with ``kind``.

        Coordinates are clamped into the grid first, so any input is safe.

        Args:
            kind: Material to write.
            x: Column (clamped).
            y: Row (clamped).
            radius: Brush radius; 0 paints a single cell.
        """
        cx = min(max(x, 0), self.grid.width - 1)
        cy = min(max(y, 0), self.grid.height - 1)
        for index in indices_in_circle(self.grid, cx, cy, max(radius, 0)):
            self.grid.set_at(index, kind)

    def erase(self, x: int, y: int, radius: int = 0) -> None:
        """Clear cells around ``(x, y)``; same clamping as ``place``."""
        self.place(MaterialKind.EMPTY, x, y, radius)

    def tick(self) -> StepReport:
        """Advance the simulation by exactly one generation."""
        report = step(self.grid, self.rng)
        self.generation += 1
        return report

    def run(self, ticks: int) -> None:
        """Run the simulation for a fixed number of ticks.

        Args:
            ticks: Number of ticks to advance.
        """
        for _ in range(ticks):
            self.tick()

    def cell_view(self, x: int, y: int) -> CellView:
        """Return render data for ``(x, y)`` without touching state."""
        return CellView(
            kind=self.grid.get(x, y),
            rock_brightness=int(self.rock_texture[y, x]),
            ice_brightness=int(self.ice_texture[y, x]),
        )

    def kinds(self) -> NDArray[np.uint8]:
        """Return a ``(height, width)`` snapshot of material values."""
        return self.grid.kinds()

    @staticmethod
    def _build_palette(names: list[str]) -> tuple[MaterialKind, ...]:
        """Resolve configured material names to placeable kinds."""
        kinds = tuple(MaterialKind.from_name(name) for name in names)
        if not kinds:
            msg = "at least one placeable material is required"
            raise ValueError(msg)
        if MaterialKind.EMPTY in kinds:
            msg = "'empty' is the eraser and cannot be a selectable material"
            raise ValueError(msg)
        return kinds
