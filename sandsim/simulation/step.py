"""One simulation tick over the whole grid.

Scan order is part of the physics: rows are visited bottom to top and each
row right to left.  A cell that already received material this tick (its
``moved`` flag is set) is skipped, so nothing acts twice.  Every flag is
cleared once the scan completes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sandsim.rules.decisions import ClearArea, Convert, Decision, Stay, Swap
from sandsim.rules.materials import TieBreaker, decide
from sandsim.world.grid import Grid
from sandsim.world.material import MaterialKind
from sandsim.world.neighbours import indices_in_circle

logger = logging.getLogger(__name__)


@dataclass
class StepReport:
    """What happened during one tick.

    Attributes:
        swaps: Successful moves.
        conversions: Convert decisions applied.
        detonations: Area clears applied.
    """

    swaps: int = 0
    conversions: int = 0
    detonations: int = 0


def scan_order(grid: Grid) -> list[tuple[int, int]]:
    """Return ``(x, y)`` positions in the order a tick visits them."""
    return [
        (x, y)
        for y in range(grid.height - 1, -1, -1)
        for x in range(grid.width - 1, -1, -1)
    ]


def apply(grid: Grid, x: int, y: int, decision: Decision, report: StepReport) -> None:
    """Write a decision for the cell at ``(x, y)`` into the grid.

    Destinations of swaps, converted cells and cleared cells are flagged as
    moved.  The vacated source of a swap is not.
    """
    here = grid.index(x, y)
    if isinstance(decision, Stay):
        return
    if isinstance(decision, Swap):
        mover = grid.kind_at(here)
        grid.set_at(decision.target, mover, moved=True)
        grid.set_at(here, decision.left_behind)
        report.swaps += 1
    elif isinstance(decision, Convert):
        for index, kind in decision.changes:
            grid.set_at(index, kind, moved=True)
        report.conversions += 1
    elif isinstance(decision, ClearArea):
        for index in indices_in_circle(grid, x, y, decision.radius):
            grid.set_at(index, MaterialKind.EMPTY, moved=True)
        report.detonations += 1
        logger.debug("Detonation at (%d, %d), radius %d", x, y, decision.radius)
    else:
        msg = f"unknown decision {decision!r}"
        raise TypeError(msg)


def step(grid: Grid, rng: TieBreaker) -> StepReport:
    """Advance ``grid`` by one tick in place.

    Args:
        grid: Grid to update.
        rng: Tie-break generator for random choices.

    Returns:
        Counts of what changed.
    """
    report = StepReport()
    for x, y in scan_order(grid):
        if grid.cell(grid.index(x, y)).moved:
            continue
        apply(grid, x, y, decide(grid, x, y, rng), report)
    grid.clear_moved()
    return report
