"""Material rules — the per-kind transition table.

Each rule looks at one unmoved cell and its neighbourhood and returns a
Decision.  ``RULES`` maps every MaterialKind to its rule so the table can
be reviewed in one place; ``decide`` is the single dispatch point used by
the simulation step.

Random choices ("pick one of the free candidates") go through the
injected tie-break generator, never the texture generator.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from sandsim.rules.decisions import STAY, ClearArea, Convert, Decision, Swap
from sandsim.world.grid import Grid, InvalidMaterial
from sandsim.world.material import MaterialKind
from sandsim.world.neighbours import cardinal, moore, offset


class TieBreaker(Protocol):
    """The slice of ``numpy.random.Generator`` the rules rely on."""

    def integers(self, low: int) -> int: ...


Rule = Callable[[Grid, int, int, TieBreaker], Decision]

BOMB_RADIUS = 5

_DOWN = ((0, 1),)
_DIAGONALS_DOWN = ((-1, 1), (1, 1))
_SIDES = ((-1, 0), (1, 0))

# What granular solids may sink into; water rises to fill the gap.
_SINKABLE = frozenset({MaterialKind.EMPTY, MaterialKind.WATER})
_STONE_SINKABLE = frozenset({MaterialKind.EMPTY, MaterialKind.WATER, MaterialKind.LAVA})
_VACANT = frozenset({MaterialKind.EMPTY})


def _free(
    grid: Grid,
    x: int,
    y: int,
    offsets: tuple[tuple[int, int], ...],
    accepts: frozenset[MaterialKind],
) -> list[int]:
    """Return in-bounds targets at ``offsets`` whose material is accepted."""
    result: list[int] = []
    for dx, dy in offsets:
        index = offset(grid, x, y, dx, dy)
        if index is not None and grid.kind_at(index) in accepts:
            result.append(index)
    return result


def _pick(candidates: list[int], rng: TieBreaker) -> int:
    """Choose uniformly among free candidates."""
    if len(candidates) == 1:
        return candidates[0]
    return candidates[int(rng.integers(len(candidates)))]


def _sink_into(grid: Grid, target: int) -> Swap:
    """Swap with ``target``, leaving water behind if water was displaced."""
    if grid.kind_at(target) is MaterialKind.WATER:
        return Swap(target, MaterialKind.WATER)
    return Swap(target, MaterialKind.EMPTY)


def _fall(grid: Grid, x: int, y: int, rng: TieBreaker) -> Decision:
    """Granular fall: straight down, else a random free diagonal."""
    below = _free(grid, x, y, _DOWN, _SINKABLE)
    if below:
        return _sink_into(grid, below[0])
    diagonals = _free(grid, x, y, _DIAGONALS_DOWN, _SINKABLE)
    if diagonals:
        return _sink_into(grid, _pick(diagonals, rng))
    return STAY


def _flow(grid: Grid, x: int, y: int, rng: TieBreaker) -> Decision:
    """Liquid flow into empty cells: down, then diagonal, then sideways."""
    for offsets in (_DOWN, _DIAGONALS_DOWN, _SIDES):
        targets = _free(grid, x, y, offsets, _VACANT)
        if targets:
            return Swap(_pick(targets, rng), MaterialKind.EMPTY)
    return STAY


def inert(grid: Grid, x: int, y: int, rng: TieBreaker) -> Decision:
    """Empty and steel never act."""
    return STAY


def sand(grid: Grid, x: int, y: int, rng: TieBreaker) -> Decision:
    return _fall(grid, x, y, rng)


def water(grid: Grid, x: int, y: int, rng: TieBreaker) -> Decision:
    """Quench adjacent lava, else freeze next to ice, else flow.

    Quenching wins over everything: the water turns to stone and the first
    lava neighbour (scanning up, down, left, right) is consumed.
    """
    neighbours = cardinal(grid, x, y)
    here = grid.index(x, y)
    for index in neighbours:
        if grid.kind_at(index) is MaterialKind.LAVA:
            return Convert(((here, MaterialKind.STONE), (index, MaterialKind.EMPTY)))
    if any(grid.kind_at(index) is MaterialKind.ICE for index in neighbours):
        return Convert(((here, MaterialKind.ICE),))
    return _flow(grid, x, y, rng)


def stone(grid: Grid, x: int, y: int, rng: TieBreaker) -> Decision:
    """Sink straight down through empty space, water and lava."""
    below = _free(grid, x, y, _DOWN, _STONE_SINKABLE)
    if below:
        return _sink_into(grid, below[0])
    return STAY


def lava(grid: Grid, x: int, y: int, rng: TieBreaker) -> Decision:
    return _flow(grid, x, y, rng)


def ice(grid: Grid, x: int, y: int, rng: TieBreaker) -> Decision:
    """Melt next to lava (without moving), otherwise fall like sand."""
    if any(grid.kind_at(index) is MaterialKind.LAVA for index in moore(grid, x, y)):
        return Convert(((grid.index(x, y), MaterialKind.WATER),))
    return _fall(grid, x, y, rng)


def bomb(grid: Grid, x: int, y: int, rng: TieBreaker) -> Decision:
    return ClearArea(BOMB_RADIUS)


def airplane(grid: Grid, x: int, y: int, rng: TieBreaker) -> Decision:
    """Fly one cell right, or turn into a bomb when blocked or at the edge."""
    ahead = offset(grid, x, y, 1, 0)
    if ahead is not None and grid.kind_at(ahead) is MaterialKind.EMPTY:
        return Swap(ahead, MaterialKind.EMPTY)
    return Convert(((grid.index(x, y), MaterialKind.BOMB),))


RULES: dict[MaterialKind, Rule] = {
    MaterialKind.EMPTY: inert,
    MaterialKind.SAND: sand,
    MaterialKind.WATER: water,
    MaterialKind.STONE: stone,
    MaterialKind.LAVA: lava,
    MaterialKind.STEEL: inert,
    MaterialKind.ICE: ice,
    MaterialKind.BOMB: bomb,
    MaterialKind.AIRPLANE: airplane,
}


def decide(grid: Grid, x: int, y: int, rng: TieBreaker) -> Decision:
    """Return the decision for the cell at ``(x, y)``.

    Raises:
        InvalidMaterial: If the cell holds a kind with no rule.
    """
    kind = grid.get(x, y)
    rule = RULES.get(kind)
    if rule is None:
        msg = f"no rule for material {kind!r} at ({x}, {y})"
        raise InvalidMaterial(msg)
    return rule(grid, x, y, rng)
