"""Colour mapping for rendered cells.

Pure functions with no Pygame dependency so the shading rules can be
tested headless.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sandsim.world.material import MaterialKind

if TYPE_CHECKING:
    from sandsim.simulation.engine import CellView

Colour = tuple[int, int, int]

BACKGROUND: Colour = (0, 0, 0)

_SAND: Colour = (210, 192, 140)
_WATER: Colour = (64, 128, 255)
_WATER_SURFACE: Colour = (196, 196, 255)
_LAVA: Colour = (255, 90, 20)
_STEEL: Colour = (150, 158, 168)
_BOMB: Colour = (200, 30, 30)
_AIRPLANE: Colour = (235, 235, 235)

# Swatch shown in the corner for the selected material
SWATCH: dict[MaterialKind, Colour] = {
    MaterialKind.SAND: _SAND,
    MaterialKind.WATER: (34, 98, 225),
    MaterialKind.STONE: (64, 64, 64),
    MaterialKind.LAVA: _LAVA,
    MaterialKind.STEEL: _STEEL,
    MaterialKind.ICE: (180, 220, 255),
    MaterialKind.BOMB: _BOMB,
    MaterialKind.AIRPLANE: _AIRPLANE,
}


def checker_offset(x: int, y: int) -> int:
    """Darkening applied to alternate cells: 40 on even parity, else 0."""
    return 255 - min(((x + y) % 2 + 1) * 215, 255)


def _shade(base: Colour, amount: int) -> Colour:
    r, g, b = base
    return (max(r - amount, 0), max(g - amount, 0), max(b - amount, 0))


def cell_colour(
    view: CellView,
    x: int,
    y: int,
    above: MaterialKind | None = None,
) -> Colour:
    """Return the RGB colour for one cell.

    Args:
        view: Kind and texture brightness of the cell.
        x: Column.
        y: Row.
        above: Kind of the cell directly above, or None on the top row.
            Water with no water above is drawn with a lighter surface.
    """
    kind = view.kind
    offset = checker_offset(x, y)

    if kind is MaterialKind.SAND:
        return _shade(_SAND, offset)

    if kind is MaterialKind.WATER:
        r, g, b = _shade(_WATER, y + offset // 8)
        if above is not None and above is not MaterialKind.WATER:
            sr, sg, sb = _WATER_SURFACE
            return ((r + sr) // 2, (g + sg) // 2, (b + sb) // 2)
        return (r, g, b)

    if kind is MaterialKind.STONE:
        v = view.rock_brightness
        return (v, v, v)

    if kind is MaterialKind.ICE:
        v = view.ice_brightness
        return (int(v * 0.75), int(v * 0.9), v)

    if kind is MaterialKind.LAVA:
        return _shade(_LAVA, offset // 2)

    if kind is MaterialKind.STEEL:
        return _STEEL

    if kind is MaterialKind.BOMB:
        return _BOMB

    if kind is MaterialKind.AIRPLANE:
        return _AIRPLANE

    return BACKGROUND
