"""Bounds-safe neighbourhood arithmetic over a Grid.

All helpers return flat indices and silently drop positions that fall off
any of the four edges.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sandsim.world.grid import Grid

# Order matters: water scans up, down, left, right for lava.
CARDINAL_OFFSETS: tuple[tuple[int, int], ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))
MOORE_OFFSETS: tuple[tuple[int, int], ...] = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)
)


def offset(grid: Grid, x: int, y: int, dx: int, dy: int) -> int | None:
    """Return the index of ``(x + dx, y + dy)`` or None if it is off-grid.

    Args:
        grid: Grid to address.
        x: Column of the origin cell.
        y: Row of the origin cell.
        dx: Column delta.
        dy: Row delta (positive is down).
    """
    nx, ny = x + dx, y + dy
    if not grid.in_bounds(nx, ny):
        return None
    return nx + ny * grid.width


def _collect(
    grid: Grid,
    x: int,
    y: int,
    offsets: tuple[tuple[int, int], ...],
) -> list[int]:
    result: list[int] = []
    for dx, dy in offsets:
        index = offset(grid, x, y, dx, dy)
        if index is not None:
            result.append(index)
    return result


def cardinal(grid: Grid, x: int, y: int) -> list[int]:
    """Return in-bounds 4-neighbours in the order up, down, left, right."""
    return _collect(grid, x, y, CARDINAL_OFFSETS)


def moore(grid: Grid, x: int, y: int) -> list[int]:
    """Return the in-bounds 8-neighbourhood of ``(x, y)``."""
    return _collect(grid, x, y, MOORE_OFFSETS)


def indices_in_circle(grid: Grid, cx: int, cy: int, radius: int) -> list[int]:
    """Return every cell within Euclidean ``radius`` of ``(cx, cy)``.

    Scans the ``(2 * radius + 1)`` bounding square and keeps cells with
    ``dx * dx + dy * dy <= radius * radius``.  The centre itself may lie
    off-grid; only in-bounds cells are returned.

    Args:
        grid: Grid to address.
        cx: Centre column.
        cy: Centre row.
        radius: Inclusive radius in cells.

    Returns:
        Flat indices in row-major order.
    """
    if radius < 0:
        return []
    r2 = radius * radius
    result: list[int] = []
    for dy in range(-radius, radius + 1):
        ny = cy + dy
        if not 0 <= ny < grid.height:
            continue
        for dx in range(-radius, radius + 1):
            nx = cx + dx
            if not 0 <= nx < grid.width:
                continue
            if dx * dx + dy * dy <= r2:
                result.append(nx + ny * grid.width)
    return result
