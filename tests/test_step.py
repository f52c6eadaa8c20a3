"""Tests for sandsim.simulation.step — scan order and tick scenarios."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from sandsim.rules.decisions import Decision
from sandsim.rules.materials import TieBreaker
from sandsim.simulation import step as step_module
from sandsim.simulation.step import scan_order, step
from sandsim.world.grid import Grid
from sandsim.world.material import MaterialKind

E = MaterialKind.EMPTY
SAND = MaterialKind.SAND
WATER = MaterialKind.WATER
STONE = MaterialKind.STONE
LAVA = MaterialKind.LAVA
STEEL = MaterialKind.STEEL
ICE = MaterialKind.ICE
BOMB = MaterialKind.BOMB
AIRPLANE = MaterialKind.AIRPLANE


def _steel_row(grid: Grid, y: int) -> None:
    for x in range(grid.width):
        grid.set(x, y, STEEL)


class TestScanOrder:
    """The visiting order is bottom row first, right to left."""

    def test_order(self, small_grid: Grid) -> None:
        order = scan_order(small_grid)
        assert len(order) == 64
        assert order[0] == (7, 7)
        assert order[1] == (6, 7)
        assert order[8] == (7, 6)
        assert order[-1] == (0, 0)

    def test_each_cell_decided_at_most_once(
        self,
        monkeypatch: pytest.MonkeyPatch,
        rng: Generator,
    ) -> None:
        grid = Grid(width=12, height=12)
        kinds = [E, SAND, WATER, LAVA, STONE, ICE]
        for index in range(grid.size):
            grid.set_at(index, kinds[int(rng.integers(len(kinds)))])

        seen: list[tuple[int, int]] = []
        real_decide = step_module.decide

        def recording_decide(g: Grid, x: int, y: int, r: Generator) -> Decision:
            # A cell that already received material this tick must not act
            assert g.cell(g.index(x, y)).moved is False
            seen.append((x, y))
            return real_decide(g, x, y, r)

        monkeypatch.setattr(step_module, "decide", recording_decide)
        for _ in range(5):
            seen.clear()
            step(grid, rng)
            assert len(seen) == len(set(seen))

    def test_flags_cleared_after_tick(self, small_grid: Grid, rng: Generator) -> None:
        small_grid.set(3, 0, SAND)
        small_grid.set(5, 2, WATER)
        step(small_grid, rng)
        assert not any(cell.moved for cell in small_grid.cells)

    def test_sideways_mover_is_not_revisited(self, pick_first: TieBreaker) -> None:
        grid = Grid(width=5, height=5)
        grid.set(3, 4, WATER)
        step(grid, pick_first)
        # Left is picked each time; a second visit would carry it to (1, 4)
        assert grid.get(2, 4) is WATER
        assert int((grid.kinds() == WATER.value).sum()) == 1


class TestGravity:
    """Falling, settling and displacement."""

    def test_column_falls_one_row_per_tick(self, rng: Generator) -> None:
        grid = Grid(width=5, height=6)
        for y in range(3):
            grid.set(2, y, SAND)
        step(grid, rng)
        assert [grid.get(2, y) for y in range(6)] == [E, SAND, SAND, SAND, E, E]

    def test_settling(self, rng: Generator) -> None:
        open_rows = 8
        grid = Grid(width=3, height=open_rows + 1)
        _steel_row(grid, open_rows)
        grid.set(1, 0, SAND)

        for _ in range(open_rows - 2):
            step(grid, rng)
        assert grid.get(1, open_rows - 2) is SAND

        step(grid, rng)
        assert grid.get(1, open_rows - 1) is SAND
        settled = grid.kinds()

        for _ in range(5):
            step(grid, rng)
        assert np.array_equal(grid.kinds(), settled)

    def test_sand_displaces_water_upward(self, rng: Generator) -> None:
        grid = Grid(width=3, height=3)
        _steel_row(grid, 2)
        grid.set(0, 1, STEEL)
        grid.set(2, 1, STEEL)
        grid.set(1, 1, WATER)
        grid.set(1, 0, SAND)
        step(grid, rng)
        assert grid.get(1, 1) is SAND
        assert grid.get(1, 0) is WATER

    def test_stone_sinks_through_lava(self, rng: Generator) -> None:
        grid = Grid(width=3, height=3)
        _steel_row(grid, 2)
        grid.set(0, 1, STEEL)
        grid.set(2, 1, STEEL)
        grid.set(1, 1, LAVA)
        grid.set(1, 0, STONE)
        step(grid, rng)
        assert grid.get(1, 1) is STONE
        assert grid.get(1, 0) is E


class TestReactions:
    """Quenching, freezing and melting over whole ticks."""

    def test_quenching(self, rng: Generator) -> None:
        grid = Grid(width=5, height=5)
        grid.set(2, 2, WATER)
        grid.set(2, 3, LAVA)
        # Wall the lava in so it is still there when the water is scanned
        for x, y in [(1, 3), (3, 3), (1, 4), (2, 4), (3, 4)]:
            grid.set(x, y, STEEL)
        report = step(grid, rng)
        assert grid.get(2, 2) is STONE
        assert grid.get(2, 3) is E
        assert report.conversions == 1

    def test_freezing(self, rng: Generator) -> None:
        grid = Grid(width=4, height=3)
        _steel_row(grid, 2)
        grid.set(3, 1, STEEL)
        grid.set(1, 1, ICE)
        grid.set(2, 1, WATER)
        step(grid, rng)
        assert grid.get(2, 1) is ICE
        assert grid.get(1, 1) is ICE

    def test_melt_then_quench(self, rng: Generator) -> None:
        grid = Grid(width=4, height=3)
        _steel_row(grid, 2)
        grid.set(3, 1, STEEL)
        grid.set(2, 1, LAVA)
        grid.set(1, 1, ICE)
        grid.set(0, 1, STEEL)

        step(grid, rng)
        assert grid.get(1, 1) is WATER
        assert grid.get(2, 1) is LAVA

        step(grid, rng)
        assert grid.get(1, 1) is STONE
        assert grid.get(2, 1) is E


class TestExplosives:
    """Bomb detonation and airplane conversion."""

    def test_bomb_scenario(self, rng: Generator) -> None:
        grid = Grid(width=20, height=20)
        grid.fill(STEEL)
        for y in range(20):
            for x in range(20):
                if (x - 5) ** 2 + (y - 5) ** 2 <= 25:
                    grid.set(x, y, SAND)
        grid.set(5, 5, BOMB)

        report = step(grid, rng)

        assert report.detonations == 1
        for y in range(20):
            for x in range(20):
                if (x - 5) ** 2 + (y - 5) ** 2 <= 25:
                    assert grid.get(x, y) is E
                else:
                    assert grid.get(x, y) is STEEL

    def test_bomb_near_far_corner(self, rng: Generator) -> None:
        grid = Grid(width=8, height=8)
        grid.fill(STEEL)
        grid.set(7, 7, BOMB)
        step(grid, rng)
        cleared = int((grid.kinds() == E.value).sum())
        # Quarter disk of radius 5 inside the grid
        expected = sum(1 for dx in range(6) for dy in range(6) if dx * dx + dy * dy <= 25)
        assert cleared == expected
        assert grid.get(0, 0) is STEEL

    def test_airplane_edge_scenario(self, rng: Generator) -> None:
        grid = Grid(width=6, height=4)
        grid.set(5, 1, AIRPLANE)
        step(grid, rng)
        assert grid.get(5, 1) is BOMB
        assert int((grid.kinds() != E.value).sum()) == 1

    def test_airplane_flight(self, rng: Generator) -> None:
        grid = Grid(width=6, height=4)
        _steel_row(grid, 3)
        grid.set(3, 1, AIRPLANE)

        step(grid, rng)
        assert grid.get(4, 1) is AIRPLANE
        assert grid.get(3, 1) is E

        step(grid, rng)
        step(grid, rng)
        assert grid.get(5, 1) is BOMB

        step(grid, rng)
        assert grid.get(5, 1) is E
        # Everything within reach of the blast, floor included, is gone
        assert grid.get(5, 3) is E
        assert grid.get(0, 3) is STEEL


class TestInertness:
    """Grids of steel and empty never change."""

    def test_steel_and_empty_unchanged(self, rng: Generator) -> None:
        grid = Grid(width=12, height=10)
        for index in range(grid.size):
            if rng.random() < 0.4:
                grid.set_at(index, STEEL)
        before = grid.kinds()
        for _ in range(30):
            report = step(grid, rng)
            assert report.swaps == 0
        assert np.array_equal(grid.kinds(), before)
