"""Shared fixtures for the SandSim test suite."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
import pytest
from numpy.random import Generator

from sandsim.simulation.config import SimulationConfig
from sandsim.world.grid import Grid


class FixedChoice:
    """Tie-breaker that always picks the same candidate position.

    Attributes:
        pick: Position to return, taken modulo the candidate count.
        calls: Number of random draws requested so far.
    """

    def __init__(self, pick: int = 0) -> None:
        self.pick = pick
        self.calls = 0

    def integers(self, low: int) -> int:
        self.calls += 1
        return self.pick % low


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def fixed_choice() -> Callable[[int], FixedChoice]:
    """Factory for tie-breakers that always take candidate ``pick``."""
    return FixedChoice


@pytest.fixture
def pick_first() -> FixedChoice:
    """Tie-breaker that always takes the first free candidate."""
    return FixedChoice(0)


@pytest.fixture
def pick_second() -> FixedChoice:
    """Tie-breaker that always takes the second free candidate."""
    return FixedChoice(1)


@pytest.fixture
def small_grid() -> Grid:
    """A small 8x8 grid for fast tests."""
    return Grid(width=8, height=8)


@pytest.fixture
def grid5() -> Grid:
    """A 5x5 grid for rule tests; the centre cell is (2, 2)."""
    return Grid(width=5, height=5)


@pytest.fixture
def default_config() -> SimulationConfig:
    """A small seeded config (no YAML file needed)."""
    return SimulationConfig(
        seed=7,
        texture_seed=2024,
        world_width=20,
        world_height=16,
        voronoi_sites=6,
    )
