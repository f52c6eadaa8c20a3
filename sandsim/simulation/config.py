"""Config — load sandbox parameters from YAML files.

World size, seeds, the Voronoi site count and the brush setup live in
YAML and are parsed into a typed dataclass here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from sandsim.world.material import PLACEABLE_KINDS


def _default_materials() -> list[str]:
    return [kind.name.lower() for kind in PLACEABLE_KINDS]


@dataclass
class SimulationConfig:
    """Top-level sandbox configuration.

    Attributes:
        seed: Seed for tie-break decisions.  None draws from OS entropy.
        texture_seed: Seed for rock and ice textures.  None draws from OS
            entropy.
        world_width: Number of grid columns.
        world_height: Number of grid rows.
        voronoi_sites: Site count for the ice crack pattern (at least 2).
        materials: Names of the placeable kinds, in selection-cycle order.
        brush_radius: Radius of the painting brush in cells (0 is a single
            cell).
    """

    seed: int | None = None
    texture_seed: int | None = None
    world_width: int = 80
    world_height: int = 60
    voronoi_sites: int = 24
    materials: list[str] = field(default_factory=_default_materials)
    brush_radius: int = 0

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        return cls(
            seed=data.get("seed", cls.seed),
            texture_seed=data.get("texture_seed", cls.texture_seed),
            world_width=data.get("world_width", cls.world_width),
            world_height=data.get("world_height", cls.world_height),
            voronoi_sites=data.get("voronoi_sites", cls.voronoi_sites),
            materials=data.get("materials", _default_materials()),
            brush_radius=data.get("brush_radius", cls.brush_radius),
        )
