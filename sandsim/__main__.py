"""Entry point for ``python -m sandsim``.

Loads the YAML config, builds a simulation engine and opens a Pygame
window to paint and watch the sandbox.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import pathlib

from sandsim.simulation.config import SimulationConfig
from sandsim.simulation.engine import SimulationEngine
from sandsim.ui.pygame_client import PygameRenderer

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def main() -> None:
    """Parse CLI args, create engine, launch renderer."""
    parser = argparse.ArgumentParser(
        prog="sandsim",
        description="SandSim - falling-sand sandbox",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=10,
        help="Pixel size per grid cell (default: 10)",
    )
    parser.add_argument(
        "--window",
        type=int,
        nargs=2,
        metavar=("WIDTH", "HEIGHT"),
        help="Window size in pixels; overrides the configured grid size",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Target frames per second (default: 30)",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=30.0,
        help="Simulation ticks per second (default: 30)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Texture seed; overrides the configured one",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = SimulationConfig.from_yaml(args.config)
    if args.window is not None:
        width_px, height_px = args.window
        config = dataclasses.replace(
            config,
            world_width=width_px // args.cell_size,
            world_height=height_px // args.cell_size,
        )
    if args.seed is not None:
        config = dataclasses.replace(config, texture_seed=args.seed)

    engine = SimulationEngine(config=config)

    renderer = PygameRenderer(
        engine=engine,
        cell_size=args.cell_size,
        ticks_per_second=args.speed,
        brush_radius=config.brush_radius,
    )
    renderer.run(fps=args.fps)


if __name__ == "__main__":
    main()
