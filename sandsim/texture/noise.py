"""Procedural textures used only for shading.

Two independent generators, both driven by a seeded NumPy generator so a
session seed reproduces the same look:

- rock shading: one uniform random brightness per cell;
- ice cracks: a Voronoi edge pattern where cells near the boundary between
  two sites light up as cracks.

Arrays are indexed ``[y, x]`` to line up with ``Grid.kinds()``.  Nothing
here is ever read back by the material rules.
"""

from __future__ import annotations

import numpy as np
from numpy.random import Generator
from numpy.typing import NDArray

ROCK_MIN = 0.2
ROCK_MAX = 0.5

ICE_BASE = 190
ICE_JITTER = 12
CRACK_BRIGHTNESS = 255
CRACK_THRESHOLD = 20
EDGE_GAIN = 4


class TextureError(ValueError):
    """Raised for texture parameters that cannot produce a pattern."""


def rock_shading(width: int, height: int, rng: Generator) -> NDArray[np.uint8]:
    """Sample a per-cell stone brightness between 20% and 50% of full.

    Args:
        width: Grid columns.
        height: Grid rows.
        rng: Seeded texture generator.

    Returns:
        ``(height, width)`` array of brightness values.
    """
    levels = rng.uniform(ROCK_MIN, ROCK_MAX, size=(height, width))
    return np.round(levels * 255.0).astype(np.uint8)


def ice_cracks(
    width: int,
    height: int,
    seed: int | np.random.SeedSequence,
    sites: int,
) -> NDArray[np.uint8]:
    """Build a Voronoi crack pattern for ice.

    For every cell the squared distances to all sites are computed; with
    ``d1`` and ``d2`` the nearest and second-nearest, the edge strength is
    ``min((d2 - d1) * 4, 255)``.  Cells whose edge strength is below 20 sit
    on a crack and get full brightness; the rest get a base brightness with
    a little jitter.

    Args:
        width: Grid columns.
        height: Grid rows.
        seed: Seed (or seed sequence) for the generator placing sites
            and jitter.
        sites: Number of Voronoi sites (at least 2).

    Returns:
        ``(height, width)`` array of brightness values.

    Raises:
        TextureError: If fewer than two sites are requested.
    """
    if sites < 2:
        msg = f"ice crack pattern needs at least 2 voronoi sites, got {sites}"
        raise TextureError(msg)

    rng = np.random.default_rng(seed)
    site_x = rng.uniform(0.0, width, size=sites)
    site_y = rng.uniform(0.0, height, size=sites)

    ys, xs = np.mgrid[0:height, 0:width]
    dist2 = (
        (xs[..., np.newaxis] - site_x) ** 2
        + (ys[..., np.newaxis] - site_y) ** 2
    )
    # Two smallest along the site axis, without a full sort
    nearest = np.partition(dist2, 1, axis=-1)
    d1 = nearest[..., 0]
    d2 = nearest[..., 1]
    edge_strength = np.minimum((d2 - d1) * EDGE_GAIN, 255.0)

    jitter = rng.integers(-ICE_JITTER, ICE_JITTER + 1, size=(height, width))
    shade = np.where(
        edge_strength < CRACK_THRESHOLD,
        CRACK_BRIGHTNESS,
        ICE_BASE + jitter,
    )
    return np.clip(shade, 0, 255).astype(np.uint8)
