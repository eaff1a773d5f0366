"""Random map generation — pivots, configuration and presets.

Usage
-----
>>> from fourcolor.generator import generate_colored_map, TERMINAL_MAP
>>> region_map, coloring = generate_colored_map(TERMINAL_MAP)
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from .coloring import ColorMap, color_map
from .models import Point
from .regions import BOUNDARY_MODES, RegionMap, build_region_map

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
# Configuration
# ═══════════════════════════════════════════════════════════════════


@dataclass
class MapConfig:
    """All tuneable parameters for map generation.

    Attributes
    ----------
    width, height : int
        Grid size in cells.
    n_regions : int
        Number of random pivots drawn.  Pivots landing on the same cell
        collapse into one, so the map may have fewer regions.
    seed : int, optional
        Random seed; *None* draws a fresh one from the OS.
    boundary_mode : str
        ``"cell"`` or ``"midpoint"``; see :mod:`fourcolor.regions`.
    packed : bool
        Store colour domains two per byte during the search.
    """

    width: int = 80
    height: int = 24
    n_regions: int = 10
    seed: Optional[int] = None
    boundary_mode: str = "cell"
    packed: bool = False

    def validate(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Grid must be non-empty, got {self.width}x{self.height}")
        if self.n_regions < 1:
            raise ValueError("n_regions must be >= 1")
        if self.boundary_mode not in BOUNDARY_MODES:
            raise ValueError(f"boundary_mode must be one of {BOUNDARY_MODES}")

    def with_seed(self, seed: Optional[int]) -> "MapConfig":
        return replace(self, seed=seed)


# ═══════════════════════════════════════════════════════════════════
# Preset configs
# ═══════════════════════════════════════════════════════════════════

TERMINAL_MAP = MapConfig(width=80, height=24, n_regions=10)

SMALL_MAP = MapConfig(width=20, height=10, n_regions=5)

POSTER_MAP = MapConfig(width=320, height=200, n_regions=40, boundary_mode="midpoint")


# ═══════════════════════════════════════════════════════════════════
# Generation
# ═══════════════════════════════════════════════════════════════════


def random_pivots(
    width: int,
    height: int,
    count: int,
    rng: Optional[random.Random] = None,
) -> List[Point]:
    """Draw *count* uniformly random cells, dropping repeats.

    The result keeps draw order and may hold fewer than *count* points.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Grid must be non-empty, got {width}x{height}")
    if count < 1:
        raise ValueError("count must be >= 1")
    if rng is None:
        rng = random.Random()

    drawn = [(rng.randrange(width), rng.randrange(height)) for _ in range(count)]
    return list(dict.fromkeys(drawn))


def generate_map(config: MapConfig) -> RegionMap:
    """Build a region map from random pivots as described by *config*."""
    config.validate()
    rng = random.Random(config.seed)
    pivots = random_pivots(config.width, config.height, config.n_regions, rng)
    if len(pivots) < config.n_regions:
        logger.debug(
            "%d of %d pivots were duplicates", config.n_regions - len(pivots), config.n_regions
        )
    return build_region_map(
        pivots, config.width, config.height, boundary_mode=config.boundary_mode
    )


def generate_colored_map(config: MapConfig) -> Tuple[RegionMap, Optional[ColorMap]]:
    """Generate a map and its first four-colouring.

    The colouring is *None* only if the adjacency graph is malformed.
    """
    region_map = generate_map(config)
    coloring = color_map(region_map, packed=config.packed)
    if coloring is None:
        logger.warning("No four-colouring found for %r", region_map)
    return region_map, coloring
