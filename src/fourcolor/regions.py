"""Region maps — partitioning a rectangular grid into adjacent regions.

This module provides the :class:`Region` and :class:`RegionMap` data
models plus :func:`build_region_map`, which grows every region out of
its seed point ("pivot") with a simultaneous breadth-first flood fill.

The result is a discrete, Manhattan-distance approximation of a
Voronoi diagram: each cell belongs to the pivot whose flood reached it
first.  Cells reached by several regions in the same round go to the
region with the lowest id, since regions are expanded in id order.

Boundary modes
--------------
- ``"cell"`` — boundary points are grid cells (``(int, int)``): the
  cells touching another region plus the cells on the outer rim.
- ``"midpoint"`` — inter-region boundary points are the midpoints
  between the two touching cell centres (``(float, float)``); rim
  cells are recorded as float cell centres.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence, Set, Tuple

import numpy as np

from .models import AnyPoint, Point

logger = logging.getLogger(__name__)

UNCLAIMED = -1
BOUNDARY_MODES = ("cell", "midpoint")

# Left, up, down, right.
_NEIGHBOUR_OFFSETS: Tuple[Point, ...] = ((-1, 0), (0, -1), (0, 1), (1, 0))


# ═══════════════════════════════════════════════════════════════════
# Data model
# ═══════════════════════════════════════════════════════════════════

@dataclass
class Region:
    """One cell of the partition.

    Parameters
    ----------
    pivot : (int, int)
        Seed point the region grew from.
    boundary : set of points
        Points on the region's perimeter, unordered.
    neighbors : set of int
        Ids of regions sharing at least one edge with this region.
    """

    pivot: Point
    boundary: Set[AnyPoint] = field(default_factory=set)
    neighbors: Set[int] = field(default_factory=set)

    def __repr__(self) -> str:
        return (
            f"Region(pivot={self.pivot}, boundary={len(self.boundary)}, "
            f"neighbors={sorted(self.neighbors)})"
        )


@dataclass(eq=False)
class RegionMap:
    """Regions of a grid plus the raster saying which region owns each cell.

    ``raster[y, x]`` is the id (index into :attr:`regions`) of the region
    owning cell ``(x, y)``.
    """

    regions: List[Region] = field(default_factory=list)
    raster: np.ndarray = field(default_factory=lambda: np.zeros((0, 0), dtype=np.int32))
    boundary_mode: str = "cell"

    # ── convenience accessors ───────────────────────────────────────

    @property
    def width(self) -> int:
        return int(self.raster.shape[1])

    @property
    def height(self) -> int:
        return int(self.raster.shape[0])

    def region_at(self, x: int, y: int) -> int:
        """Return the id of the region owning cell ``(x, y)``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Cell {(x, y)} outside {self.width}x{self.height} grid")
        return int(self.raster[y, x])

    def cells(self, region_id: int) -> List[Point]:
        """Return the cells owned by *region_id*, row by row."""
        ys, xs = np.nonzero(self.raster == region_id)
        return [(int(x), int(y)) for x, y in zip(xs, ys)]

    def region_sizes(self) -> List[int]:
        """Number of cells owned by each region."""
        counts = np.bincount(self.raster.ravel(), minlength=len(self.regions))
        return [int(c) for c in counts]

    def adjacency(self) -> List[List[int]]:
        """Sorted neighbour ids for each region, indexed by region id."""
        return [sorted(r.neighbors) for r in self.regions]

    def edges(self) -> List[Tuple[int, int]]:
        """Return every adjacency once, as sorted ``(i, j)`` pairs with ``i < j``."""
        return [
            (i, j)
            for i, region in enumerate(self.regions)
            for j in sorted(region.neighbors)
            if i < j
        ]

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "boundary_mode": self.boundary_mode,
            "regions": [
                {
                    "id": i,
                    "pivot": list(r.pivot),
                    "boundary": [list(p) for p in sorted(r.boundary)],
                    "neighbors": sorted(r.neighbors),
                }
                for i, r in enumerate(self.regions)
            ],
            "raster": self.raster.tolist(),
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "RegionMap":
        mode = payload.get("boundary_mode", "cell")
        convert = float if mode == "midpoint" else int
        regions = [
            Region(
                pivot=(int(r["pivot"][0]), int(r["pivot"][1])),
                boundary={(convert(p[0]), convert(p[1])) for p in r.get("boundary", [])},
                neighbors={int(n) for n in r.get("neighbors", [])},
            )
            for r in sorted(payload.get("regions", []), key=lambda r: r["id"])
        ]
        raster = np.asarray(payload["raster"], dtype=np.int32)
        if raster.ndim != 2:
            raster = raster.reshape((int(payload["height"]), int(payload["width"])))
        return cls(regions=regions, raster=raster, boundary_mode=mode)

    def __len__(self) -> int:
        return len(self.regions)

    def __repr__(self) -> str:
        return f"RegionMap({self.width}x{self.height}, regions={len(self.regions)})"


# ═══════════════════════════════════════════════════════════════════
# Builder
# ═══════════════════════════════════════════════════════════════════

def _unique_pivots(pivots: Iterable[Sequence[int]]) -> List[Point]:
    """Deduplicate *pivots*, keeping the first occurrence of each."""
    return list(dict.fromkeys((int(p[0]), int(p[1])) for p in pivots))


def build_region_map(
    pivots: Iterable[Sequence[int]],
    width: int,
    height: int,
    *,
    boundary_mode: str = "cell",
) -> RegionMap:
    """Grow one region per pivot with a simultaneous BFS flood fill.

    Parameters
    ----------
    pivots : iterable of (x, y)
        Seed points.  Duplicates are dropped (first occurrence wins), so
        the map may end up with fewer regions than pivots given.  Region
        ids follow the order of the remaining pivots.
    width, height : int
        Grid dimensions, both > 0.
    boundary_mode : str
        ``"cell"`` or ``"midpoint"`` (see module docs).

    Raises
    ------
    ValueError
        For an empty grid, no pivots, a pivot outside the grid or an
        unknown *boundary_mode*.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Grid must be non-empty, got {width}x{height}")
    if boundary_mode not in BOUNDARY_MODES:
        raise ValueError(f"boundary_mode must be one of {BOUNDARY_MODES}, got {boundary_mode!r}")

    seeds = _unique_pivots(pivots)
    if not seeds:
        raise ValueError("At least one pivot required")
    for x, y in seeds:
        if not (0 <= x < width and 0 <= y < height):
            raise ValueError(f"Pivot {(x, y)} outside {width}x{height} grid")

    midpoints = boundary_mode == "midpoint"
    regions = [Region(pivot=p) for p in seeds]

    # Plain lists while flooding; converted to an array at the end.
    canvas: List[List[int]] = [[UNCLAIMED] * width for _ in range(height)]
    frontiers: List[List[Point]] = []
    for region_id, (x, y) in enumerate(seeds):
        canvas[y][x] = region_id
        frontiers.append([(x, y)])

    rounds = 0
    changed = True
    while changed:
        changed = False
        rounds += 1
        for region_id, frontier in enumerate(frontiers):
            region = regions[region_id]
            next_frontier: List[Point] = []

            for px, py in frontier:
                for dx, dy in _NEIGHBOUR_OFFSETS:
                    x, y = px + dx, py + dy
                    if x < 0 or y < 0 or x >= width or y >= height:
                        continue

                    owner = canvas[y][x]
                    if owner == UNCLAIMED:
                        canvas[y][x] = owner = region_id
                        next_frontier.append((x, y))

                    if owner != region_id:
                        region.neighbors.add(owner)
                        regions[owner].neighbors.add(region_id)
                        if midpoints:
                            region.boundary.add(((px + x) / 2, (py + y) / 2))
                        else:
                            region.boundary.add((px, py))
                    elif x == 0 or y == 0 or x == width - 1 or y == height - 1:
                        region.boundary.add((float(x), float(y)) if midpoints else (x, y))

            frontiers[region_id] = next_frontier
            if next_frontier:
                changed = True

    for region_id, region in enumerate(regions):
        region.neighbors.discard(region_id)

    logger.debug(
        "Flooded %dx%d grid from %d pivots in %d rounds",
        width, height, len(seeds), rounds,
    )

    return RegionMap(
        regions=regions,
        raster=np.asarray(canvas, dtype=np.int32),
        boundary_mode=boundary_mode,
    )
