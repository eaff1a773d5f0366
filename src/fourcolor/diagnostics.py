"""Correctness checks and summary reports for region maps and colourings."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Set

import numpy as np

from .coloring import ColorMap, Graph, SearchStats, _neighbour_lists
from .models import Color, domain_size
from .regions import UNCLAIMED, RegionMap


@dataclass
class Validation:
    """Result of :func:`validate_region_map` or :func:`validate_coloring`."""

    ok: bool
    errors: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.ok


def raster_adjacency(raster: np.ndarray, n_regions: int) -> List[Set[int]]:
    """Recompute region adjacency from 4-neighbour contacts in *raster*."""
    adjacency: List[Set[int]] = [set() for _ in range(n_regions)]
    pairs = [
        (raster[:, :-1], raster[:, 1:]),
        (raster[:-1, :], raster[1:, :]),
    ]
    for a, b in pairs:
        mask = a != b
        for i, j in set(zip(a[mask].tolist(), b[mask].tolist())):
            adjacency[i].add(j)
            adjacency[j].add(i)
    return adjacency


def validate_region_map(region_map: RegionMap) -> Validation:
    """Check that *region_map* is a well-formed partition.

    Checks, in order: raster shape, every cell owned by a valid region,
    every pivot owned by its region, symmetric and irreflexive
    adjacency, and stored adjacency matching the raster.
    """
    errors: List[str] = []
    raster = region_map.raster
    n = len(region_map.regions)

    # 1. Shape
    if raster.ndim != 2 or raster.size == 0:
        errors.append(f"Raster must be a non-empty 2-D array, got shape {raster.shape}")
        return Validation(ok=False, errors=errors)

    # 2. Every cell owned by a valid region
    unclaimed = int(np.count_nonzero(raster == UNCLAIMED))
    if unclaimed:
        errors.append(f"Unclaimed cells: {unclaimed}")
    out_of_range = int(np.count_nonzero((raster < UNCLAIMED) | (raster >= n)))
    if out_of_range:
        errors.append(f"Cells with out-of-range region ids: {out_of_range}")
    if errors:
        return Validation(ok=False, errors=errors)

    # 3. Pivots
    for i, region in enumerate(region_map.regions):
        x, y = region.pivot
        if not (0 <= x < region_map.width and 0 <= y < region_map.height):
            errors.append(f"Region {i} pivot {region.pivot} outside the grid")
        elif raster[y, x] != i:
            errors.append(f"Region {i} pivot {region.pivot} owned by region {raster[y, x]}")

    # 4. Symmetric, irreflexive adjacency
    for i, region in enumerate(region_map.regions):
        if i in region.neighbors:
            errors.append(f"Region {i} lists itself as a neighbour")
        for j in region.neighbors:
            if not 0 <= j < n:
                errors.append(f"Region {i} has unknown neighbour {j}")
            elif i not in region_map.regions[j].neighbors:
                errors.append(f"Adjacency {i}->{j} is not symmetric")

    # 5. Adjacency agrees with the raster
    derived = raster_adjacency(raster, n)
    for i, region in enumerate(region_map.regions):
        if region.neighbors != derived[i]:
            errors.append(
                f"Region {i} neighbours {sorted(region.neighbors)} "
                f"differ from raster {sorted(derived[i])}"
            )

    return Validation(ok=len(errors) == 0, errors=errors)


def validate_coloring(graph: Graph, coloring: ColorMap) -> Validation:
    """Check that *coloring* gives every region one colour and no two
    neighbours the same one."""
    errors: List[str] = []
    neighbours = _neighbour_lists(graph)

    if len(coloring) != len(neighbours):
        errors.append(f"Colouring has {len(coloring)} regions, graph has {len(neighbours)}")
        return Validation(ok=False, errors=errors)

    for i in range(len(coloring)):
        if domain_size(coloring.domain(i)) != 1:
            errors.append(f"Region {i} has domain {coloring.domain(i):#06b}")
    if errors:
        return Validation(ok=False, errors=errors)

    for i, neigh in enumerate(neighbours):
        for j in neigh:
            if i < j and coloring.domain(i) == coloring.domain(j):
                errors.append(
                    f"Regions {i} and {j} are adjacent and both "
                    f"{coloring.color_of_region(i).name}"
                )

    return Validation(ok=len(errors) == 0, errors=errors)


def diagnostics_report(
    region_map: RegionMap,
    coloring: Optional[ColorMap] = None,
    stats: Optional[SearchStats] = None,
) -> Dict[str, Any]:
    """Return a JSON-serialisable summary of a map (and its colouring)."""
    sizes = region_map.region_sizes()
    degrees = [len(r.neighbors) for r in region_map.regions]
    report: Dict[str, Any] = {
        "width": region_map.width,
        "height": region_map.height,
        "regions": len(region_map),
        "edges": len(region_map.edges()),
        "region_size_min": min(sizes),
        "region_size_max": max(sizes),
        "region_size_mean": float(np.mean(sizes)),
        "degree_max": max(degrees),
        "degree_mean": float(np.mean(degrees)),
        "map_valid": validate_region_map(region_map).ok,
    }
    if coloring is not None:
        usage = {c.name: 0 for c in Color}
        for c in coloring.colors():
            usage[c.name] += 1
        report["color_usage"] = usage
        report["coloring_valid"] = validate_coloring(region_map, coloring).ok
    if stats is not None:
        report["search"] = asdict(stats)
    return report
