"""fourcolor — random region maps and their four-colourings.

Public API is organised into layers:

- **Core** — models, region map builder, boundary tracing, colouring search
- **Generation** — random pivots, configuration and presets
- **I/O** — JSON persistence
- **Rendering** — terminal and image output (images require matplotlib)
- **Diagnostics** — validation and reports
"""

# ── Core ────────────────────────────────────────────────────────────
from .models import Color, Point, FULL_DOMAIN
from .regions import Region, RegionMap, UNCLAIMED, build_region_map
from .boundary import trace_boundary, nearest_neighbour_order
from .coloring import (
    ByteDomains,
    PackedDomains,
    ColorMap,
    SearchStats,
    SolutionIter,
    all_colorings,
    color_map,
    count_colorings,
    propagate,
)

# ── Generation ──────────────────────────────────────────────────────
from .generator import (
    MapConfig,
    TERMINAL_MAP,
    SMALL_MAP,
    POSTER_MAP,
    random_pivots,
    generate_map,
    generate_colored_map,
)

# ── I/O ─────────────────────────────────────────────────────────────
from .io import load_json, save_json, validate_payload

# ── Rendering ───────────────────────────────────────────────────────
from .render import Palette, render_ansi, render_image, region_outline

# ── Diagnostics ─────────────────────────────────────────────────────
from .diagnostics import (
    Validation,
    diagnostics_report,
    raster_adjacency,
    validate_coloring,
    validate_region_map,
)

__all__ = [
    # Core
    "Color",
    "Point",
    "FULL_DOMAIN",
    "Region",
    "RegionMap",
    "UNCLAIMED",
    "build_region_map",
    "trace_boundary",
    "nearest_neighbour_order",
    "ByteDomains",
    "PackedDomains",
    "ColorMap",
    "SearchStats",
    "SolutionIter",
    "all_colorings",
    "color_map",
    "count_colorings",
    "propagate",
    # Generation
    "MapConfig",
    "TERMINAL_MAP",
    "SMALL_MAP",
    "POSTER_MAP",
    "random_pivots",
    "generate_map",
    "generate_colored_map",
    # I/O
    "load_json",
    "save_json",
    "validate_payload",
    # Rendering
    "Palette",
    "render_ansi",
    "render_image",
    "region_outline",
    # Diagnostics
    "Validation",
    "diagnostics_report",
    "raster_adjacency",
    "validate_coloring",
    "validate_region_map",
]
