"""Drawing coloured region maps.

- :func:`render_ansi` — terminal dump, one character per cell.
- :func:`render_image` — PNG / SVG through matplotlib (imported lazily
  to keep the core package lightweight).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import numpy as np

from .boundary import nearest_neighbour_order, trace_boundary
from .coloring import ColorMap
from .models import AnyPoint, Color
from .regions import Region, RegionMap

_RESET = "\x1b[0m"


@dataclass(frozen=True)
class Palette:
    """Visual attributes for the four colours, in ``Color`` order."""

    ansi: Sequence[int] = (41, 44, 42, 43)  # red, blue, green, yellow backgrounds
    hex: Sequence[str] = ("#d1495b", "#3a6ea5", "#66a182", "#edae49")
    plain: str = "1234"

    def index(self, color: Color) -> int:
        return list(Color).index(color)

    def ansi_cell(self, color: Color, char: str = " ", dimmed: bool = True) -> str:
        style = f"2;{self.ansi[self.index(color)]}" if dimmed else str(self.ansi[self.index(color)])
        return f"\x1b[{style}m{char}{_RESET}"

    def hex_for(self, color: Color) -> str:
        return self.hex[self.index(color)]


DEFAULT_PALETTE = Palette()


# ═══════════════════════════════════════════════════════════════════
# Terminal
# ═══════════════════════════════════════════════════════════════════

def render_ansi(
    region_map: RegionMap,
    coloring: ColorMap,
    *,
    show_pivots: bool = True,
    show_boundaries: bool = False,
    plain: bool = False,
    palette: Palette = DEFAULT_PALETTE,
) -> str:
    """Return the map as terminal text, one line per grid row.

    Cells are dimmed background blanks in their region's colour,
    boundary cells (optional) are ``*`` and pivots a bright ``X``.
    With *plain* the colour digit ``1``-``4`` is printed instead and no
    escape codes are emitted.  Boundaries are only drawn for ``"cell"``
    maps.
    """
    colors = coloring.colors()

    def cell(color: Color, char: Optional[str] = None, dimmed: bool = True) -> str:
        if plain:
            return char or palette.plain[palette.index(color)]
        return palette.ansi_cell(color, char or " ", dimmed=dimmed)

    rows: List[List[str]] = [
        [cell(colors[rid]) for rid in row] for row in region_map.raster.tolist()
    ]

    if show_boundaries and region_map.boundary_mode == "cell":
        for rid, region in enumerate(region_map.regions):
            for x, y in region.boundary:
                rows[y][x] = cell(colors[rid], "*", dimmed=False)

    if show_pivots:
        for rid, region in enumerate(region_map.regions):
            x, y = region.pivot
            rows[y][x] = cell(colors[rid], "X", dimmed=False)

    return "\n".join("".join(row) for row in rows)


# ═══════════════════════════════════════════════════════════════════
# Images
# ═══════════════════════════════════════════════════════════════════

def region_outline(region: Region) -> List[AnyPoint]:
    """Ordered outline of *region*.

    Integer boundaries use the lattice walk; float (midpoint) boundaries
    use the greedy nearest-neighbour order.
    """
    if all(isinstance(p[0], int) and isinstance(p[1], int) for p in region.boundary):
        return list(trace_boundary(region.boundary))
    return nearest_neighbour_order(region.boundary)


def _ensure_mpl():
    """Lazy-import matplotlib; raise helpful error if missing."""
    try:
        import matplotlib.pyplot as plt
        from matplotlib.colors import to_rgb
        return plt, to_rgb
    except ImportError as exc:  # pragma: no cover - requires optional dep
        raise RuntimeError(
            "matplotlib is required for rendering. Install with `pip install matplotlib`."
        ) from exc


def color_image(
    region_map: RegionMap,
    coloring: ColorMap,
    palette: Palette = DEFAULT_PALETTE,
) -> np.ndarray:
    """Return an ``(height, width, 3)`` float RGB image of the coloured map."""
    _, to_rgb = _ensure_mpl()
    lut: Dict[Color, tuple] = {c: to_rgb(palette.hex_for(c)) for c in Color}
    region_rgb = np.array([lut[c] for c in coloring.colors()], dtype=float)
    return region_rgb[region_map.raster]


def render_image(
    region_map: RegionMap,
    coloring: ColorMap,
    output_path: str | Path,
    *,
    draw_outlines: bool = True,
    draw_pivots: bool = True,
    outline_color: str = "#2b2b2b",
    pivot_color: str = "#ffffff",
    scale: float = 0.1,
    dpi: int = 150,
    palette: Palette = DEFAULT_PALETTE,
) -> Path:
    """Render the coloured map to an image file.

    The format follows the suffix of *output_path* (``.png``, ``.svg``,
    ``.pdf`` …).  *scale* is the figure size in inches per grid cell.
    """
    plt, _ = _ensure_mpl()
    image = color_image(region_map, coloring, palette)

    fig, ax = plt.subplots(
        figsize=(max(region_map.width * scale, 1.0), max(region_map.height * scale, 1.0))
    )
    ax.imshow(image, interpolation="nearest", origin="upper")

    if draw_outlines:
        for region in region_map.regions:
            points = region_outline(region)
            if len(points) < 2:
                continue
            xs, ys = zip(*(points + [points[0]]))
            ax.plot(xs, ys, color=outline_color, linewidth=0.8)

    if draw_pivots:
        px = [r.pivot[0] for r in region_map.regions]
        py = [r.pivot[1] for r in region_map.regions]
        ax.scatter(px, py, s=12, c=pivot_color, edgecolors=outline_color, zorder=3)

    ax.set_xlim(-0.5, region_map.width - 0.5)
    ax.set_ylim(region_map.height - 0.5, -0.5)
    ax.axis("off")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=dpi, bbox_inches="tight", pad_inches=0)
    plt.close(fig)
    return output_path
