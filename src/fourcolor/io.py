from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .coloring import ColorMap
from .models import Color
from .regions import BOUNDARY_MODES, RegionMap

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

FORMAT_VERSION = "1.0"


def map_payload(region_map: RegionMap, coloring: Optional[ColorMap] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"version": FORMAT_VERSION, "map": region_map.to_dict()}
    if coloring is not None:
        payload["coloring"] = coloring.to_dict()
    return payload


def save_json(
    region_map: RegionMap,
    path: PathLike,
    coloring: Optional[ColorMap] = None,
    indent: int = 2,
) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(
        json.dumps(map_payload(region_map, coloring), indent=indent, sort_keys=True),
        encoding="utf-8",
    )
    logger.debug("Wrote %r to %s", region_map, out)
    return out


def load_json(path: PathLike) -> Tuple[RegionMap, Optional[ColorMap]]:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    errors = validate_payload(payload)
    if errors:
        raise ValueError(f"Invalid map file {path}: " + "; ".join(errors))
    region_map = RegionMap.from_dict(payload["map"])
    coloring = ColorMap.from_dict(payload["coloring"]) if "coloring" in payload else None
    return region_map, coloring


def validate_payload(payload: Dict[str, Any]) -> List[str]:
    """Check the structure of a saved map payload.

    Returns a list of error messages (empty = valid).  Only the keys
    and shapes that :func:`load_json` relies on are checked; the full
    format is described by ``schemas/region_map.schema.json``.
    """
    errors: List[str] = []

    for key in ("version", "map"):
        if key not in payload:
            errors.append(f"Missing top-level key: {key}")
    if errors:
        return errors

    data = payload["map"]
    for key in ("width", "height", "regions", "raster"):
        if key not in data:
            errors.append(f"Missing map key: {key}")
    if errors:
        return errors

    if data.get("boundary_mode", "cell") not in BOUNDARY_MODES:
        errors.append(f"Unknown boundary_mode: {data['boundary_mode']!r}")

    width, height = data["width"], data["height"]
    raster = data["raster"]
    if not isinstance(raster, list) or len(raster) != height:
        errors.append(f"'raster' must have {height} rows")
    elif any(not isinstance(row, list) or len(row) != width for row in raster):
        errors.append(f"Every raster row must have {width} cells")

    regions = data["regions"]
    if not isinstance(regions, list) or not regions:
        errors.append("'regions' must be a non-empty list")
    else:
        ids = sorted(r.get("id", -1) for r in regions)
        if ids != list(range(len(regions))):
            errors.append("Region ids must be 0 .. n-1")
        for i, region in enumerate(regions):
            if "pivot" not in region:
                errors.append(f"Region {i}: missing 'pivot'")
            if "neighbors" not in region:
                errors.append(f"Region {i}: missing 'neighbors'")

    coloring = payload.get("coloring")
    if coloring is not None:
        names = coloring.get("colors")
        if not isinstance(names, list):
            errors.append("'coloring.colors' must be a list")
        else:
            if isinstance(regions, list) and len(names) != len(regions):
                errors.append(
                    f"Colouring has {len(names)} entries for {len(regions)} regions"
                )
            known = {c.name for c in Color}
            bad = sorted({n for n in names if n not in known})
            if bad:
                errors.append(f"Unknown colours: {', '.join(map(str, bad))}")

    return errors
