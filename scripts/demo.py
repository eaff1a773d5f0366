#!/usr/bin/env python3
"""Demo: generate a random map, four-colour it and print it to the terminal.

Usage:
    python scripts/demo.py                          # 80x24, 10 regions
    python scripts/demo.py --regions 16 --seed 7    # customise
    python scripts/demo.py --out exports/map.svg    # also save an image
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from fourcolor import (
    TERMINAL_MAP,
    generate_colored_map,
    render_ansi,
    validate_coloring,
    validate_region_map,
)


def main() -> None:
    parser = argparse.ArgumentParser(description="Four-colour map demo")
    parser.add_argument("--width", type=int, default=TERMINAL_MAP.width)
    parser.add_argument("--height", type=int, default=TERMINAL_MAP.height)
    parser.add_argument("--regions", type=int, default=TERMINAL_MAP.n_regions)
    parser.add_argument("--seed", type=int, help="Random seed (default: random)")
    parser.add_argument("--out", type=str, help="Optional image path (.png or .svg)")
    args = parser.parse_args()

    config = TERMINAL_MAP.with_seed(args.seed)
    config.width, config.height, config.n_regions = args.width, args.height, args.regions

    region_map, coloring = generate_colored_map(config)

    result = validate_region_map(region_map)
    if not result.ok:
        print("Validation errors:")
        for e in result.errors:
            print(f"  • {e}")
        raise SystemExit(1)
    if coloring is None or not validate_coloring(region_map, coloring).ok:
        print("No valid colouring found")
        raise SystemExit(1)

    print(render_ansi(region_map, coloring))

    if args.out:
        from fourcolor import render_image

        out = render_image(region_map, coloring, args.out)
        print(f"Saved {out}")


if __name__ == "__main__":
    main()
