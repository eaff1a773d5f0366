"""fourcolor command-line interface."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from .coloring import all_colorings, color_map, count_colorings
from .generator import TERMINAL_MAP, MapConfig, generate_map
from .io import load_json, save_json
from .regions import BOUNDARY_MODES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Four-colour map generator")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    generate = sub.add_parser("generate", help="Generate and colour a random map")
    generate.add_argument("--width", type=int, default=TERMINAL_MAP.width)
    generate.add_argument("--height", type=int, default=TERMINAL_MAP.height)
    generate.add_argument("--regions", type=int, default=TERMINAL_MAP.n_regions,
                          help="Number of random pivots")
    generate.add_argument("--seed", type=int)
    generate.add_argument("--boundary-mode", choices=BOUNDARY_MODES,
                          default=TERMINAL_MAP.boundary_mode)
    generate.add_argument("--packed", action="store_true",
                          help="Store colour domains two per byte")
    generate.add_argument("--out", dest="output_path")
    generate.add_argument("--render-out", dest="render_path",
                          help="Image path (.png, .svg)")
    generate.add_argument("--show", action="store_true", help="Print the map to the terminal")
    generate.add_argument("--diagnose", action="store_true")
    generate.add_argument("--diagnose-json", dest="diagnose_json")

    show = sub.add_parser("show", help="Print a saved map to the terminal")
    show.add_argument("--in", dest="input_path", required=True)
    show.add_argument("--boundaries", action="store_true")
    show.add_argument("--no-pivots", action="store_true")
    show.add_argument("--plain", action="store_true", help="Digits instead of ANSI colours")

    render = sub.add_parser("render", help="Render a saved map to an image")
    render.add_argument("--in", dest="input_path", required=True)
    render.add_argument("--out", dest="output_path", required=True)
    render.add_argument("--dpi", type=int, default=150)
    render.add_argument("--no-outlines", action="store_true")

    count = sub.add_parser("count", help="Count the colourings of a saved map")
    count.add_argument("--in", dest="input_path", required=True)
    count.add_argument("--limit", type=int)

    validate = sub.add_parser("validate", help="Validate a saved map and its colouring")
    validate.add_argument("--in", dest="input_path", required=True)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command == "generate":
        _cmd_generate(args)

    elif args.command == "show":
        _cmd_show(args)

    elif args.command == "render":
        _cmd_render(args)

    elif args.command == "count":
        region_map, _ = load_json(args.input_path)
        total = count_colorings(region_map, limit=args.limit)
        suffix = "+" if args.limit is not None and total >= args.limit else ""
        print(f"{total}{suffix} colourings")

    elif args.command == "validate":
        _cmd_validate(args)


def _cmd_generate(args) -> None:
    from .diagnostics import diagnostics_report

    config = MapConfig(
        width=args.width,
        height=args.height,
        n_regions=args.regions,
        seed=args.seed,
        boundary_mode=args.boundary_mode,
        packed=args.packed,
    )
    try:
        region_map = generate_map(config)
    except ValueError as exc:
        print(exc)
        raise SystemExit(1)

    search = all_colorings(region_map, packed=config.packed)
    coloring = next(search, None)
    if coloring is None:
        print(f"No colouring found for {region_map!r}")
        raise SystemExit(1)

    if args.show:
        from .render import render_ansi
        print(render_ansi(region_map, coloring))
    if args.output_path:
        save_json(region_map, args.output_path, coloring)
        print(f"Saved {args.output_path}")
    if args.render_path:
        from .render import render_image
        render_image(region_map, coloring, args.render_path)
        print(f"Saved {args.render_path}")

    report = diagnostics_report(region_map, coloring, search.stats)
    if args.diagnose:
        for key, value in report.items():
            print(f"{key}: {value}")
    if args.diagnose_json:
        Path(args.diagnose_json).write_text(json.dumps(report, indent=2), encoding="utf-8")


def _cmd_show(args) -> None:
    from .render import render_ansi

    region_map, coloring = load_json(args.input_path)
    if coloring is None:
        coloring = color_map(region_map)
    if coloring is None:
        print("No colouring found")
        raise SystemExit(1)
    print(render_ansi(
        region_map,
        coloring,
        show_pivots=not args.no_pivots,
        show_boundaries=args.boundaries,
        plain=args.plain,
    ))


def _cmd_render(args) -> None:
    from .render import render_image

    region_map, coloring = load_json(args.input_path)
    if coloring is None:
        coloring = color_map(region_map)
    if coloring is None:
        print("No colouring found")
        raise SystemExit(1)
    render_image(
        region_map,
        coloring,
        args.output_path,
        draw_outlines=not args.no_outlines,
        dpi=args.dpi,
    )
    print(f"Saved {args.output_path}")


def _cmd_validate(args) -> None:
    from .diagnostics import validate_coloring, validate_region_map

    region_map, coloring = load_json(args.input_path)
    errors = list(validate_region_map(region_map).errors)
    if coloring is not None:
        errors.extend(validate_coloring(region_map, coloring).errors)
    if errors:
        for error in errors:
            print(error)
        raise SystemExit(1)
    print("OK")


if __name__ == "__main__":
    main()
