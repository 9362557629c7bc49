"""polybevel command-line interface."""

from __future__ import annotations

import argparse
import json
from typing import Optional, Sequence

from .config import CUBON_RADIUS, EDGE_SEGMENTS, CORNER_SEGMENTS, RoundingConfig
from .errors import BevelError
from .io import load_json, save_json
from .logging_config import setup_logging

SHAPES = ("box", "tetrahedron", "corner", "prism")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="polybevel CLI")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Build a convex shape")
    build.add_argument("shape", choices=SHAPES)
    build.add_argument("--out", dest="output_path", required=True)
    build.add_argument("--size", type=float, default=2.0,
                       help="Box size, tetrahedron edge, twice the corner arm or prism diameter")
    build.add_argument("--sides", type=int, default=6, help="Prism sides")
    build.add_argument("--closed", action="store_true", help="Close the corner piece")

    rnd = sub.add_parser("round", help="Bevel every edge and corner of a model")
    rnd.add_argument("--in", dest="input_path", required=True)
    rnd.add_argument("--out", dest="output_path", required=True)
    rnd.add_argument("--radius", type=float, default=CUBON_RADIUS)
    rnd.add_argument("--normals", action="store_true", help="Compute smooth normals")
    rnd.add_argument("--edge-segments", type=int, default=EDGE_SEGMENTS)
    rnd.add_argument("--corner-segments", type=int, default=CORNER_SEGMENTS)
    rnd.add_argument("--no-validate", action="store_true")
    rnd.add_argument("--report-json", dest="report_json")

    validate = sub.add_parser("validate", help="Validate a model")
    validate.add_argument("--in", dest="input_path", required=True)
    validate.add_argument("--strict", action="store_true",
                          help="Also check planarity and convexity")

    report = sub.add_parser("report", help="Print mesh diagnostics as JSON")
    report.add_argument("--in", dest="input_path", required=True)

    render = sub.add_parser("render", help="Render a model to PNG")
    render.add_argument("--in", dest="input_path", required=True)
    render.add_argument("--out", dest="output_path", required=True)
    render.add_argument("--elev", type=float, default=25.0)
    render.add_argument("--azim", type=float, default=-50.0)
    render.add_argument("--dpi", type=int, default=150)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.command == "build":
            _cmd_build(args)

        elif args.command == "round":
            _cmd_round(args)

        elif args.command == "validate":
            model = load_json(args.input_path)
            errors = model.validate(strict=args.strict)
            if errors:
                for error in errors:
                    print(error)
                raise SystemExit(1)
            print("OK")

        elif args.command == "report":
            from .diagnostics import diagnostics_report
            model = load_json(args.input_path)
            print(json.dumps(diagnostics_report(model), indent=2))

        elif args.command == "render":
            from .render import render_png
            model = load_json(args.input_path)
            render_png(model, args.output_path, elev=args.elev, azim=args.azim, dpi=args.dpi)
            print(f"Saved {args.output_path}")
    except (BevelError, ValueError) as exc:
        print(exc)
        raise SystemExit(1)


def _cmd_build(args) -> None:
    from . import builders

    if args.shape == "box":
        model = builders.build_box(args.size)
    elif args.shape == "tetrahedron":
        model = builders.build_tetrahedron(args.size)
    elif args.shape == "corner":
        model = builders.build_corner_piece(args.size / 2.0, closed=args.closed)
    else:
        model = builders.build_prism(args.sides, radius=args.size / 2.0)
    save_json(model, args.output_path)
    print(f"Saved {args.output_path}")


def _cmd_round(args) -> None:
    model = load_json(args.input_path)
    config = RoundingConfig(
        edge_segments=args.edge_segments,
        corner_segments=args.corner_segments,
        validate=not args.no_validate,
    )

    report = model.round(args.radius, args.normals, config=config)
    save_json(model, args.output_path)
    if args.report_json:
        with open(args.report_json, "w", encoding="utf-8") as fh:
            json.dump(report.to_dict(), fh, indent=2)
    print(
        f"Rounded {report.edges} edges and {report.corners} corners: "
        f"{report.faces_before} -> {report.faces_after} faces"
    )
    print(f"Saved {args.output_path}")


if __name__ == "__main__":
    main()
