import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from polybevel import CUBON_BEVEL, CUBON_RADIUS, build_box, build_corner_piece, diagnostics_report


def main() -> None:
    parser = argparse.ArgumentParser(description="Round a cube and a cube corner piece")
    parser.add_argument("--radius", type=float, default=CUBON_RADIUS)
    parser.add_argument("--render-dir", default=None, help="Write PNG previews here")
    args = parser.parse_args()

    for name, model in (("box", build_box(color=(0.2, 0.6, 0.9))), ("corner", build_corner_piece())):
        report = model.round(args.radius, compute_normals=True, config=CUBON_BEVEL)
        diag = diagnostics_report(model)
        print(f"{name}: {report.faces_before} -> {report.faces_after} faces, "
              f"{report.vertices_after} vertices, closed={diag['closed']}")
        for phase, seconds in report.elapsed.items():
            print(f"  {phase}: {seconds * 1000:.2f} ms")

        if args.render_dir:
            from polybevel.render import render_png
            out = render_png(model, Path(args.render_dir) / f"{name}.png")
            print(f"  saved {out}")


if __name__ == "__main__":
    main()
