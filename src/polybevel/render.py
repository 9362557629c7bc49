"""PNG preview of a model.

Requires matplotlib; imported lazily to keep the core package light.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np

from .model import Model
from .models import DEFAULT_COLOR, Color


def face_colors(model: Model, default_color: Color = DEFAULT_COLOR) -> list[Color]:
    """Average vertex colour of every face, in face order."""
    colours: list[Color] = []
    for face in model.faces.values():
        rgb = [
            model.vertices[vid].color if model.vertices[vid].color is not None else default_color
            for vid in face.vertex_ids
        ]
        colours.append(tuple(float(c) for c in np.mean(rgb, axis=0)))
    return colours


def render_png(
    model: Model,
    out_path: Union[str, Path],
    *,
    figsize: Tuple[float, float] = (8, 8),
    dpi: int = 150,
    elev: float = 25.0,
    azim: float = -50.0,
    edge_color: Tuple[float, float, float, float] = (0.15, 0.15, 0.15, 0.4),
    title: Optional[str] = None,
) -> Path:
    """Render *model* with matplotlib's ``Poly3DCollection``.

    Returns the output file path.
    """
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        from mpl_toolkits.mplot3d.art3d import Poly3DCollection
    except ImportError as exc:  # pragma: no cover - requires optional dep
        raise RuntimeError(
            "matplotlib is required for rendering. Install with `pip install matplotlib`."
        ) from exc

    if not model.faces:
        raise ValueError("Model has no faces to render.")

    polygons = [model.face_positions(fid).tolist() for fid in model.faces]

    fig = plt.figure(figsize=figsize, dpi=dpi)
    ax = fig.add_subplot(111, projection="3d")
    collection = Poly3DCollection(
        polygons,
        facecolors=face_colors(model),
        edgecolors=[edge_color] * len(polygons),
        linewidths=0.3,
    )
    ax.add_collection3d(collection)

    points = np.concatenate([np.asarray(p) for p in polygons])
    centre = (points.max(axis=0) + points.min(axis=0)) / 2.0
    half = float((points.max(axis=0) - points.min(axis=0)).max()) / 2.0 * 1.1 or 1.0
    ax.set_xlim(centre[0] - half, centre[0] + half)
    ax.set_ylim(centre[1] - half, centre[1] + half)
    ax.set_zlim(centre[2] - half, centre[2] + half)
    ax.set_box_aspect([1, 1, 1])
    ax.view_init(elev=elev, azim=azim)
    ax.set_axis_off()
    if title is None:
        title = f"{len(model.faces)} faces, {len(model.vertices)} vertices"
    ax.set_title(title, fontsize=12)

    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out, bbox_inches="tight")
    plt.close(fig)
    return out
