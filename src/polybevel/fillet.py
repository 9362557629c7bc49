"""Edge fillet: a strip of quads sweeping around every shared edge."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np

from .config import DEFAULT_ROUNDING, RoundingConfig
from .geometry import lerp_vertices, normalize, rotate_about_axis, rotate_vector
from .inset import InsetResult
from .models import Face, Vertex
from .topology import TopologyAnalysis

logger = logging.getLogger(__name__)

Rail = Tuple[int, ...]


@dataclass(frozen=True)
class EdgeFilletResult:
    """Caps plus fillet strips, and what corner stitching needs.

    *corner_centers* and *corner_rails* are keyed by the index of the
    original (pre-bevel) vertex.  Each rail runs from one cap vertex at
    that corner to the next, clockwise seen from outside.
    """

    vertices: Tuple[Vertex, ...]
    faces: Tuple[Face, ...]
    corner_centers: Dict[int, np.ndarray]
    corner_rails: Dict[int, Tuple[Rail, ...]]


def _arc_vertex(
    start: Vertex,
    facing: Vertex,
    center: np.ndarray,
    axis: np.ndarray,
    theta: float,
    t: float,
    normal: np.ndarray | None,
) -> Vertex:
    blended = lerp_vertices(start, facing, t)
    position = rotate_about_axis(start.position, center, axis, theta)
    return Vertex.at(position, normal if normal is not None else blended.normal, blended.color)


def fillet_edges(
    inset: InsetResult,
    analysis: TopologyAnalysis,
    radius: float,
    compute_normals: bool = False,
    config: RoundingConfig = DEFAULT_ROUNDING,
) -> EdgeFilletResult:
    vertices: List[Vertex] = list(inset.vertices)
    faces: List[Face] = list(inset.faces)
    caps = {face.id: face for face in inset.faces}
    centers: Dict[int, np.ndarray] = {}
    rails: Dict[int, List[Rail]] = {}
    segments = config.edge_segments

    for edge_index, edge in enumerate(analysis.edges):
        cap0 = caps[edge.face0]
        cap1 = caps[edge.face1]
        n0 = analysis.face_normals[edge.face0]

        # p0 -> p1 along face0, p2 -> p3 is the same edge along face1
        i0 = cap0.vertex_ids[edge.index0]
        i1 = cap0.vertex_ids[(edge.index0 + 1) % cap0.vertex_count()]
        i2 = cap1.vertex_ids[edge.index1]
        i3 = cap1.vertex_ids[(edge.index1 + 1) % cap1.vertex_count()]
        p0, p1, p2, p3 = (vertices[i] for i in (i0, i1, i2, i3))

        c0 = p0.position - n0 * radius
        c1 = p1.position - n0 * radius
        axis = normalize(c1 - c0)

        line0 = [i0]
        line1 = [i1]
        for i in range(1, segments):
            t = i / segments
            theta = edge.angle * t
            normal = rotate_vector(n0, axis, theta) if compute_normals else None

            line0.append(len(vertices))
            vertices.append(_arc_vertex(p0, p3, c0, axis, theta, t, normal))
            line1.append(len(vertices))
            vertices.append(_arc_vertex(p1, p2, c0, axis, theta, t, normal))
        line0.append(i3)
        line1.append(i2)

        for i in range(segments):
            faces.append(Face(
                f"e{edge_index}.{i}",
                (line0[i + 1], line1[i + 1], line1[i], line0[i]),
                "fillet",
            ))

        centers.setdefault(edge.vertex0, c0)
        centers.setdefault(edge.vertex1, c1)
        rails.setdefault(edge.vertex0, []).append(tuple(line0))
        rails.setdefault(edge.vertex1, []).append(tuple(reversed(line1)))

    logger.debug(
        "Edge fillet: %d edges, %d strip faces, %d vertices",
        len(analysis.edges), len(faces) - len(inset.faces), len(vertices),
    )
    return EdgeFilletResult(
        tuple(vertices),
        tuple(faces),
        centers,
        {vid: tuple(lines) for vid, lines in rails.items()},
    )
