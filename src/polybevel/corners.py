"""Corner fillet: close the hole where fillet rails meet at a vertex.

Each rail is bridged to a single new corner point by a patch of quads
and triangles lying on the sphere of the bevel radius around the corner
centre.  Connector lines from a rail endpoint to the corner point are
shared by the two rails that end there, so neighbouring patches stitch
without cracks.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import numpy as np

from .config import DEFAULT_ROUNDING, RoundingConfig
from .fillet import EdgeFilletResult
from .geometry import lerp_vertices, normalize, project_to_sphere
from .models import Face, MeshSnapshot, Vertex
from .topology import TopologyAnalysis

logger = logging.getLogger(__name__)


def _sphere_vertex(
    v0: Vertex,
    v1: Vertex,
    t: float,
    center: np.ndarray,
    radius: float,
    radial_normal: bool,
) -> Vertex:
    blended = lerp_vertices(v0, v1, t)
    position = project_to_sphere(blended.position, center, radius)
    normal: Optional[np.ndarray] = blended.normal
    if radial_normal:
        normal = normalize(position - center)
    return Vertex.at(position, normal, blended.color)


def spherical_line(
    vertices: List[Vertex],
    center: np.ndarray,
    start: int,
    end: int,
    segments: int,
    radius: float,
    compute_normals: bool = False,
) -> List[int]:
    """Connect *start* to *end* with *segments* pieces on the sphere.

    New vertices are appended to *vertices*; the endpoints are reused.
    Points get a radial normal when *compute_normals* is set or when the
    endpoints carry normals of their own.
    """
    line = [start]
    radial = compute_normals or vertices[start].has_normal() or vertices[end].has_normal()
    for i in range(1, segments):
        line.append(len(vertices))
        vertices.append(_sphere_vertex(
            vertices[start], vertices[end], i / segments, center, radius, radial,
        ))
    line.append(end)
    return line


def fillet_corners(
    snapshot: MeshSnapshot,
    analysis: TopologyAnalysis,
    fillet: EdgeFilletResult,
    radius: float,
    compute_normals: bool = False,
    config: RoundingConfig = DEFAULT_ROUNDING,
) -> MeshSnapshot:
    vertices: List[Vertex] = list(fillet.vertices)
    faces: List[Face] = list(fillet.faces)
    connectors: Dict[int, List[int]] = {}
    segments = config.corner_segments
    patched = 0

    def connector(endpoint: int, center: np.ndarray, tip: int) -> List[int]:
        line = connectors.get(endpoint)
        if line is None:
            line = spherical_line(vertices, center, endpoint, tip, segments, radius, compute_normals)
            connectors[endpoint] = line
        return line

    for vid, corner in analysis.corners.items():
        rails = fillet.corner_rails.get(vid)
        if not rails:
            continue
        patched += 1
        center = fillet.corner_centers[vid]
        original = snapshot.vertices[vid]

        tip = len(vertices)
        vertices.append(Vertex.at(
            center + corner.normal * radius,
            corner.normal if compute_normals else original.normal,
            original.color,
        ))

        for rail_index, rail in enumerate(rails):
            side0 = connector(rail[0], center, tip)
            side1 = connector(rail[-1], center, tip)
            prefix = f"c{vid}.{rail_index}."
            count = 0

            last = list(rail)
            for i in range(1, segments):
                size = len(last) - 1
                ring = [side0[i]]
                # ring points keep the blended normal unless normals are recomputed
                for j in range(1, size - 1):
                    ring.append(len(vertices))
                    vertices.append(_sphere_vertex(
                        vertices[side0[i]], vertices[side1[i]], j / (size - 1),
                        center, radius, compute_normals,
                    ))
                ring.append(side1[i])

                for j in range(len(ring) - 1):
                    faces.append(Face(
                        f"{prefix}{count}", (ring[j], ring[j + 1], last[j + 1], last[j]), "corner",
                    ))
                    count += 1
                faces.append(Face(f"{prefix}{count}", (ring[-1], last[-1], last[-2]), "corner"))
                count += 1
                last = ring

            for j in range(1, len(last)):
                faces.append(Face(f"{prefix}{count}", (last[j], last[j - 1], tip), "corner"))
                count += 1

    logger.debug("Corner fillet: %d corners patched, %d vertices", patched, len(vertices))
    return MeshSnapshot(tuple(vertices), tuple(faces))
