"""Face inset: shrink every face into the flat cap of the beveled solid."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .config import DEFAULT_ROUNDING, RoundingConfig
from .errors import RadiusTooLargeError
from .geometry import area_vector, edge_directions
from .models import Face, MeshSnapshot, Vertex
from .topology import TopologyAnalysis, edge_lookup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InsetResult:
    """Cap faces over a fresh vertex arena.

    *cap_vertex* maps ``(face_id, i)`` to the arena index of the cap
    vertex that replaced local vertex *i* of that face.
    """

    vertices: Tuple[Vertex, ...]
    faces: Tuple[Face, ...]
    cap_vertex: Dict[Tuple[str, int], int]


def inset_polygon(
    positions: np.ndarray,
    normal: np.ndarray,
    deltas: Sequence[float],
    tolerance: float = DEFAULT_ROUNDING.degenerate_tolerance,
) -> np.ndarray:
    """Move every vertex inward by the per-edge offsets in *deltas*.

    ``deltas[i]`` is the offset of the edge from vertex ``i`` to ``i+1``.
    Each new vertex is the intersection of its two offset edge lines;
    when those are parallel the midpoint of the two offset points is
    used instead.
    """
    positions = np.asarray(positions, dtype=float)
    n = len(positions)
    directions = edge_directions(positions)
    inset = np.empty_like(positions)

    for i in range(n):
        prev = (i - 1) % n
        d0 = directions[prev]
        d1 = directions[i]
        o0 = positions[i] + np.cross(normal, d0) * deltas[prev]
        o1 = positions[i] + np.cross(normal, d1) * deltas[i]

        cross = np.cross(d0, d1)
        denom = float(np.dot(cross, cross))
        if denom <= tolerance:
            inset[i] = (o0 + o1) * 0.5
            continue

        t = float(np.dot(o1 - o0, np.cross(d1, cross))) / denom
        inset[i] = o0 + d0 * t

    return inset


def inset_faces(
    snapshot: MeshSnapshot,
    analysis: TopologyAnalysis,
    compute_normals: bool = False,
    config: RoundingConfig = DEFAULT_ROUNDING,
) -> InsetResult:
    lookup = edge_lookup(analysis.edges)
    vertices: List[Vertex] = []
    faces: List[Face] = []
    cap_vertex: Dict[Tuple[str, int], int] = {}

    for face in snapshot.faces:
        normal = analysis.face_normals[face.id]
        n = len(face.vertex_ids)
        deltas = []
        for i in range(n):
            edge = lookup.get((face.id, i))
            deltas.append(edge.delta if edge is not None else 0.0)

        positions = snapshot.positions(face)
        inset = inset_polygon(positions, normal, deltas, config.degenerate_tolerance)

        if config.validate and float(np.dot(area_vector(inset), normal)) <= 0.0:
            logger.warning("Cap of face %s collapses at this radius", face.id)
            raise RadiusTooLargeError(
                f"Face {face.id} collapses when inset; use a smaller radius"
            )

        cap_ids = []
        for i, vid in enumerate(face.vertex_ids):
            original = snapshot.vertices[vid]
            cap_normal = normal if compute_normals else original.normal
            cap_ids.append(len(vertices))
            cap_vertex[(face.id, i)] = len(vertices)
            vertices.append(Vertex.at(inset[i], cap_normal, original.color))

        faces.append(Face(face.id, tuple(cap_ids), face.face_type))

    logger.debug("Inset: %d caps, %d cap vertices", len(faces), len(vertices))
    return InsetResult(tuple(vertices), tuple(faces), cap_vertex)
