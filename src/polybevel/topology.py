"""Topology analysis: face normals, corners and shared rounding edges.

Adjacency is purely index based. Two faces share an edge when one of
them walks ``p → q`` and the other walks ``q → p``; both faces must be
wound the same way for that test to work, so a directed edge walked by
two faces is rejected as inconsistent winding.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

import numpy as np

from .errors import InconsistentWindingError
from .geometry import angle_between, normalize, polygon_normal, vertex_angle
from .models import Face, MeshSnapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundingEdge:
    """An edge shared by two faces.

    *face0* walks ``index0 → index0+1`` and *face1* walks the same two
    vertices as ``index1 → index1+1`` in the opposite direction.
    *vertex0* is the vertex at ``face0[index0]`` and *vertex1* the one at
    ``face1[index1]``.  *delta* is the in-plane offset that makes the
    inset cap and the fillet cylinder meet tangentially.
    """

    face0: str
    face1: str
    index0: int
    index1: int
    vertex0: int
    vertex1: int
    angle: float
    delta: float


@dataclass
class Corner:
    """Every ``(face_id, local index)`` at which *vertex* appears."""

    vertex: int
    occurrences: List[Tuple[str, int]] = field(default_factory=list)
    normal: np.ndarray = field(default_factory=lambda: np.zeros(3))


@dataclass(frozen=True)
class TopologyAnalysis:
    face_normals: Dict[str, np.ndarray]
    corners: Dict[int, Corner]
    edges: Tuple[RoundingEdge, ...]


def corner_normal(
    snapshot: MeshSnapshot,
    faces: Dict[str, Face],
    face_normals: Dict[str, np.ndarray],
    occurrences: Iterable[Tuple[str, int]],
) -> np.ndarray:
    """Angle-weighted average of the normals of the faces meeting at a vertex."""
    total = np.zeros(3)
    for face_id, index in occurrences:
        angle = vertex_angle(snapshot.positions(faces[face_id]), index)
        total += face_normals[face_id] * angle
    return normalize(total)


def check_winding(faces: Iterable[Face]) -> None:
    owners: Dict[Tuple[int, int], str] = {}
    for face in faces:
        for directed in face.directed_edges():
            other = owners.get(directed)
            if other is not None:
                logger.warning("Directed edge %s walked by %s and %s", directed, other, face.id)
                raise InconsistentWindingError(
                    f"Faces {other} and {face.id} both walk edge {directed[0]}->{directed[1]}"
                )
            owners[directed] = face.id


def find_rounding_edges(
    faces: List[Face],
    face_normals: Dict[str, np.ndarray],
    radius: float,
) -> List[RoundingEdge]:
    """Scan every face pair for edges walked in opposite directions."""
    edges: List[RoundingEdge] = []
    for i, face_a in enumerate(faces):
        index_in_a = {vid: idx for idx, vid in enumerate(face_a.vertex_ids)}
        n_a = len(face_a.vertex_ids)
        for face_b in faces[i + 1:]:
            n_b = len(face_b.vertex_ids)
            for f1j, vid in enumerate(face_b.vertex_ids):
                f1i = (f1j - 1) % n_b
                f0i = index_in_a.get(vid)
                if f0i is None:
                    continue
                if face_a.vertex_ids[(f0i + 1) % n_a] != face_b.vertex_ids[f1i]:
                    continue
                angle = angle_between(face_normals[face_a.id], face_normals[face_b.id])
                edges.append(RoundingEdge(
                    face0=face_a.id,
                    face1=face_b.id,
                    index0=f0i,
                    index1=f1i,
                    vertex0=face_a.vertex_ids[f0i],
                    vertex1=face_b.vertex_ids[f1i],
                    angle=angle,
                    delta=math.tan(angle / 2.0) * radius,
                ))
    return edges


def analyse_topology(snapshot: MeshSnapshot, radius: float) -> TopologyAnalysis:
    faces = list(snapshot.faces)
    by_id = {face.id: face for face in faces}
    check_winding(faces)

    face_normals: Dict[str, np.ndarray] = {}
    corners: Dict[int, Corner] = {}
    for face in faces:
        face_normals[face.id] = polygon_normal(snapshot.positions(face))
        for index, vid in enumerate(face.vertex_ids):
            corner = corners.get(vid)
            if corner is None:
                corner = Corner(vid)
                corners[vid] = corner
            corner.occurrences.append((face.id, index))

    for corner in corners.values():
        corner.normal = corner_normal(snapshot, by_id, face_normals, corner.occurrences)

    edges = find_rounding_edges(faces, face_normals, radius)
    logger.debug(
        "Topology: %d faces, %d corners, %d rounding edges",
        len(faces), len(corners), len(edges),
    )
    return TopologyAnalysis(face_normals, corners, tuple(edges))


def edge_lookup(edges: Iterable[RoundingEdge]) -> Dict[Tuple[str, int], RoundingEdge]:
    """Map ``(face_id, i)`` to the edge leaving local vertex *i* of that face."""
    lookup: Dict[Tuple[str, int], RoundingEdge] = {}
    for edge in edges:
        lookup.setdefault((edge.face0, edge.index0), edge)
        lookup.setdefault((edge.face1, edge.index1), edge)
    return lookup
