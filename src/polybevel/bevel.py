"""Bevel pipeline: replace every edge by a fillet and every corner by a sphere patch.

The rounding pass is a fixed sequence of pure phases, each consuming the
previous phase's snapshot:

1. :func:`~polybevel.topology.analyse_topology`: normals, corners, shared edges
2. :func:`~polybevel.inset.inset_faces`: flat caps
3. :func:`~polybevel.fillet.fillet_edges`: cylindrical strips
4. :func:`~polybevel.corners.fillet_corners`: spherical corner patches

Usage
-----
>>> from polybevel.bevel import round_mesh
>>> rounded, report = round_mesh(model.snapshot(), 0.05)

The input is assumed convex with a radius small against its edges.
With ``config.validate`` the radius is checked against the shortest edge
and a cap that would flip raises instead of producing inverted geometry.
"""

from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass, field, replace
from typing import Dict, Optional, Tuple

from .config import DEFAULT_ROUNDING, RoundingConfig
from .corners import fillet_corners
from .errors import RadiusTooLargeError
from .fillet import fillet_edges
from .geometry import edge_lengths
from .inset import inset_faces
from .models import Face, MeshSnapshot
from .topology import analyse_topology

logger = logging.getLogger(__name__)

PHASES = ("topology", "inset", "edge_fillet", "corner_fillet")


@dataclass
class RoundingReport:
    """What a rounding pass produced.

    Attributes
    ----------
    radius : float
        Bevel radius used.
    edges : int
        Shared edges that received a fillet strip.
    corners : int
        Vertices that received a corner patch.
    cap_faces, fillet_faces, corner_faces : int
        Emitted faces by kind.
    vertices_before, vertices_after, faces_before, faces_after : int
        Arena and face counts around the pass.
    elapsed : dict[str, float]
        Wall-clock seconds per phase.
    """

    radius: float
    edges: int = 0
    corners: int = 0
    cap_faces: int = 0
    fillet_faces: int = 0
    corner_faces: int = 0
    vertices_before: int = 0
    vertices_after: int = 0
    faces_before: int = 0
    faces_after: int = 0
    elapsed: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)


def shortest_edge(snapshot: MeshSnapshot) -> Optional[float]:
    lengths = [
        float(edge_lengths(snapshot.positions(face)).min())
        for face in snapshot.faces
    ]
    return min(lengths) if lengths else None


def check_radius(snapshot: MeshSnapshot, radius: float) -> None:
    """Raise :class:`RadiusTooLargeError` unless ``radius < shortest edge / 2``."""
    shortest = shortest_edge(snapshot)
    if shortest is not None and radius >= shortest / 2.0:
        logger.warning("Radius %g rejected, shortest edge is %g", radius, shortest)
        raise RadiusTooLargeError(
            f"Radius {radius} must be smaller than half the shortest edge ({shortest / 2.0})"
        )


def resolve_face_ids(snapshot: MeshSnapshot, reserved: int) -> MeshSnapshot:
    """Rename generated faces whose id is already taken.

    The first *reserved* faces are the caps and keep their ids; a later
    face clashing with any id gets a numeric suffix instead.
    """
    taken = {face.id for face in snapshot.faces}
    kept = {face.id for face in snapshot.faces[:reserved]}
    faces: list[Face] = list(snapshot.faces[:reserved])
    for face in snapshot.faces[reserved:]:
        if face.id in kept:
            n = 1
            while f"{face.id}.{n}" in taken:
                n += 1
            logger.debug("Face id %s taken, using %s.%d", face.id, face.id, n)
            face = replace(face, id=f"{face.id}.{n}")
            taken.add(face.id)
        kept.add(face.id)
        faces.append(face)
    return MeshSnapshot(snapshot.vertices, tuple(faces))


def round_mesh(
    snapshot: MeshSnapshot,
    radius: float,
    compute_normals: bool = False,
    config: Optional[RoundingConfig] = None,
) -> Tuple[MeshSnapshot, RoundingReport]:
    """Run every bevel phase over *snapshot* and return the rounded mesh."""
    config = config or DEFAULT_ROUNDING
    config.check()
    if radius <= 0.0:
        raise ValueError("radius must be > 0")
    if config.validate:
        check_radius(snapshot, radius)

    report = RoundingReport(
        radius=radius,
        vertices_before=len(snapshot.vertices),
        faces_before=len(snapshot.faces),
    )

    t0 = time.perf_counter()
    analysis = analyse_topology(snapshot, radius)
    t1 = time.perf_counter()
    inset = inset_faces(snapshot, analysis, compute_normals, config)
    t2 = time.perf_counter()
    strips = fillet_edges(inset, analysis, radius, compute_normals, config)
    t3 = time.perf_counter()
    rounded = fillet_corners(snapshot, analysis, strips, radius, compute_normals, config)
    rounded = resolve_face_ids(rounded, len(inset.faces))
    t4 = time.perf_counter()

    for name, dt in zip(PHASES, (t1 - t0, t2 - t1, t3 - t2, t4 - t3)):
        report.elapsed[name] = dt

    report.edges = len(analysis.edges)
    report.corners = sum(1 for vid in analysis.corners if strips.corner_rails.get(vid))
    report.cap_faces = len(inset.faces)
    report.fillet_faces = len(strips.faces) - len(inset.faces)
    report.corner_faces = len(rounded.faces) - len(strips.faces)
    report.vertices_after = len(rounded.vertices)
    report.faces_after = len(rounded.faces)

    logger.debug(
        "Rounded r=%g: %d -> %d vertices, %d -> %d faces",
        radius, report.vertices_before, report.vertices_after,
        report.faces_before, report.faces_after,
    )
    return rounded, report
