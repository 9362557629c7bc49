from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from .bevel import RoundingReport, round_mesh
from .config import DEFAULT_ROUNDING, RoundingConfig
from .errors import InvalidFaceError
from .geometry import edge_directions, edge_lengths, normalize, polygon_normal, vertex_angle
from .models import (
    DEFAULT_COLOR,
    DEFAULT_NORMAL,
    FACE_TYPES,
    Color,
    Face,
    GeometryBuffers,
    MeshSnapshot,
    Vec3,
    Vertex,
)

logger = logging.getLogger(__name__)


class Model:
    """Vertex arena plus convex faces over it.

    Vertices are addressed by their index in :attr:`vertices`; two faces
    share an edge when they reference the same two indices in opposite
    order.  Faces are kept in insertion order, keyed by id.
    """

    VERSION = "1.0"

    def __init__(
        self,
        vertices: Iterable[Vertex] = (),
        faces: Iterable[Face] = (),
        metadata: Optional[dict] = None,
    ) -> None:
        self.vertices: List[Vertex] = list(vertices)
        self.faces: Dict[str, Face] = {f.id: f for f in faces}
        self.metadata = metadata or {}

    def __repr__(self) -> str:
        return f"Model(vertices={len(self.vertices)}, faces={len(self.faces)})"

    # ── Construction ────────────────────────────────────────────────

    def add_vertex(self, vertex: Vertex) -> int:
        self.vertices.append(vertex)
        return len(self.vertices) - 1

    def add_vertices(self, vertices: Iterable[Vertex]) -> List[int]:
        return [self.add_vertex(v) for v in vertices]

    def add_face(
        self,
        vertex_ids: Sequence[int],
        *,
        face_id: Optional[str] = None,
        face_type: str = "flat",
        validate: bool = True,
        tolerance: float = DEFAULT_ROUNDING.planarity_tolerance,
    ) -> Face:
        """Register a face over existing vertex indices.

        The polygon must be convex, planar and wound counter-clockwise
        as seen from outside.  Raises :class:`InvalidFaceError` otherwise
        (unless *validate* is False).
        """
        if face_id is None:
            face_id = self._next_face_id()
        elif face_id in self.faces:
            raise InvalidFaceError(f"Face {face_id} already exists")

        if face_type not in FACE_TYPES:
            raise InvalidFaceError(f"Unknown face type {face_type!r}")
        face = Face(face_id, tuple(int(vid) for vid in vertex_ids), face_type)
        if validate:
            problems = self._face_problems(face, geometric=True, tolerance=tolerance)
            if problems:
                logger.warning("Rejected face %s: %s", face_id, problems[0])
                raise InvalidFaceError(problems[0])
        self.faces[face.id] = face
        return face

    def _next_face_id(self) -> str:
        n = len(self.faces)
        while f"f{n}" in self.faces:
            n += 1
        return f"f{n}"

    def remove_unused_vertices(self) -> int:
        """Drop vertices no face references; returns how many were removed."""
        used = sorted({vid for face in self.faces.values() for vid in face.vertex_ids})
        remap = {old: new for new, old in enumerate(used)}
        removed = len(self.vertices) - len(used)
        self.vertices = [self.vertices[old] for old in used]
        self.faces = {
            fid: replace(face, vertex_ids=tuple(remap[vid] for vid in face.vertex_ids))
            for fid, face in self.faces.items()
        }
        return removed

    # ── Queries ─────────────────────────────────────────────────────

    def snapshot(self) -> MeshSnapshot:
        return MeshSnapshot(tuple(self.vertices), tuple(self.faces.values()))

    def face_positions(self, face_id: str) -> np.ndarray:
        face = self.faces[face_id]
        return np.array([self.vertices[vid].position for vid in face.vertex_ids])

    def face_normal(self, face_id: str) -> np.ndarray:
        return polygon_normal(self.face_positions(face_id))

    def edge_lengths(self) -> np.ndarray:
        """Length of every face edge (shared edges appear once per face)."""
        if not self.faces:
            return np.zeros(0)
        return np.concatenate([edge_lengths(self.face_positions(fid)) for fid in self.faces])

    def faces_of_type(self, face_type: str) -> List[Face]:
        return [f for f in self.faces.values() if f.face_type == face_type]

    def validate(self, strict: bool = False) -> list[str]:
        errors: list[str] = []
        for face in self.faces.values():
            errors.extend(self._face_problems(face, geometric=strict))
        return errors

    def _face_problems(
        self,
        face: Face,
        geometric: bool,
        tolerance: float = DEFAULT_ROUNDING.planarity_tolerance,
    ) -> list[str]:
        ids = face.vertex_ids
        if len(ids) < 3:
            return [f"Face {face.id} has {len(ids)} vertices, needs at least 3"]
        errors: list[str] = []
        if len(set(ids)) != len(ids):
            errors.append(f"Face {face.id} has repeated vertex ids")
        missing = [vid for vid in ids if not 0 <= vid < len(self.vertices)]
        for vid in missing:
            errors.append(f"Face {face.id} references missing vertex {vid}")
        if errors or not geometric:
            return errors

        positions = np.array([self.vertices[vid].position for vid in ids])
        scale = float(edge_lengths(positions).max())
        raw = np.cross(positions[1] - positions[0], positions[2] - positions[0])
        if scale == 0.0 or float(np.linalg.norm(raw)) <= tolerance * scale * scale:
            return [f"Face {face.id} is degenerate: its first three vertices are collinear"]
        normal = normalize(raw)

        offsets = np.abs((positions - positions[0]) @ normal)
        if float(offsets.max()) > tolerance * scale:
            errors.append(f"Face {face.id} is not planar")

        directions = edge_directions(positions)
        turns = np.cross(np.roll(directions, 1, axis=0), directions) @ normal
        if float(turns.min()) < -tolerance:
            errors.append(f"Face {face.id} is not convex")
        return errors

    # ── Normals and export ──────────────────────────────────────────

    def compute_normals(self) -> None:
        """Set every referenced vertex normal to the angle-weighted face normal average."""
        totals: Dict[int, np.ndarray] = {}
        for face in self.faces.values():
            positions = self.face_positions(face.id)
            normal = polygon_normal(positions)
            for i, vid in enumerate(face.vertex_ids):
                weighted = normal * vertex_angle(positions, i)
                totals[vid] = totals[vid] + weighted if vid in totals else weighted
        for vid, total in totals.items():
            self.vertices[vid] = replace(
                self.vertices[vid], normal=tuple(float(c) for c in normalize(total)),
            )

    def to_geometry(
        self,
        *,
        default_color: Color = DEFAULT_COLOR,
        default_normal: Vec3 = DEFAULT_NORMAL,
    ) -> GeometryBuffers:
        """Fan-triangulate every face into flat position/colour/normal buffers."""
        positions: list[float] = []
        colors: list[float] = []
        normals: list[float] = []
        for face in self.faces.values():
            ids = face.vertex_ids
            for i in range(2, len(ids)):
                for idx in (0, i - 1, i):
                    vertex = self.vertices[ids[idx]]
                    positions.extend((vertex.x, vertex.y, vertex.z))
                    colors.extend(vertex.color if vertex.color is not None else default_color)
                    normals.extend(vertex.normal if vertex.normal is not None else default_normal)
        return GeometryBuffers(
            np.array(positions, dtype=np.float32),
            np.array(colors, dtype=np.float32),
            np.array(normals, dtype=np.float32),
        )

    # ── Rounding ────────────────────────────────────────────────────

    def round(
        self,
        radius: float,
        compute_normals: bool = False,
        *,
        config: Optional[RoundingConfig] = None,
    ) -> RoundingReport:
        """Bevel every edge and corner by *radius*, in place.

        Cap faces keep their ids; fillet and corner faces are added.
        The vertex arena is replaced by the rounded one.
        """
        rounded, report = round_mesh(self.snapshot(), radius, compute_normals, config)
        self.vertices = list(rounded.vertices)
        self.faces = {face.id: face for face in rounded.faces}
        return report

    def copy(self) -> "Model":
        return Model(self.vertices, self.faces.values(), dict(self.metadata))

    # ── Serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        vertices_payload = []
        for index, vertex in enumerate(self.vertices):
            payload = {"id": index, "position": [vertex.x, vertex.y, vertex.z]}
            if vertex.has_normal():
                payload["normal"] = list(vertex.normal)
            if vertex.has_color():
                payload["color"] = list(vertex.color)
            vertices_payload.append(payload)

        faces_payload = [
            {"id": face.id, "type": face.face_type, "vertices": list(face.vertex_ids)}
            for face in self.faces.values()
        ]

        return {
            "version": self.VERSION,
            "metadata": self.metadata,
            "vertices": vertices_payload,
            "faces": faces_payload,
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "Model":
        vertices = [
            Vertex.at(vertex["position"], vertex.get("normal"), vertex.get("color"))
            for vertex in sorted(payload.get("vertices", []), key=lambda v: v["id"])
        ]
        faces = [
            Face(
                id=face["id"],
                vertex_ids=tuple(face["vertices"]),
                face_type=face.get("type", "flat"),
            )
            for face in payload.get("faces", [])
        ]
        return cls(vertices, faces, payload.get("metadata", {}))

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, json_data: str) -> "Model":
        return cls.from_dict(json.loads(json_data))
