from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

import numpy as np

Vec3 = Tuple[float, float, float]
Color = Tuple[float, float, float]

DEFAULT_COLOR: Color = (1.0, 1.0, 1.0)
DEFAULT_NORMAL: Vec3 = (0.0, 0.0, 1.0)

FACE_TYPES = ("flat", "fillet", "corner")


def _as_triple(values: Sequence[float] | None) -> Optional[Tuple[float, float, float]]:
    if values is None:
        return None
    x, y, z = (float(v) for v in values)
    return (x, y, z)


@dataclass(frozen=True)
class Vertex:
    x: float
    y: float
    z: float
    normal: Optional[Vec3] = None
    color: Optional[Color] = None

    @classmethod
    def at(
        cls,
        position: Sequence[float],
        normal: Sequence[float] | None = None,
        color: Sequence[float] | None = None,
    ) -> "Vertex":
        x, y, z = _as_triple(position)
        return cls(x, y, z, _as_triple(normal), _as_triple(color))

    @property
    def position(self) -> np.ndarray:
        return np.array((self.x, self.y, self.z), dtype=float)

    def has_normal(self) -> bool:
        return self.normal is not None

    def has_color(self) -> bool:
        return self.color is not None


@dataclass(frozen=True)
class Face:
    """Convex polygon over vertex-arena indices.

    *vertex_ids* are wound counter-clockwise as seen from outside, so the
    cross product of consecutive edge directions points outward.
    """

    id: str
    vertex_ids: tuple[int, ...]
    face_type: str = "flat"

    def vertex_count(self) -> int:
        return len(self.vertex_ids)

    def directed_edges(self) -> list[tuple[int, int]]:
        n = len(self.vertex_ids)
        return [(self.vertex_ids[i], self.vertex_ids[(i + 1) % n]) for i in range(n)]


@dataclass(frozen=True)
class MeshSnapshot:
    """Immutable vertex arena plus faces, passed between bevel phases."""

    vertices: tuple[Vertex, ...]
    faces: tuple[Face, ...]

    def positions(self, face: Face) -> np.ndarray:
        return np.array([self.vertices[vid].position for vid in face.vertex_ids])


@dataclass
class GeometryBuffers:
    """Flat per-corner attribute buffers ready for a GPU upload."""

    positions: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.float32))
    colors: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.float32))
    normals: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.float32))

    @property
    def vertex_count(self) -> int:
        return len(self.positions) // 3

    @property
    def triangle_count(self) -> int:
        return self.vertex_count // 3
