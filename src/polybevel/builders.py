"""Convex shape builders.

Every builder returns a :class:`Model` whose faces share vertex indices
along common edges and are wound counter-clockwise seen from outside,
which is what :meth:`Model.round` expects.
"""

from __future__ import annotations

import math
from itertools import combinations
from typing import List, Optional, Sequence

import numpy as np

from .models import Color, Vertex
from .model import Model


def _add_points(model: Model, points: Sequence[Sequence[float]], color: Optional[Color]) -> List[int]:
    return model.add_vertices(Vertex.at(p, color=color) for p in points)


def build_polygon(
    points: Sequence[Sequence[float]],
    color: Optional[Color] = None,
) -> Model:
    """A single open face over *points* (CCW seen from its front)."""
    model = Model(metadata={"shape": "polygon"})
    ids = _add_points(model, points, color)
    model.add_face(ids)
    return model


# Index i of a box corner encodes its octant: bit 0 -> +x, bit 1 -> +y, bit 2 -> +z.
_BOX_FACES = {
    "L": (0, 4, 6, 2),
    "R": (1, 3, 7, 5),
    "D": (0, 1, 5, 4),
    "U": (2, 6, 7, 3),
    "B": (0, 2, 3, 1),
    "F": (4, 5, 7, 6),
}


def build_box(
    size: float = 2.0,
    center: Sequence[float] = (0.0, 0.0, 0.0),
    color: Optional[Color] = None,
) -> Model:
    """Axis-aligned cube with faces named after the cube sides (L R D U B F)."""
    if size <= 0:
        raise ValueError("size must be > 0")
    h = size / 2.0
    cx, cy, cz = center
    corners = [
        (cx + (h if i & 1 else -h), cy + (h if i & 2 else -h), cz + (h if i & 4 else -h))
        for i in range(8)
    ]
    model = Model(metadata={"shape": "box", "size": size})
    ids = _add_points(model, corners, color)
    for name, quad in _BOX_FACES.items():
        model.add_face([ids[i] for i in quad], face_id=name)
    return model


def build_corner_piece(
    arm: float = 1.0,
    origin: Sequence[float] = (-1.0, -1.0, -1.0),
    color: Optional[Color] = (1.0, 0.5, 0.0),
    closed: bool = False,
) -> Model:
    """Three right-angled triangles around one cube corner.

    The corner sits at *origin* and the arms run along +x, +y and +z.
    With *closed* the slanted face joining the arm tips is added and the
    result is a trirectangular tetrahedron.
    """
    if arm <= 0:
        raise ValueError("arm must be > 0")
    o = np.asarray(origin, dtype=float)
    points = [o, o + (arm, 0, 0), o + (0, arm, 0), o + (0, 0, arm)]
    model = Model(metadata={"shape": "corner_piece", "arm": arm})
    p0, p1, p2, p3 = _add_points(model, points, color)
    model.add_face([p2, p1, p0])
    model.add_face([p3, p2, p0])
    model.add_face([p1, p3, p0])
    if closed:
        model.add_face([p1, p2, p3])
    return model


def build_tetrahedron(
    edge: float = 2.0,
    center: Sequence[float] = (0.0, 0.0, 0.0),
    color: Optional[Color] = None,
) -> Model:
    """Regular tetrahedron with the given edge length."""
    if edge <= 0:
        raise ValueError("edge must be > 0")
    scale = edge / (2.0 * math.sqrt(2.0))
    c = np.asarray(center, dtype=float)
    signs = [(1, 1, 1), (1, -1, -1), (-1, 1, -1), (-1, -1, 1)]
    points = [c + np.asarray(s, dtype=float) * scale for s in signs]
    model = Model(metadata={"shape": "tetrahedron", "edge": edge})
    ids = _add_points(model, points, color)
    for tri in combinations(range(4), 3):
        a, b, d = (points[i] for i in tri)
        normal = np.cross(b - a, d - a)
        if np.dot(normal, (a + b + d) / 3.0 - c) < 0:
            tri = (tri[0], tri[2], tri[1])
        model.add_face([ids[i] for i in tri])
    return model


def build_prism(
    sides: int = 6,
    radius: float = 1.0,
    height: float = 1.0,
    color: Optional[Color] = None,
) -> Model:
    """Right prism over a regular polygon, axis along z."""
    if sides < 3:
        raise ValueError("sides must be >= 3")
    if radius <= 0 or height <= 0:
        raise ValueError("radius and height must be > 0")
    ring = [
        (radius * math.cos(2 * math.pi * i / sides), radius * math.sin(2 * math.pi * i / sides))
        for i in range(sides)
    ]
    z = height / 2.0
    model = Model(metadata={"shape": "prism", "sides": sides})
    bottom = _add_points(model, [(x, y, -z) for x, y in ring], color)
    top = _add_points(model, [(x, y, z) for x, y in ring], color)

    model.add_face(list(reversed(bottom)), face_id="bottom")
    model.add_face(top, face_id="top")
    for i in range(sides):
        j = (i + 1) % sides
        model.add_face([bottom[i], bottom[j], top[j], top[i]], face_id=f"side{i}")
    return model
