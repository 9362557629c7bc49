"""Vector helper functions used across the package."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from scipy.spatial.transform import Rotation

from .models import Vertex


def normalize(vector: Sequence[float]) -> np.ndarray:
    """Unit vector along *vector*; the zero vector is returned unchanged."""
    v = np.asarray(vector, dtype=float)
    length = float(np.linalg.norm(v))
    if length == 0.0:
        return v.copy()
    return v / length


def angle_between(a: Sequence[float], b: Sequence[float]) -> float:
    """Angle in radians between two vectors (0 if either is zero)."""
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    denom = math.sqrt(float(np.dot(a, a)) * float(np.dot(b, b)))
    if denom == 0.0:
        return math.pi / 2
    cos_a = float(np.dot(a, b)) / denom
    return math.acos(max(-1.0, min(1.0, cos_a)))


def polygon_normal(positions: np.ndarray) -> np.ndarray:
    """Outward normal of a CCW polygon from its first three points."""
    p0, p1, p2 = positions[0], positions[1], positions[2]
    return normalize(np.cross(p1 - p0, p2 - p0))


def area_vector(positions: np.ndarray) -> np.ndarray:
    """Newell area vector: direction is the normal, length is the area.

    Unlike :func:`polygon_normal` this is robust to collinear leading
    points and to slightly non-planar quads.
    """
    rolled = np.roll(positions, -1, axis=0)
    return 0.5 * np.cross(positions, rolled).sum(axis=0)


def edge_directions(positions: np.ndarray) -> np.ndarray:
    """Unit direction of every edge ``i → i+1`` of a closed polygon."""
    rolled = np.roll(positions, -1, axis=0)
    deltas = rolled - positions
    lengths = np.linalg.norm(deltas, axis=1)
    lengths[lengths == 0.0] = 1.0
    return deltas / lengths[:, None]


def edge_lengths(positions: np.ndarray) -> np.ndarray:
    rolled = np.roll(positions, -1, axis=0)
    return np.linalg.norm(rolled - positions, axis=1)


def vertex_angle(positions: np.ndarray, index: int) -> float:
    """Interior angle at vertex *index* of a polygon, in radians."""
    n = len(positions)
    here = positions[index]
    to_prev = normalize(positions[(index - 1) % n] - here)
    to_next = normalize(positions[(index + 1) % n] - here)
    return angle_between(to_prev, to_next)


def rotate_about_axis(
    point: np.ndarray,
    center: np.ndarray,
    axis: np.ndarray,
    angle: float,
) -> np.ndarray:
    """Rotate *point* by *angle* (right hand rule) about the line through *center*."""
    rotation = Rotation.from_rotvec(normalize(axis) * angle)
    return rotation.apply(np.asarray(point, dtype=float) - center) + center


def rotate_vector(vector: np.ndarray, axis: np.ndarray, angle: float) -> np.ndarray:
    return Rotation.from_rotvec(normalize(axis) * angle).apply(np.asarray(vector, dtype=float))


def project_to_sphere(point: np.ndarray, center: np.ndarray, radius: float) -> np.ndarray:
    return center + normalize(point - center) * radius


def lerp_vertices(v0: Vertex, v1: Vertex, t: float) -> Vertex:
    """Interpolate position, colour and normal between two vertices.

    A colour or normal present on only one side is copied from that side.
    """
    position = v0.position + (v1.position - v0.position) * t

    if v0.color is not None and v1.color is not None:
        c0 = np.asarray(v0.color)
        color = c0 + (np.asarray(v1.color) - c0) * t
    else:
        color = v0.color if v0.color is not None else v1.color

    if v0.normal is not None and v1.normal is not None:
        n0 = np.asarray(v0.normal)
        normal = normalize(n0 + (np.asarray(v1.normal) - n0) * t)
    else:
        normal = v0.normal if v0.normal is not None else v1.normal

    return Vertex.at(position, normal, color)
