"""Rigid and affine transforms of a :class:`Model`.

Each transform returns a new model; the source is left untouched.
Normals follow the inverse-transpose of the linear part, and a
transform with a negative determinant reverses every face so faces
stay wound outward.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

import numpy as np
from scipy.spatial.transform import Rotation

from .geometry import normalize
from .model import Model
from .models import Vertex


def apply_matrix(model: Model, matrix: Sequence[Sequence[float]]) -> Model:
    """Apply a 3x3 linear or 4x4 affine *matrix* to every vertex."""
    m = np.asarray(matrix, dtype=float)
    if m.shape == (4, 4):
        linear, offset = m[:3, :3], m[:3, 3]
    elif m.shape == (3, 3):
        linear, offset = m, np.zeros(3)
    else:
        raise ValueError(f"Expected a 3x3 or 4x4 matrix, got shape {m.shape}")

    det = float(np.linalg.det(linear))
    if det == 0.0:
        raise ValueError("Matrix is singular")
    normal_matrix = np.linalg.inv(linear).T

    vertices = []
    for v in model.vertices:
        normal = None
        if v.normal is not None:
            normal = normalize(normal_matrix @ np.asarray(v.normal))
        vertices.append(Vertex.at(linear @ v.position + offset, normal, v.color))

    faces = list(model.faces.values())
    if det < 0:
        faces = [replace(f, vertex_ids=tuple(reversed(f.vertex_ids))) for f in faces]
    return Model(vertices, faces, dict(model.metadata))


def translate_model(model: Model, offset: Sequence[float]) -> Model:
    m = np.eye(4)
    m[:3, 3] = offset
    return apply_matrix(model, m)


def scale_model(
    model: Model,
    factor: float,
    center: Optional[Sequence[float]] = None,
) -> Model:
    """Uniform scale about *center* (origin by default)."""
    if factor == 0:
        raise ValueError("factor must be non-zero")
    c = np.zeros(3) if center is None else np.asarray(center, dtype=float)
    m = np.eye(4)
    m[:3, :3] *= factor
    m[:3, 3] = c - factor * c
    return apply_matrix(model, m)


def rotate_model(
    model: Model,
    axis: Sequence[float],
    angle: float,
    center: Optional[Sequence[float]] = None,
) -> Model:
    """Rotate by *angle* radians about *axis* through *center* (right hand rule)."""
    unit = normalize(axis)
    if not unit.any():
        raise ValueError("axis must be non-zero")
    c = np.zeros(3) if center is None else np.asarray(center, dtype=float)
    rot = Rotation.from_rotvec(unit * angle).as_matrix()
    m = np.eye(4)
    m[:3, :3] = rot
    m[:3, 3] = c - rot @ c
    return apply_matrix(model, m)
