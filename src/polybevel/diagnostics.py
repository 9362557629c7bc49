from __future__ import annotations

from collections import Counter
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .geometry import area_vector
from .model import Model

EdgeKey = Tuple[int, int]


def directed_edge_counts(model: Model) -> Dict[EdgeKey, int]:
    counts: Counter = Counter()
    for face in model.faces.values():
        counts.update(face.directed_edges())
    return dict(counts)


def edge_use_counts(model: Model) -> Dict[EdgeKey, int]:
    """How many faces use each undirected edge (keyed low index first)."""
    counts: Counter = Counter()
    for face in model.faces.values():
        counts.update(tuple(sorted(edge)) for edge in face.directed_edges())
    return dict(counts)


def boundary_edges(model: Model) -> List[EdgeKey]:
    return sorted(edge for edge, n in edge_use_counts(model).items() if n == 1)


def non_manifold_edges(model: Model) -> List[EdgeKey]:
    return sorted(edge for edge, n in edge_use_counts(model).items() if n > 2)


def inconsistent_edges(model: Model) -> List[EdgeKey]:
    """Directed edges walked by more than one face."""
    return sorted(edge for edge, n in directed_edge_counts(model).items() if n > 1)


def is_closed(model: Model) -> bool:
    return not (boundary_edges(model) or non_manifold_edges(model) or inconsistent_edges(model))


def euler_characteristic(model: Model) -> int:
    """V - E + F over the vertices the faces actually reference."""
    used = {vid for face in model.faces.values() for vid in face.vertex_ids}
    return len(used) - len(edge_use_counts(model)) + len(model.faces)


def face_area_vector(model: Model, face_id: str) -> np.ndarray:
    return area_vector(model.face_positions(face_id))


def min_face_area(model: Model) -> float:
    areas = [float(np.linalg.norm(face_area_vector(model, fid))) for fid in model.faces]
    return min(areas) if areas else 0.0


def inward_faces(model: Model, center: Optional[Sequence[float]] = None) -> List[str]:
    """Faces whose normal points back toward *center*.

    Meaningful for shapes that are star-shaped around *center*, which
    defaults to the mean of the referenced vertices.
    """
    if center is None:
        used = sorted({vid for face in model.faces.values() for vid in face.vertex_ids})
        if not used:
            return []
        c = np.mean([model.vertices[vid].position for vid in used], axis=0)
    else:
        c = np.asarray(center, dtype=float)

    offenders: List[str] = []
    for fid in model.faces:
        positions = model.face_positions(fid)
        if float(np.dot(area_vector(positions), positions.mean(axis=0) - c)) <= 0.0:
            offenders.append(fid)
    return offenders


def diagnostics_report(model: Model) -> dict:
    """Summary of mesh health, JSON-serialisable."""
    by_type = Counter(face.face_type for face in model.faces.values())
    return {
        "vertices": len(model.vertices),
        "faces": len(model.faces),
        "faces_by_type": dict(sorted(by_type.items())),
        "edges": len(edge_use_counts(model)),
        "euler_characteristic": euler_characteristic(model),
        "boundary_edges": len(boundary_edges(model)),
        "non_manifold_edges": len(non_manifold_edges(model)),
        "inconsistent_edges": len(inconsistent_edges(model)),
        "closed": is_closed(model),
        "min_face_area": min_face_area(model),
    }
